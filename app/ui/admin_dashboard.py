from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from app.clients.site import SiteClient, SiteClientError
from app.ui.notifications import Notifier

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/admin/login"
HOME_ROUTE = "/"

STATUS_LABELS = {
    "pending": "Pending",
    "in-progress": "In Progress",
    "preview-sent": "Preview Sent",
    "completed": "Completed",
    "cancelled": "Cancelled",
}

GOAL_LABELS = {
    "personal": "Personal Website / Landing Page",
    "ecommerce": "Ecommerce / Online Store",
    "ai-tool": "AI Automation Tool",
}


def status_label(status: str) -> str:
    # unknown values fall back to the first option, as the badge does
    return STATUS_LABELS.get(status, STATUS_LABELS["pending"])


def goal_text(order: Dict[str, Any]) -> str:
    goal = order.get("website_goal") or ""
    if goal == "other" and order.get("website_goal_other"):
        return order["website_goal_other"]
    return GOAL_LABELS.get(goal, goal)


@dataclass(frozen=True)
class DashboardStats:
    total_orders: int
    pending_orders: int
    in_progress_orders: int
    completed_orders: int
    total_reviews: int


class AdminDashboard:
    """Operator view over every order and review.

    Counters are computed from whatever was last loaded. Order writes carry
    the version they were read at; a rejected write puts the last confirmed
    row back on screen.
    """

    def __init__(self, client: SiteClient, *, notifier: Notifier | None = None) -> None:
        self._client = client
        self.notifier = notifier or Notifier()

        self.orders: List[Dict[str, Any]] = []
        self.reviews: List[Dict[str, Any]] = []
        self.is_loading_orders = True
        self.is_loading_reviews = True

        self.editing_notes: Optional[int] = None
        self.notes_value = ""
        self.saving_id: Optional[int] = None

        self.redirect_to: Optional[str] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def mount(self) -> bool:
        self.unmount()
        self._unsubscribe = self._client.on_auth_state_change(self._on_auth_state_change)
        try:
            session = self._client.get_session()
        except SiteClientError as exc:
            logger.error("Session check failed: %s", exc)
            session = None

        if not session:
            self.redirect_to = LOGIN_ROUTE
            return False

        self.refresh()
        return True

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_auth_state_change(self, session: Optional[Dict[str, Any]]) -> None:
        if not session:
            # unsaved notes are dropped without warning
            self.editing_notes = None
            self.notes_value = ""
            self.redirect_to = LOGIN_ROUTE

    def logout(self) -> None:
        self.unmount()
        try:
            self._client.sign_out()
        except SiteClientError as exc:
            logger.warning("Sign-out request failed: %s", exc)
        self.redirect_to = HOME_ROUTE

    # ------------------------------------------------------------------
    # loading
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self.fetch_orders()
        self.fetch_reviews()

    def fetch_orders(self) -> None:
        self.is_loading_orders = True
        try:
            self.orders = self._client.list_orders()
        except SiteClientError as exc:
            logger.error("Error fetching orders: %s", exc)
            self.notifier.error("Error loading orders", str(exc))
        finally:
            self.is_loading_orders = False

    def fetch_reviews(self) -> None:
        self.is_loading_reviews = True
        try:
            self.reviews = self._client.list_reviews()
        except SiteClientError as exc:
            logger.error("Error fetching reviews: %s", exc)
            self.notifier.error("Error loading reviews", str(exc))
        finally:
            self.is_loading_reviews = False

    @property
    def stats(self) -> DashboardStats:
        return DashboardStats(
            total_orders=len(self.orders),
            pending_orders=sum(1 for o in self.orders if o["status"] == "pending"),
            in_progress_orders=sum(1 for o in self.orders if o["status"] == "in-progress"),
            completed_orders=sum(1 for o in self.orders if o["status"] == "completed"),
            total_reviews=len(self.reviews),
        )

    # ------------------------------------------------------------------
    # orders
    # ------------------------------------------------------------------
    def _find_order(self, order_id: int, failure_title: str) -> Optional[Dict[str, Any]]:
        for order in self.orders:
            if order["id"] == order_id:
                return order
        # deleted elsewhere since the last load
        self.notifier.error(failure_title, "Order not found")
        return None

    def _replace_order(self, row: Dict[str, Any]) -> None:
        self.orders = [row if o["id"] == row["id"] else o for o in self.orders]

    def update_status(self, order_id: int, status: str) -> bool:
        confirmed = self._find_order(order_id, "Update failed")
        if confirmed is None:
            return False
        # show the new value right away, keep the confirmed row for rollback
        self._replace_order({**confirmed, "status": status})
        self.saving_id = order_id
        try:
            row = self._client.update_order_status(order_id, status, confirmed["version"])
        except SiteClientError as exc:
            self._replace_order(confirmed)
            self.notifier.error("Update failed", str(exc))
            return False
        finally:
            self.saving_id = None

        self._replace_order(row)
        self.notifier.success("Status updated", f"Order marked as {status}")
        return True

    def start_editing_notes(self, order_id: int) -> bool:
        order = self._find_order(order_id, "Edit failed")
        if order is None:
            return False
        self.editing_notes = order_id
        self.notes_value = order.get("admin_notes") or ""
        return True

    def cancel_editing_notes(self) -> None:
        self.editing_notes = None
        self.notes_value = ""

    def save_notes(self, order_id: int) -> bool:
        order = self._find_order(order_id, "Save failed")
        if order is None:
            return False
        self.saving_id = order_id
        try:
            row = self._client.update_order_notes(order_id, self.notes_value, order["version"])
        except SiteClientError as exc:
            self.notifier.error("Save failed", str(exc))
            return False
        finally:
            self.saving_id = None

        self._replace_order(row)
        self.editing_notes = None
        self.notifier.success("Notes saved")
        return True

    def delete_order(self, order_id: int, *, confirmed: bool = False) -> bool:
        if not confirmed:
            return False
        try:
            self._client.delete_order(order_id)
        except SiteClientError as exc:
            self.notifier.error("Delete failed", str(exc))
            return False
        self.orders = [o for o in self.orders if o["id"] != order_id]
        self.notifier.success("Order deleted")
        return True

    # ------------------------------------------------------------------
    # reviews
    # ------------------------------------------------------------------
    def delete_review(self, review_id: int, *, confirmed: bool = False) -> bool:
        if not confirmed:
            return False
        try:
            self._client.delete_review(review_id)
        except SiteClientError as exc:
            self.notifier.error("Delete failed", str(exc))
            return False
        self.reviews = [r for r in self.reviews if r["id"] != review_id]
        self.notifier.success("Review deleted")
        return True
