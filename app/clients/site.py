from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

AuthListener = Callable[[Optional[Dict[str, Any]]], None]


class SiteClientError(Exception):
    """Raised when the site API answers with an error or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None, *, cause: Exception | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        message = body.get("error") or body.get("detail")
        if isinstance(message, str):
            return message
        if message is not None:
            return str(message)
    return f"HTTP {response.status_code}"


class SiteClient:
    """Synchronous client for the site API used by the front-end controllers.

    Wraps any ``httpx.Client`` (FastAPI's ``TestClient`` included). Keeps the
    admin bearer token after sign-in and tells subscribers whenever the session
    appears or disappears.
    """

    def __init__(self, http: httpx.Client, *, token: str | None = None) -> None:
        self._http = http
        self._token = token
        self._listeners: List[AuthListener] = []

    # ------------------------------------------------------------------
    # plumbing
    # ------------------------------------------------------------------
    @property
    def token(self) -> str | None:
        return self._token

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"} if self._token else {}

    def _request(self, method: str, path: str, *, auth: bool = False, **kwargs: Any) -> Any:
        headers = self._auth_headers() if auth else {}
        try:
            response = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.RequestError as exc:
            logger.exception("Unable to reach site API: %s", exc)
            raise SiteClientError("Unable to reach the server", cause=exc) from exc

        if response.status_code == 401 and auth:
            self._drop_session()
        if response.is_error:
            raise SiteClientError(_error_message(response), status_code=response.status_code)
        return response.json()

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, session: Optional[Dict[str, Any]]) -> None:
        for listener in list(self._listeners):
            listener(session)

    def _drop_session(self) -> None:
        had_token = self._token is not None
        self._token = None
        if had_token:
            self._emit(None)

    # ------------------------------------------------------------------
    # auth
    # ------------------------------------------------------------------
    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self._token = data["access_token"]
        self._emit(data)
        return data

    def sign_out(self) -> None:
        if self._token is None:
            return
        try:
            self._request("POST", "/api/auth/logout", auth=True)
        finally:
            self._drop_session()

    def get_session(self) -> Optional[Dict[str, Any]]:
        if self._token is None:
            return None
        try:
            return self._request("GET", "/api/auth/session", auth=True)
        except SiteClientError as exc:
            if exc.status_code == 401:
                return None
            raise

    # ------------------------------------------------------------------
    # visitor endpoints
    # ------------------------------------------------------------------
    def generate_review(self, fields: Dict[str, str]) -> str:
        data = self._request("POST", "/functions/generate-review", json=fields)
        review = data.get("review") if isinstance(data, dict) else None
        if not review:
            raise SiteClientError("No review returned")
        return review

    def publish_review(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/reviews", json=payload)

    def list_testimonials(self, limit: int | None = None) -> List[Dict[str, Any]]:
        params = {"limit": limit} if limit else None
        return self._request("GET", "/api/reviews/testimonials", params=params)

    # ------------------------------------------------------------------
    # admin endpoints
    # ------------------------------------------------------------------
    def list_orders(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/admin/orders", auth=True)

    def update_order_status(self, order_id: int, status: str, version: int) -> Dict[str, Any]:
        return self._request(
            "PUT", f"/api/admin/orders/{order_id}/status", auth=True,
            json={"status": status, "version": version},
        )

    def update_order_notes(self, order_id: int, notes: str | None, version: int) -> Dict[str, Any]:
        return self._request(
            "PUT", f"/api/admin/orders/{order_id}/notes", auth=True,
            json={"admin_notes": notes, "version": version},
        )

    def delete_order(self, order_id: int) -> None:
        self._request("DELETE", f"/api/admin/orders/{order_id}", auth=True)

    def list_reviews(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/admin/reviews", auth=True)

    def approve_review(self, review_id: int) -> Dict[str, Any]:
        return self._request("PUT", f"/api/admin/reviews/{review_id}/approve", auth=True)

    def delete_review(self, review_id: int) -> None:
        self._request("DELETE", f"/api/admin/reviews/{review_id}", auth=True)
