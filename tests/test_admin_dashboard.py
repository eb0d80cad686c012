from app.clients.site import SiteClient
from app.db.models.order import Order
from app.ui.admin_dashboard import AdminDashboard, goal_text, status_label

from fixtures import seed_reviews


def test_mount_without_session_redirects_to_login(site):
    dashboard = AdminDashboard(site)

    assert dashboard.mount() is False
    assert dashboard.redirect_to == "/admin/login"
    assert dashboard.orders == []


def test_mount_loads_orders_reviews_and_stats(admin_site, make_order, db):
    make_order(status="pending")
    make_order(status="pending")
    make_order(status="in-progress")
    make_order(status="completed")
    seed_reviews(db)

    dashboard = AdminDashboard(admin_site)
    assert dashboard.mount() is True

    assert dashboard.redirect_to is None
    assert dashboard.is_loading_orders is False
    assert dashboard.is_loading_reviews is False
    stats = dashboard.stats
    assert stats.total_orders == 4
    assert stats.pending_orders == 2
    assert stats.in_progress_orders == 1
    assert stats.completed_orders == 1
    assert stats.total_reviews == 3


def test_status_update_is_confirmed_by_server(admin_site, make_order, db):
    order_id = make_order().id
    dashboard = AdminDashboard(admin_site)
    dashboard.mount()

    assert dashboard.update_status(order_id, "completed") is True

    row = dashboard.orders[0]
    assert row["status"] == "completed"
    assert row["version"] == 2
    assert dashboard.saving_id is None
    assert dashboard.stats.completed_orders == 1
    assert dashboard.notifier.last.description == "Order marked as completed"


def test_failed_status_update_reverts_to_persisted_value(admin_site, make_order, db):
    order_id = make_order().id
    dashboard = AdminDashboard(admin_site)
    dashboard.mount()

    # another admin session changes the row after we loaded it
    stored = db.get(Order, order_id)
    stored.status = "in-progress"
    db.commit()

    assert dashboard.update_status(order_id, "cancelled") is False

    db.expire_all()
    persisted = db.get(Order, order_id).status
    assert persisted == "in-progress"
    # the screen shows the last confirmed value, not the unconfirmed one
    assert dashboard.orders[0]["status"] == "pending"
    assert dashboard.notifier.last.title == "Update failed"
    assert dashboard.notifier.last.description == "Order was modified by another session"

    dashboard.refresh()
    assert dashboard.orders[0]["status"] == persisted


def test_notes_are_only_written_on_save(admin_site, make_order, db):
    order_id = make_order(admin_notes="first call done").id
    dashboard = AdminDashboard(admin_site)
    dashboard.mount()

    dashboard.start_editing_notes(order_id)
    assert dashboard.notes_value == "first call done"
    dashboard.notes_value = "scrapped"
    dashboard.cancel_editing_notes()
    db.expire_all()
    assert db.get(Order, order_id).admin_notes == "first call done"

    dashboard.start_editing_notes(order_id)
    dashboard.notes_value = "sent preview link"
    assert dashboard.save_notes(order_id) is True

    assert dashboard.editing_notes is None
    assert dashboard.orders[0]["admin_notes"] == "sent preview link"
    db.expire_all()
    assert db.get(Order, order_id).admin_notes == "sent preview link"


def test_save_notes_after_status_change_uses_fresh_version(admin_site, make_order):
    order_id = make_order().id
    dashboard = AdminDashboard(admin_site)
    dashboard.mount()

    dashboard.update_status(order_id, "in-progress")
    dashboard.start_editing_notes(order_id)
    dashboard.notes_value = "kickoff booked"

    assert dashboard.save_notes(order_id) is True
    assert dashboard.orders[0]["version"] == 3


def test_delete_requires_confirmation_and_updates_counters(admin_site, make_order, db):
    keep = make_order(status="pending").id
    drop = make_order(status="pending").id
    review_ids = [r.id for r in seed_reviews(db)]
    dashboard = AdminDashboard(admin_site)
    dashboard.mount()

    assert dashboard.delete_order(drop) is False
    assert dashboard.stats.total_orders == 2

    assert dashboard.delete_order(drop, confirmed=True) is True
    assert dashboard.delete_review(review_ids[0], confirmed=True) is True

    assert [o["id"] for o in dashboard.orders] == [keep]
    assert dashboard.stats.total_orders == 1
    assert dashboard.stats.pending_orders == 1
    assert dashboard.stats.total_reviews == 2

    dashboard.refresh()
    assert [o["id"] for o in dashboard.orders] == [keep]
    assert review_ids[0] not in [r["id"] for r in dashboard.reviews]


def test_delete_failure_keeps_row(admin_site, make_order):
    order_id = make_order().id
    dashboard = AdminDashboard(admin_site)
    dashboard.mount()
    admin_site.delete_order(order_id)

    assert dashboard.delete_order(order_id, confirmed=True) is False
    assert dashboard.notifier.last.title == "Delete failed"
    assert dashboard.notifier.last.description == "Order not found"
    assert len(dashboard.orders) == 1


def test_losing_the_session_redirects_and_drops_unsaved_notes(client, admin_site, make_order):
    order_id = make_order().id
    dashboard = AdminDashboard(admin_site)
    dashboard.mount()
    dashboard.start_editing_notes(order_id)
    dashboard.notes_value = "half written"

    # session revoked elsewhere; the next call comes back 401
    client.post("/api/auth/logout", headers={"Authorization": f"Bearer {admin_site.token}"})
    dashboard.refresh()

    assert dashboard.redirect_to == "/admin/login"
    assert dashboard.editing_notes is None
    assert dashboard.notes_value == ""
    assert admin_site.token is None


def test_logout_goes_home(admin_site):
    dashboard = AdminDashboard(admin_site)
    dashboard.mount()

    dashboard.logout()

    assert dashboard.redirect_to == "/"
    assert admin_site.token is None


def test_load_errors_are_reported_per_list(client, admin_user):
    site = SiteClient(client, token="bogus")
    dashboard = AdminDashboard(site)

    dashboard.fetch_orders()

    assert dashboard.is_loading_orders is False
    assert dashboard.notifier.last.title == "Error loading orders"


def test_label_helpers():
    assert status_label("preview-sent") == "Preview Sent"
    assert status_label("mystery") == "Pending"
    assert goal_text({"website_goal": "ai-tool"}) == "AI Automation Tool"
    assert goal_text({"website_goal": "other", "website_goal_other": "Booking portal"}) == "Booking portal"
    assert goal_text({"website_goal": "blog"}) == "blog"


def test_actions_on_an_order_deleted_elsewhere_report_an_error(admin_site, make_order):
    order_id = make_order().id
    dashboard = AdminDashboard(admin_site)
    dashboard.mount()
    admin_site.delete_order(order_id)
    dashboard.refresh()

    assert dashboard.update_status(order_id, "completed") is False
    assert dashboard.notifier.last.title == "Update failed"
    assert dashboard.notifier.last.description == "Order not found"

    assert dashboard.start_editing_notes(order_id) is False
    assert dashboard.editing_notes is None
    assert dashboard.notifier.last.title == "Edit failed"

    assert dashboard.save_notes(order_id) is False
    assert dashboard.notifier.last.title == "Save failed"
    assert dashboard.saving_id is None


def test_mounting_twice_keeps_a_single_auth_listener(admin_site):
    dashboard = AdminDashboard(admin_site)
    calls = []
    dashboard._on_auth_state_change = calls.append

    dashboard.mount()
    dashboard.mount()
    admin_site.sign_out()

    assert calls == [None]
