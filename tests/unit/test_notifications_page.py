"""NotificationsPage: load, filters, and gateway-backed mutations."""

import pytest

from mrcars_admin.application.use_cases import NotificationsPage
from mrcars_admin.domain.enums import NotificationFilter, NotificationPriority, NotificationType, OutcomeLevel
from mrcars_admin.domain.exceptions import StoreException
from tests.fakes import FakeStore


def _row(nid: str, read: bool, created_at: str, type_: str = "order", **data) -> dict:
    return {
        "id": nid,
        "title": f"Title {nid}",
        "message": f"Message {nid}",
        "type": type_,
        "read": read,
        "data": data or None,
        "created_at": created_at,
    }


@pytest.fixture
def store() -> FakeStore:
    return FakeStore(
        {
            "notifications": [
                _row("n1", False, "2025-03-01T00:00:00Z", "inquiry", priority="high", related_id=42),
                _row("n2", True, "2025-03-02T00:00:00Z", "promotion"),
                _row("n3", False, "2025-03-03T00:00:00Z"),
            ]
        }
    )


@pytest.fixture
async def page(store: FakeStore) -> NotificationsPage:
    page = NotificationsPage(store)
    await page.load()
    return page


async def test_load_orders_newest_first_and_maps_rows(page: NotificationsPage) -> None:
    assert [n.id for n in page.notifications] == ["n3", "n2", "n1"]
    n1 = page.notifications[2]
    assert n1.type is NotificationType.INQUIRY
    assert n1.priority is NotificationPriority.HIGH
    assert n1.related_id == "42"
    assert n1.action_url == "/dashboard/inquiries"


async def test_unknown_type_maps_to_system(page: NotificationsPage) -> None:
    n2 = page.notifications[1]
    assert n2.type is NotificationType.SYSTEM
    assert n2.priority is NotificationPriority.MEDIUM
    assert n2.action_url == "/dashboard/settings"


async def test_load_respects_limit(store: FakeStore) -> None:
    page = NotificationsPage(store, limit=2)
    await page.load()
    assert [n.id for n in page.notifications] == ["n3", "n2"]


async def test_load_failure_leaves_empty_list_with_error(store: FakeStore) -> None:
    store.fail_on = lambda q: True
    page = NotificationsPage(store)
    state = await page.load()
    assert page.notifications == ()
    assert state.error == "notifications unavailable"


async def test_load_for_write_raises_on_failed_load(store: FakeStore) -> None:
    store.fail_on = lambda q: True
    page = NotificationsPage(store)
    with pytest.raises(StoreException) as exc_info:
        await page.load_for_write()
    assert exc_info.value.details == {"collection": "notifications"}
    assert page.state.error is not None


async def test_load_for_write_returns_loaded_state(store: FakeStore) -> None:
    page = NotificationsPage(store)
    state = await page.load_for_write()
    assert state.error is None
    assert len(page.notifications) == 3


async def test_filters_and_unread_count(page: NotificationsPage) -> None:
    assert [n.id for n in page.visible(NotificationFilter.UNREAD)] == ["n3", "n1"]
    assert [n.id for n in page.visible(NotificationFilter.READ)] == ["n2"]
    assert len(page.visible()) == 3
    assert page.unread_count() == 2


async def test_mark_read_writes_then_patches(page: NotificationsPage, store: FakeStore) -> None:
    outcome = await page.mark_read("n1")
    assert outcome.level is OutcomeLevel.SUCCESS
    assert outcome.message == "Notification marked as read"
    assert store.writes[0][:3] == ("update", "notifications", {"read": True})
    assert page.unread_count() == 1
    assert next(n for n in page.notifications if n.id == "n1").is_read


async def test_mark_read_failure_leaves_state_untouched(page: NotificationsPage, store: FakeStore) -> None:
    store.fail_writes = "permission denied"
    before = page.state
    outcome = await page.mark_read("n1")
    assert outcome.level is OutcomeLevel.ERROR
    assert outcome.message == "Failed to mark notification as read"
    assert outcome.reason == "permission denied"
    assert not outcome.ok
    assert page.state is before


async def test_mark_all_read_targets_only_unread_ids(page: NotificationsPage, store: FakeStore) -> None:
    outcome = await page.mark_all_read()
    assert outcome.message == "All notifications marked as read"
    kind, collection, values, filters = store.writes[0]
    assert (kind, collection, values) == ("update", "notifications", {"read": True})
    assert filters[0].op == "in"
    assert set(filters[0].value) == {"n1", "n3"}
    assert page.unread_count() == 0


async def test_mark_all_read_with_nothing_unread_is_info(page: NotificationsPage, store: FakeStore) -> None:
    await page.mark_all_read()
    store.writes.clear()
    outcome = await page.mark_all_read()
    assert outcome.level is OutcomeLevel.INFO
    assert outcome.message == "No unread notifications to mark"
    assert outcome.ok
    assert store.writes == []


async def test_delete_removes_record(page: NotificationsPage, store: FakeStore) -> None:
    outcome = await page.delete("n2")
    assert outcome.message == "Notification deleted"
    assert [n.id for n in page.notifications] == ["n3", "n1"]
    assert [r["id"] for r in store.tables["notifications"]] == ["n1", "n3"]


async def test_delete_failure_keeps_record(page: NotificationsPage, store: FakeStore) -> None:
    store.fail_writes = "row locked"
    outcome = await page.delete("n2")
    assert outcome.level is OutcomeLevel.ERROR
    assert outcome.message == "Failed to delete notification"
    assert len(page.notifications) == 3


async def test_snapshot_shape(page: NotificationsPage) -> None:
    snapshot = page.snapshot()
    assert snapshot["type"] == "snapshot"
    assert snapshot["page"] == "notifications"
    assert snapshot["status"] == "ready"
    assert snapshot["data"]["unread_count"] == 2
    assert snapshot["data"]["total"] == 3
