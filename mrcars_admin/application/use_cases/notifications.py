"""Notifications page: list, filter and mutate admin notifications."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mrcars_admin.application.dtos.query import Query
from mrcars_admin.application.use_cases.base import Page
from mrcars_admin.domain.collections import COLLECTION_NOTIFICATIONS
from mrcars_admin.domain.entities.notification import NotificationRecord
from mrcars_admin.domain.enums import NotificationFilter
from mrcars_admin.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from mrcars_admin.application.dtos.outcome import MutationOutcome
    from mrcars_admin.application.dtos.query import Filter
    from mrcars_admin.application.interfaces.store import ICollectionStore

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_LIMIT = 50
NOTIFICATION_COLUMNS = "id, title, message, type, read, data, created_at, user_id"

Notifications = tuple[NotificationRecord, ...]


def _by_id(notification_id: str) -> tuple[Filter, ...]:
    return Query(COLLECTION_NOTIFICATIONS).where_eq("id", notification_id).filters


class NotificationsPage(Page[Notifications]):
    """Newest notifications first; all writes go through the gateway."""

    collections: tuple[str, ...] = (COLLECTION_NOTIFICATIONS,)
    commands = {"mark_read": ("id",), "mark_all_read": (), "delete": ("id",)}

    def __init__(self, store: ICollectionStore, *, limit: int = DEFAULT_NOTIFICATION_LIMIT) -> None:
        super().__init__()
        self.store = store
        self.limit = limit

    @property
    def notifications(self) -> Notifications:
        return self.state.data or ()

    @traced("page.notifications.load")
    async def _fetch(self) -> Notifications:
        query = (
            Query(COLLECTION_NOTIFICATIONS, NOTIFICATION_COLUMNS)
            .order_by("created_at")
            .take(self.limit)
        )
        result = await self.store.fetch(query)
        records = []
        for row in result.rows:
            try:
                records.append(NotificationRecord.from_row(row))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed notification row: %s", exc)
        return tuple(records)

    def _empty(self) -> Notifications:
        return ()

    # -- derived views -------------------------------------------------

    def visible(self, view: NotificationFilter = NotificationFilter.ALL) -> list[NotificationRecord]:
        if view is NotificationFilter.UNREAD:
            return [n for n in self.notifications if not n.is_read]
        if view is NotificationFilter.READ:
            return [n for n in self.notifications if n.is_read]
        return list(self.notifications)

    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.is_read)

    # -- mutations -----------------------------------------------------

    async def mark_read(self, notification_id: str) -> MutationOutcome:
        def patch(items: Notifications) -> Notifications:
            return tuple(n.mark_read() if n.id == notification_id else n for n in items)

        return await self.gateway.execute(
            lambda: self.store.update(
                COLLECTION_NOTIFICATIONS, {"read": True}, _by_id(notification_id)
            ),
            patch,
            success_message="Notification marked as read",
            failure_message="Failed to mark notification as read",
        )

    async def mark_all_read(self) -> MutationOutcome:
        """Mark every currently-unread notification read in one write.

        Only the ids unread at call time are written and patched, so
        records that arrive mid-flight are not flipped locally.
        """
        unread_ids = [n.id for n in self.notifications if not n.is_read]
        if not unread_ids:
            return self.gateway.info("No unread notifications to mark")
        targets = frozenset(unread_ids)
        filters = Query(COLLECTION_NOTIFICATIONS).where_in("id", unread_ids).filters

        def patch(items: Notifications) -> Notifications:
            return tuple(n.mark_read() if n.id in targets else n for n in items)

        return await self.gateway.execute(
            lambda: self.store.update(COLLECTION_NOTIFICATIONS, {"read": True}, filters),
            patch,
            success_message="All notifications marked as read",
            failure_message="Failed to mark all notifications as read",
        )

    async def delete(self, notification_id: str) -> MutationOutcome:
        def patch(items: Notifications) -> Notifications:
            return tuple(n for n in items if n.id != notification_id)

        return await self.gateway.execute(
            lambda: self.store.delete(COLLECTION_NOTIFICATIONS, _by_id(notification_id)),
            patch,
            success_message="Notification deleted",
            failure_message="Failed to delete notification",
        )

    def snapshot(self) -> dict:
        from mrcars_admin.schemas.notifications import NotificationListResponse

        body = NotificationListResponse.from_records(self.notifications)
        return {
            "type": "snapshot",
            "page": "notifications",
            "status": self.state.status.value,
            "error": self.state.error,
            "data": body.model_dump(mode="json"),
        }
