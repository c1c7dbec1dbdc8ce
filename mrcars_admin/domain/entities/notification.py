"""Notification domain entity.

A view-layer projection of a row in the notifications table. Records are
created by external events; this service only flips read flags or deletes
them, and never changes classification or timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from mrcars_admin.domain.enums import NotificationPriority, NotificationType
from mrcars_admin.shared.utils.datetime import parse_iso_utc

ACTION_URLS: dict[NotificationType, str] = {
    NotificationType.INQUIRY: "/dashboard/inquiries",
    NotificationType.ORDER: "/dashboard/orders",
    NotificationType.APPOINTMENT: "/dashboard/appointments",
    NotificationType.USER: "/dashboard/users",
    NotificationType.SYSTEM: "/dashboard/settings",
}


@dataclass(frozen=True)
class NotificationRecord:
    """Immutable notification; state changes produce new instances."""

    id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool
    created_at: datetime | None
    priority: NotificationPriority = NotificationPriority.MEDIUM
    related_id: str | None = None

    @property
    def action_url(self) -> str:
        """Navigation target derived from classification (fixed lookup, not stored)."""
        return ACTION_URLS.get(self.type, "/dashboard")

    def mark_read(self) -> NotificationRecord:
        """Return a copy with the read flag set."""
        if self.is_read:
            return self
        return replace(self, is_read=True)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> NotificationRecord:
        """Map a notifications row (id, title, message, type, read, data, created_at).

        Priority and related id come from the JSON ``data`` column; a missing or
        unknown priority defaults to medium.
        """
        data = row.get("data") or {}
        if not isinstance(data, dict):
            data = {}
        related = data.get("related_id")
        return cls(
            id=str(row["id"]),
            type=NotificationType.parse(row.get("type")),
            title=row.get("title") or "",
            message=row.get("message") or "",
            is_read=bool(row.get("read")),
            created_at=parse_iso_utc(row.get("created_at")),
            priority=NotificationPriority.parse(data.get("priority")),
            related_id=str(related) if related is not None else None,
        )
