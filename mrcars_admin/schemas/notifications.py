"""Notifications API schemas."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, Field

from mrcars_admin.domain.entities.notification import NotificationRecord
from mrcars_admin.domain.enums import NotificationPriority, NotificationType
from mrcars_admin.schemas.outcome import OutcomeResponse


class NotificationResponse(BaseModel):
    id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool
    created_at: datetime | None
    priority: NotificationPriority
    related_id: str | None = None
    action_url: str

    @classmethod
    def from_record(cls, record: NotificationRecord) -> NotificationResponse:
        return cls(
            id=record.id,
            type=record.type,
            title=record.title,
            message=record.message,
            is_read=record.is_read,
            created_at=record.created_at,
            priority=record.priority,
            related_id=record.related_id,
            action_url=record.action_url,
        )


class NotificationListResponse(BaseModel):
    """Response for GET /notifications (filtered list plus counters)."""

    notifications: list[NotificationResponse] = Field(default_factory=list)
    unread_count: int = 0
    total: int = Field(0, description="Loaded notifications before filtering")
    error: str | None = None

    @classmethod
    def from_records(
        cls,
        records: Iterable[NotificationRecord],
        *,
        visible: Iterable[NotificationRecord] | None = None,
        error: str | None = None,
    ) -> NotificationListResponse:
        records = list(records)
        shown = records if visible is None else list(visible)
        return cls(
            notifications=[NotificationResponse.from_record(r) for r in shown],
            unread_count=sum(1 for r in records if not r.is_read),
            total=len(records),
            error=error,
        )


class NotificationMutationResponse(BaseModel):
    """Outcome of a notification write plus the list after reconciliation."""

    outcome: OutcomeResponse
    notifications: list[NotificationResponse] = Field(default_factory=list)
    unread_count: int = 0
