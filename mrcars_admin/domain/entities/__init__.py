"""Domain entities: notifications, activity feed variants, dashboard statistics."""

from mrcars_admin.domain.entities.activity import (
    ActivityEvent,
    InquirySubmitted,
    ListingCreated,
    OrderPlaced,
    UserRegistered,
)
from mrcars_admin.domain.entities.notification import NotificationRecord
from mrcars_admin.domain.entities.stats import DashboardSummary, TimeBucket

__all__ = [
    "ActivityEvent",
    "DashboardSummary",
    "InquirySubmitted",
    "ListingCreated",
    "NotificationRecord",
    "OrderPlaced",
    "TimeBucket",
    "UserRegistered",
]
