"""Dashboard API schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from mrcars_admin.application.dtos.dashboard import DashboardSnapshot
from mrcars_admin.domain.entities.activity import ActivityEvent
from mrcars_admin.domain.entities.stats import DashboardSummary, TimeBucket
from mrcars_admin.domain.enums import ActivitySource


class SummaryResponse(BaseModel):
    """Summary cards plus the derived chart values."""

    total_users: int
    active_listings: int
    total_inquiries: int
    pending_inquiries: int
    total_orders: int
    this_month_users: int
    this_month_listings: int
    this_month_orders: int
    pending_inquiry_percent: int
    inactive_listings: int

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> SummaryResponse:
        return cls(
            total_users=summary.total_users,
            active_listings=summary.active_listings,
            total_inquiries=summary.total_inquiries,
            pending_inquiries=summary.pending_inquiries,
            total_orders=summary.total_orders,
            this_month_users=summary.this_month_users,
            this_month_listings=summary.this_month_listings,
            this_month_orders=summary.this_month_orders,
            pending_inquiry_percent=summary.pending_inquiry_percent,
            inactive_listings=summary.inactive_listings,
        )


class TimeBucketResponse(BaseModel):
    """One month of the chart series."""

    label: str = Field(..., description="Short month name, e.g. 'Oct'")
    start: date
    users: int
    listings: int
    orders: int
    revenue: float = Field(..., ge=0)

    @classmethod
    def from_bucket(cls, bucket: TimeBucket) -> TimeBucketResponse:
        return cls(
            label=bucket.label,
            start=bucket.start,
            users=bucket.users,
            listings=bucket.listings,
            orders=bucket.orders,
            revenue=float(bucket.revenue),
        )


class ActivityItem(BaseModel):
    """One recent-activity feed entry."""

    id: str
    source: ActivitySource
    user_name: str
    user_email: str
    action: str
    target: str
    created_at: datetime

    @classmethod
    def from_event(cls, event: ActivityEvent) -> ActivityItem:
        return cls(
            id=event.id,
            source=event.source,
            user_name=event.user_name,
            user_email=event.user_email,
            action=event.action,
            target=event.target,
            created_at=event.created_at,
        )


class DashboardResponse(BaseModel):
    """Response for GET /dashboard."""

    summary: SummaryResponse
    series: list[TimeBucketResponse] = Field(default_factory=list)
    activity: list[ActivityItem] = Field(default_factory=list)
    generated_at: datetime
    error: str | None = Field(default=None, description="Load failure reason, if any")

    @classmethod
    def from_snapshot(cls, snapshot: DashboardSnapshot, error: str | None = None) -> DashboardResponse:
        return cls(
            summary=SummaryResponse.from_summary(snapshot.summary),
            series=[TimeBucketResponse.from_bucket(b) for b in snapshot.series],
            activity=[ActivityItem.from_event(e) for e in snapshot.activity],
            generated_at=snapshot.generated_at,
            error=error,
        )
