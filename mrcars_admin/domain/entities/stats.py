"""Dashboard statistics entities: summary counts and monthly buckets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """The eight named counts shown on the dashboard cards.

    Every field is always populated; a failed count query contributes 0.
    """

    total_users: int = 0
    active_listings: int = 0
    total_inquiries: int = 0
    pending_inquiries: int = 0
    total_orders: int = 0
    this_month_users: int = 0
    this_month_listings: int = 0
    this_month_orders: int = 0

    @property
    def pending_inquiry_percent(self) -> int:
        """Share of inquiries still pending, as a rounded percentage."""
        if self.pending_inquiries <= 0:
            return 0
        return round(self.pending_inquiries / max(self.total_inquiries, 1) * 100)

    @property
    def inactive_listings(self) -> int:
        """Listing status chart complement (users minus active listings, floored at 0)."""
        if self.total_users <= 0:
            return 0
        return max(0, self.total_users - self.active_listings)


@dataclass(frozen=True)
class TimeBucket:
    """One month of the trailing historical series.

    ``revenue`` is the sum of order amounts in the month, never negative.
    """

    label: str
    start: date
    users: int = 0
    listings: int = 0
    orders: int = 0
    revenue: Decimal = Decimal(0)
