"""DTOs for the dashboard overview page."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from mrcars_admin.domain.entities.stats import DashboardSummary
from mrcars_admin.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from mrcars_admin.domain.entities.activity import ActivityEvent
    from mrcars_admin.domain.entities.stats import TimeBucket


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything one dashboard load produces: cards, chart series and feed."""

    summary: DashboardSummary = field(default_factory=DashboardSummary)
    series: list["TimeBucket"] = field(default_factory=list)
    activity: list["ActivityEvent"] = field(default_factory=list)
    generated_at: datetime = field(default_factory=utc_now)
