"""Dashboard overview page: summary cards, monthly chart, recent activity."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from mrcars_admin.application.dtos.dashboard import DashboardSnapshot
from mrcars_admin.application.use_cases.base import Page
from mrcars_admin.domain.collections import (
    COLLECTION_CARS,
    COLLECTION_INQUIRIES,
    COLLECTION_ORDERS,
    COLLECTION_USERS,
)
from mrcars_admin.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from mrcars_admin.application.services.activity_reconciler import ActivityReconciler
    from mrcars_admin.application.services.stats_aggregator import StatsAggregator


class DashboardPage(Page[DashboardSnapshot]):
    """Runs the aggregator and the reconciler concurrently on every load."""

    collections: tuple[str, ...] = (
        COLLECTION_USERS,
        COLLECTION_CARS,
        COLLECTION_INQUIRIES,
        COLLECTION_ORDERS,
    )

    def __init__(self, aggregator: StatsAggregator, reconciler: ActivityReconciler) -> None:
        super().__init__()
        self.aggregator = aggregator
        self.reconciler = reconciler

    @traced("page.dashboard.load")
    async def _fetch(self) -> DashboardSnapshot:
        summary, series, activity = await asyncio.gather(
            self.aggregator.summary(),
            self.aggregator.monthly_series(),
            self.reconciler.recent(),
        )
        return DashboardSnapshot(summary=summary, series=series, activity=activity)

    def _empty(self) -> DashboardSnapshot:
        return DashboardSnapshot()

    def snapshot(self) -> dict:
        from mrcars_admin.schemas.dashboard import DashboardResponse

        data = self.state.data or self._empty()
        return {
            "type": "snapshot",
            "page": "dashboard",
            "status": self.state.status.value,
            "error": self.state.error,
            "data": DashboardResponse.from_snapshot(data).model_dump(mode="json"),
        }
