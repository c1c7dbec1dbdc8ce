"""Stats aggregator: dashboard summary counts and the trailing monthly series.

Every count is an independent query issued concurrently with its siblings.
A failed query contributes zero; the aggregator never reports a partial
result to its caller, so the dashboard always renders.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from mrcars_admin.application.dtos.query import Query
from mrcars_admin.application.services.fanout import settle
from mrcars_admin.domain.collections import (
    COLLECTION_CARS,
    COLLECTION_INQUIRIES,
    COLLECTION_ORDERS,
    COLLECTION_USERS,
)
from mrcars_admin.domain.entities.stats import DashboardSummary, TimeBucket
from mrcars_admin.shared.telemetry.tracing import traced
from mrcars_admin.shared.utils.datetime import add_months, month_label, month_start, utc_now

if TYPE_CHECKING:
    from mrcars_admin.application.interfaces.store import ICollectionStore

logger = logging.getLogger(__name__)

DEFAULT_SERIES_MONTHS = 12


def summary_queries(since: datetime) -> list[tuple[str, Query]]:
    """Named count queries for the summary, in DashboardSummary field order.

    Args:
        since: First instant of the current month (lower bound for this_month_*).
    """
    return [
        ("total_users", Query(COLLECTION_USERS).count()),
        ("active_listings", Query(COLLECTION_CARS).where_eq("status", "active").count()),
        ("total_inquiries", Query(COLLECTION_INQUIRIES).count()),
        ("pending_inquiries", Query(COLLECTION_INQUIRIES).where_eq("status", "pending").count()),
        ("total_orders", Query(COLLECTION_ORDERS).count()),
        ("this_month_users", Query(COLLECTION_USERS).created_between(since).count()),
        ("this_month_listings", Query(COLLECTION_CARS).created_between(since).count()),
        ("this_month_orders", Query(COLLECTION_ORDERS).created_between(since).count()),
    ]


def sum_revenue(rows: list[dict[str, Any]]) -> Decimal:
    """Sum total_amount over order rows; null or invalid amounts count as 0, floor at 0."""
    total = Decimal(0)
    for row in rows:
        amount = row.get("total_amount")
        if amount is None:
            continue
        try:
            total += Decimal(str(amount))
        except InvalidOperation:
            logger.warning("Ignoring non-numeric order amount: %r", amount)
    return max(total, Decimal(0))


class StatsAggregator:
    """Fan-out counter over the users, cars, inquiries and orders collections."""

    def __init__(
        self,
        store: ICollectionStore,
        *,
        months: int = DEFAULT_SERIES_MONTHS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.months = months
        self._clock = clock

    async def _count(self, query: Query) -> int:
        result = await self.store.fetch(query)
        return max(0, int(result.count or 0))

    async def _orders(self, query: Query) -> tuple[int, Decimal]:
        result = await self.store.fetch(query)
        count = result.count if result.count is not None else len(result.rows)
        return max(0, int(count)), sum_revenue(result.rows)

    @traced("stats.summary")
    async def summary(self) -> DashboardSummary:
        """Return the eight named counts; failed queries read as 0."""
        queries = summary_queries(month_start(self._clock()))
        counts = await settle(
            [(name, self._count(query)) for name, query in queries], default=0
        )
        return DashboardSummary(**{name: count for (name, _), count in zip(queries, counts)})

    async def _month(self, start: datetime) -> TimeBucket:
        end = add_months(start, 1)
        users, listings, orders = await settle(
            [
                ("series.users", self._count(Query(COLLECTION_USERS).created_between(start, end).count())),
                ("series.listings", self._count(Query(COLLECTION_CARS).created_between(start, end).count())),
                (
                    "series.orders",
                    self._orders(
                        Query(COLLECTION_ORDERS)
                        .select("total_amount")
                        .created_between(start, end)
                        .rows_with_count()
                    ),
                ),
            ],
            default=None,
        )
        order_count, revenue = orders or (0, Decimal(0))
        return TimeBucket(
            label=month_label(start.date()),
            start=start.date(),
            users=users or 0,
            listings=listings or 0,
            orders=order_count,
            revenue=revenue,
        )

    @traced("stats.monthly_series")
    async def monthly_series(self) -> list[TimeBucket]:
        """Return one bucket per month for the trailing window, oldest first.

        The current month is the last bucket. Month ranges are half-open
        [first instant, first instant of next month) in UTC.
        """
        current = month_start(self._clock())
        starts = [add_months(current, -offset) for offset in range(self.months - 1, -1, -1)]
        return list(await asyncio.gather(*(self._month(start) for start in starts)))
