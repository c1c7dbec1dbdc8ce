"""StatsAggregator: summary counts, monthly series, fail-soft fan-out."""

import asyncio
from dataclasses import replace
from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from mrcars_admin.application.dtos.query import Query, QueryResult
from mrcars_admin.application.services.fanout import settle
from mrcars_admin.application.services.stats_aggregator import (
    StatsAggregator,
    sum_revenue,
    summary_queries,
)
from mrcars_admin.domain.entities.stats import DashboardSummary, TimeBucket
from mrcars_admin.domain.exceptions import StoreException
from mrcars_admin.shared.utils.datetime import month_start
from tests.fakes import FakeStore

NOW = datetime(2025, 3, 15, 9, 30, tzinfo=UTC)


@pytest.fixture
def seeded_store() -> FakeStore:
    return FakeStore(
        {
            "users": [
                {"id": "u1", "created_at": "2025-03-02T10:00:00Z"},
                {"id": "u2", "created_at": "2025-02-10T08:00:00+00:00"},
                {"id": "u3", "created_at": "2024-12-01T00:00:00Z"},
            ],
            "cars": [
                {"id": "c1", "status": "active", "created_at": "2025-03-01T00:00:00Z"},
                {"id": "c2", "status": "active", "created_at": "2025-01-20T00:00:00Z"},
                {"id": "c3", "status": "sold", "created_at": "2025-02-28T23:59:59Z"},
            ],
            "inquiries": [
                {"id": "i1", "status": "pending", "created_at": "2025-03-03T00:00:00Z"},
                {"id": "i2", "status": "resolved", "created_at": "2025-03-04T00:00:00Z"},
                {"id": "i3", "status": "pending", "created_at": "2025-01-04T00:00:00Z"},
            ],
            "orders": [
                {"id": "o1", "total_amount": 100.5, "created_at": "2025-03-05T00:00:00Z"},
                {"id": "o2", "total_amount": None, "created_at": "2025-03-06T00:00:00Z"},
                {"id": "o3", "total_amount": "250", "created_at": "2025-02-01T00:00:00Z"},
            ],
        }
    )


def _aggregator(store: FakeStore, months: int = 3) -> StatsAggregator:
    return StatsAggregator(store, months=months, clock=lambda: NOW)


async def test_summary_counts(seeded_store: FakeStore) -> None:
    summary = await _aggregator(seeded_store).summary()
    assert summary == DashboardSummary(
        total_users=3,
        active_listings=2,
        total_inquiries=3,
        pending_inquiries=2,
        total_orders=3,
        this_month_users=1,
        this_month_listings=1,
        this_month_orders=2,
    )


async def test_summary_failed_query_reads_as_zero(seeded_store: FakeStore) -> None:
    """One failing collection zeroes its counts; the others are unaffected."""
    seeded_store.fail_on = lambda q: q.collection == "inquiries"
    summary = await _aggregator(seeded_store).summary()
    assert summary.total_inquiries == 0
    assert summary.pending_inquiries == 0
    assert summary.total_users == 3
    assert summary.total_orders == 3


async def test_summary_all_queries_failing_still_returns_summary(seeded_store: FakeStore) -> None:
    seeded_store.fail_on = lambda q: True
    assert await _aggregator(seeded_store).summary() == DashboardSummary()


EXACT = DashboardSummary(
    total_users=120,
    active_listings=45,
    total_inquiries=30,
    pending_inquiries=5,
    total_orders=60,
    this_month_users=10,
    this_month_listings=3,
    this_month_orders=7,
)


class _ScriptedCounts:
    """Answers each summary query with its EXACT count; queries named in failing raise."""

    def __init__(self, failing: tuple[str, ...] = ()) -> None:
        queries = summary_queries(month_start(NOW))
        self.counts = {query: getattr(EXACT, name) for name, query in queries}
        self.failing = {query for name, query in queries if name in failing}

    async def fetch(self, query: Query) -> QueryResult:
        if query in self.failing:
            raise StoreException(f"{query.collection} unavailable", collection=query.collection)
        return QueryResult(count=self.counts[query])


async def test_summary_reports_every_count_exactly() -> None:
    assert await StatsAggregator(_ScriptedCounts(), clock=lambda: NOW).summary() == EXACT


@pytest.mark.parametrize(
    "failing",
    [
        ("total_users",),
        ("pending_inquiries",),
        ("this_month_orders",),
        ("active_listings", "this_month_listings"),
        ("total_inquiries", "total_orders", "this_month_users"),
        ("total_users", "active_listings", "total_inquiries", "pending_inquiries", "total_orders"),
        tuple(name for name, _ in summary_queries(month_start(NOW))),
    ],
)
async def test_summary_zeroes_exactly_the_failed_counts(failing: tuple[str, ...]) -> None:
    summary = await StatsAggregator(_ScriptedCounts(failing), clock=lambda: NOW).summary()
    assert summary == replace(EXACT, **{name: 0 for name in failing})


async def test_series_with_only_current_month_activity() -> None:
    this_month = "2025-03-10T12:00:00Z"
    store = FakeStore(
        {
            "users": [{"id": f"u{i}", "created_at": this_month} for i in range(10)],
            "cars": [{"id": f"c{i}", "status": "active", "created_at": this_month} for i in range(3)],
            "orders": [
                {"id": "o1", "total_amount": 100, "created_at": this_month},
                {"id": "o2", "total_amount": 50, "created_at": "2025-03-01T00:00:00Z"},
            ],
        }
    )
    series = await StatsAggregator(store, clock=lambda: NOW).monthly_series()
    assert len(series) == 12
    assert series[-1] == TimeBucket(
        label="Mar", start=date(2025, 3, 1), users=10, listings=3, orders=2, revenue=Decimal(150)
    )
    for bucket in series[:-1]:
        assert (bucket.users, bucket.listings, bucket.orders, bucket.revenue) == (0, 0, 0, Decimal(0))


async def test_monthly_series_oldest_first_ending_current_month(seeded_store: FakeStore) -> None:
    series = await _aggregator(seeded_store).monthly_series()
    assert [b.label for b in series] == ["Jan", "Feb", "Mar"]
    assert [b.start for b in series] == [date(2025, 1, 1), date(2025, 2, 1), date(2025, 3, 1)]
    assert [b.users for b in series] == [0, 1, 1]
    assert [b.listings for b in series] == [1, 1, 1]
    assert [b.orders for b in series] == [0, 1, 2]
    assert series[1].revenue == Decimal("250")
    assert series[2].revenue == Decimal("100.5")


async def test_monthly_series_default_length_is_twelve(seeded_store: FakeStore) -> None:
    series = await StatsAggregator(seeded_store, clock=lambda: NOW).monthly_series()
    assert len(series) == 12
    assert series[0].start == date(2024, 4, 1)
    assert series[-1].start == date(2025, 3, 1)


async def test_monthly_series_failed_month_query_is_zero(seeded_store: FakeStore) -> None:
    seeded_store.fail_on = lambda q: q.collection == "orders"
    series = await _aggregator(seeded_store).monthly_series()
    assert [b.orders for b in series] == [0, 0, 0]
    assert all(b.revenue == 0 for b in series)
    assert [b.users for b in series] == [0, 1, 1]


def test_sum_revenue_ignores_missing_and_invalid_amounts() -> None:
    rows = [{"total_amount": 10}, {"total_amount": None}, {"total_amount": "abc"}, {}]
    assert sum_revenue(rows) == Decimal(10)


def test_sum_revenue_never_negative() -> None:
    assert sum_revenue([{"total_amount": -50}, {"total_amount": 20}]) == Decimal(0)


def test_summary_derived_figures() -> None:
    summary = DashboardSummary(total_users=10, active_listings=4, total_inquiries=3, pending_inquiries=1)
    assert summary.pending_inquiry_percent == 33
    assert summary.inactive_listings == 6
    assert DashboardSummary().pending_inquiry_percent == 0
    assert DashboardSummary(active_listings=5).inactive_listings == 0


async def _fail() -> int:
    raise RuntimeError("boom")


async def _value(v: int) -> int:
    await asyncio.sleep(0)
    return v


async def test_settle_keeps_branch_order_and_defaults_failures() -> None:
    results = await settle(
        [("a", _value(1)), ("b", _fail()), ("c", _value(3))], default=0
    )
    assert results == [1, 0, 3]
