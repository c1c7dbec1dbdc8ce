"""Declarative collection queries (no dependency on the store client).

A Query names a collection, the columns to return (joins are embedded the
PostgREST way, e.g. ``users!inner(username, email)``), filters, ordering
and limit. Queries are immutable; builder methods return new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Literal

FilterOp = Literal["eq", "neq", "gt", "gte", "lt", "lte", "in"]


@dataclass(frozen=True)
class Filter:
    """Single predicate: ``column <op> value`` (value is a sequence for 'in')."""

    column: str
    op: FilterOp
    value: Any


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = True
    nulls_last: bool = False


@dataclass(frozen=True)
class Query:
    """Read request against one collection."""

    collection: str
    columns: str = "*"
    filters: tuple[Filter, ...] = ()
    order: Order | None = None
    limit: int | None = None
    count_only: bool = False
    with_count: bool = False

    def select(self, columns: str) -> Query:
        return replace(self, columns=columns)

    def where(self, column: str, op: FilterOp, value: Any) -> Query:
        return replace(self, filters=(*self.filters, Filter(column, op, value)))

    def where_eq(self, column: str, value: Any) -> Query:
        return self.where(column, "eq", value)

    def where_in(self, column: str, values: list[Any] | tuple[Any, ...]) -> Query:
        return self.where(column, "in", tuple(values))

    def created_between(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        column: str = "created_at",
    ) -> Query:
        """Bound a time column to the half-open range [start, end)."""
        query = self
        if start is not None:
            query = query.where(column, "gte", start)
        if end is not None:
            query = query.where(column, "lt", end)
        return query

    def order_by(self, column: str, descending: bool = True, nulls_last: bool = False) -> Query:
        return replace(self, order=Order(column, descending, nulls_last))

    def take(self, n: int) -> Query:
        return replace(self, limit=n)

    def count(self) -> Query:
        """Count-only request (no rows returned, exact count)."""
        return replace(self, count_only=True, with_count=True)

    def rows_with_count(self) -> Query:
        """Rows plus exact count in one call."""
        return replace(self, with_count=True)


@dataclass
class QueryResult:
    """Rows and (when requested) the exact total count."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    count: int | None = None
