"""In-memory collaborators for unit and API tests.

FakeStore evaluates Query filters against seeded rows so services and pages
run their real query-building code; FakeAuthProvider maps tokens to sessions.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime
from typing import Any

from mrcars_admin.application.dtos.auth import AuthSession
from mrcars_admin.application.dtos.query import Filter, Query, QueryResult
from mrcars_admin.domain.exceptions import AuthProviderException, StoreException
from mrcars_admin.shared.utils.datetime import parse_iso_utc


def _comparable(row_value: Any, filter_value: Any) -> tuple[Any, Any]:
    if isinstance(filter_value, datetime):
        return parse_iso_utc(row_value), filter_value
    return row_value, filter_value


def _matches(row: dict[str, Any], flt: Filter) -> bool:
    if flt.op == "in":
        return str(row.get(flt.column)) in {str(v) for v in flt.value}
    left, right = _comparable(row.get(flt.column), flt.value)
    if flt.op == "eq":
        return str(left) == str(right) if left is not None and right is not None else left == right
    if flt.op == "neq":
        return left != right
    if left is None:
        return False
    if flt.op == "gt":
        return left > right
    if flt.op == "gte":
        return left >= right
    if flt.op == "lt":
        return left < right
    if flt.op == "lte":
        return left <= right
    raise ValueError(flt.op)


class FakeStore:
    """ICollectionStore over dict rows, with injectable failures.

    Attributes:
        tables: collection -> list of rows (mutated by update/delete).
        fetches: every Query received, in call order.
        writes: ("update"|"delete", collection, values, filters) tuples.
        fail_on: predicate; a matching Query raises StoreException.
        fail_writes: when set, update/delete raise StoreException with this text.
    """

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {
            name: [dict(r) for r in rows] for name, rows in (tables or {}).items()
        }
        self.fetches: list[Query] = []
        self.writes: list[tuple[str, str, dict[str, Any] | None, tuple[Filter, ...]]] = []
        self.fail_on: Callable[[Query], bool] = lambda query: False
        self.fail_writes: str | None = None
        self.fetch_delay: float = 0.0

    def _select(self, collection: str, filters: tuple[Filter, ...]) -> list[dict[str, Any]]:
        return [r for r in self.tables.get(collection, []) if all(_matches(r, f) for f in filters)]

    async def fetch(self, query: Query) -> QueryResult:
        self.fetches.append(query)
        if self.fetch_delay:
            await asyncio.sleep(self.fetch_delay)
        if self.fail_on(query):
            raise StoreException(f"{query.collection} unavailable", collection=query.collection)
        rows = self._select(query.collection, query.filters)
        count = len(rows) if query.with_count else None
        if query.count_only:
            return QueryResult(rows=[], count=count)
        if query.order is not None:
            column = query.order.column
            rows = sorted(
                rows,
                key=lambda r: (r.get(column) is not None, r.get(column) or ""),
                reverse=query.order.descending,
            )
        if query.limit is not None:
            rows = rows[: query.limit]
        return QueryResult(rows=[dict(r) for r in rows], count=count)

    async def update(
        self, collection: str, values: dict[str, Any], filters: tuple[Filter, ...]
    ) -> None:
        self.writes.append(("update", collection, dict(values), filters))
        if self.fail_writes:
            raise StoreException(self.fail_writes, collection=collection)
        for row in self._select(collection, filters):
            row.update(values)

    async def delete(self, collection: str, filters: tuple[Filter, ...]) -> None:
        self.writes.append(("delete", collection, None, filters))
        if self.fail_writes:
            raise StoreException(self.fail_writes, collection=collection)
        doomed = {id(r) for r in self._select(collection, filters)}
        self.tables[collection] = [r for r in self.tables.get(collection, []) if id(r) not in doomed]


ADMIN_SESSION = AuthSession(
    user_id="admin-1",
    email="admin@mrcars.test",
    access_token="valid-token",
    role="authenticated",
    metadata={"username": "admin"},
)


class FakeAuthProvider:
    """IAuthProvider with a fixed token table and recorded calls."""

    def __init__(self, sessions: dict[str, AuthSession] | None = None) -> None:
        self.sessions = sessions if sessions is not None else {ADMIN_SESSION.access_token: ADMIN_SESSION}
        self.signed_out: list[str] = []
        self.reset_requests: list[tuple[str, str | None]] = []
        self.reject_reset: str | None = None

    async def get_session(self, access_token: str) -> AuthSession | None:
        return self.sessions.get(access_token)

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        self.sessions.pop(access_token, None)

    async def send_password_reset(self, email: str, redirect_to: str | None = None) -> None:
        if self.reject_reset:
            raise AuthProviderException(self.reject_reset, status_code=429)
        self.reset_requests.append((email, redirect_to))
