"""Application DTOs (no dependency on the store client)."""

from mrcars_admin.application.dtos.auth import AuthSession
from mrcars_admin.application.dtos.dashboard import DashboardSnapshot
from mrcars_admin.application.dtos.outcome import MutationOutcome
from mrcars_admin.application.dtos.query import Filter, Order, Query, QueryResult
from mrcars_admin.application.dtos.realtime import InvalidationToken

__all__ = [
    "AuthSession",
    "DashboardSnapshot",
    "Filter",
    "InvalidationToken",
    "MutationOutcome",
    "Order",
    "Query",
    "QueryResult",
]
