"""Collection store interface (port) for the application layer.

The managed database is an external collaborator; the application only
relies on this contract. Implementations raise StoreException on failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from mrcars_admin.application.dtos.query import Filter, Query, QueryResult


class ICollectionStore(Protocol):
    """Protocol for the remote collection store (DIP)."""

    async def fetch(self, query: Query) -> QueryResult:
        """Run a read query; rows and/or exact count per query flags."""

    async def update(
        self, collection: str, values: dict[str, Any], filters: tuple[Filter, ...]
    ) -> None:
        """Update every row matching filters with values."""

    async def delete(self, collection: str, filters: tuple[Filter, ...]) -> None:
        """Delete every row matching filters."""
