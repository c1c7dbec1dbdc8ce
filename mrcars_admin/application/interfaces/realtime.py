"""Realtime invalidation channel interface (port).

Abstracts the push transport: pages only see opaque invalidation tokens.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mrcars_admin.application.dtos.realtime import InvalidationToken


class IInvalidationChannel(Protocol):
    """Protocol for a per-collection "something changed" feed."""

    async def publish(self, collection: str, event: str = "*") -> bool:
        """Announce a change to collection. Returns False if the transport is unavailable."""

    def subscribe(self, *collections: str) -> AsyncIterator[InvalidationToken]:
        """Yield a token for each change on any of collections.

        Closing or cancelling the iterator cancels the subscription.
        """
