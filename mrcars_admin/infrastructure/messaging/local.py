"""In-process invalidation channel (single instance, no Redis).

Each subscription gets its own asyncio.Queue registered under every
collection it listens to. Used when REDIS_ENABLED is false and in tests.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator

from mrcars_admin.application.dtos.realtime import InvalidationToken

logger = logging.getLogger(__name__)


class LocalInvalidationChannel:
    """IInvalidationChannel fan-out over asyncio queues."""

    def __init__(self) -> None:
        self._queues: dict[str, set[asyncio.Queue[InvalidationToken]]] = defaultdict(set)

    def subscriber_count(self, collection: str) -> int:
        return len(self._queues.get(collection, ()))

    async def publish(self, collection: str, event: str = "*") -> bool:
        token = InvalidationToken(collection=collection, event=event)
        for queue in list(self._queues.get(collection, ())):
            queue.put_nowait(token)
        return True

    async def subscribe(self, *collections: str) -> AsyncIterator[InvalidationToken]:
        queue: asyncio.Queue[InvalidationToken] = asyncio.Queue()
        for collection in collections:
            self._queues[collection].add(queue)
        logger.debug("Local subscription on %s", ", ".join(collections))
        try:
            while True:
                yield await queue.get()
        finally:
            for collection in collections:
                subscribers = self._queues.get(collection)
                if subscribers is not None:
                    subscribers.discard(queue)
                    if not subscribers:
                        del self._queues[collection]
