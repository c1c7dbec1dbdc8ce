"""Redis Pub/Sub invalidation channel.

One Redis channel per collection (``<prefix>:<collection>``). Messages are
JSON InvalidationToken payloads; subscribers only learn that a collection
changed. Lets several service instances share database-webhook signals.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator

import redis.asyncio as redis

from mrcars_admin.application.dtos.realtime import InvalidationToken
from mrcars_admin.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class RedisInvalidationChannel:
    """IInvalidationChannel backed by Redis pub/sub.

    subscribe() is reentrant: each call uses a locally-scoped PubSub that is
    closed in finally, so every page session has its own subscription.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize. Pass redis_client for DI/testing."""
        self.redis = redis_client
        self.settings = settings or get_settings()
        self.prefix = self.settings.realtime_channel_prefix
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self._connected:
            return
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
                decode_responses=True,
                socket_connect_timeout=5,
            )
            await self.redis.ping()
            self._connected = True
            logger.info("Redis invalidation channel connected")
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis invalidation channel connection failed: %s", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self._connected = False
            logger.info("Redis invalidation channel disconnected")

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    def _get_channel(self, collection: str) -> str:
        return f"{self.prefix}:{collection}"

    async def publish(self, collection: str, event: str = "*") -> bool:
        """Publish an invalidation for collection.

        Returns:
            True if published, False if Redis unavailable or publish failed.
        """
        if not self.is_available() or self.redis is None:
            logger.debug("Redis not available, skipping invalidation publish")
            return False
        token = InvalidationToken(collection=collection, event=event)
        try:
            await self.redis.publish(self._get_channel(collection), json.dumps(token.to_dict()))
        except redis.RedisError:
            logger.exception("Failed to publish invalidation for %s", collection)
            return False
        logger.debug("Published invalidation for %s (%s)", collection, event)
        return True

    async def subscribe(self, *collections: str) -> AsyncIterator[InvalidationToken]:
        """Yield a token for each change on any of collections until cancelled."""
        if not self.is_available() or self.redis is None:
            logger.warning("Redis not available for invalidation subscription")
            return
        channels = [self._get_channel(c) for c in collections]
        pubsub = self.redis.pubsub()
        try:
            await pubsub.subscribe(*channels)
            logger.info("Subscribed to %s", ", ".join(channels))
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                try:
                    yield InvalidationToken.from_dict(json.loads(message["data"]))
                except (json.JSONDecodeError, KeyError, TypeError):
                    logger.exception("Failed to parse invalidation message")
        except redis.RedisError:
            logger.exception("Invalidation subscription error")
        finally:
            await pubsub.unsubscribe(*channels)
            await pubsub.aclose()
            logger.info("Unsubscribed from %s", ", ".join(channels))
