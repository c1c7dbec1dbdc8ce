"""Realtime invalidation transports."""

from mrcars_admin.infrastructure.messaging.local import LocalInvalidationChannel
from mrcars_admin.infrastructure.messaging.redis_pubsub import RedisInvalidationChannel

__all__ = ["LocalInvalidationChannel", "RedisInvalidationChannel"]
