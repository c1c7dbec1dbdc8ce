"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (Supabase clients, invalidation
channel, WebSocket manager, telemetry).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from mrcars_admin.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: Supabase clients, WebSocket manager, invalidation
    channel (Redis if enabled and reachable, otherwise in-process),
    telemetry (if enabled). Shutdown runs in reverse.
    """
    settings = get_settings()

    # ---- Startup ----
    from mrcars_admin.infrastructure.supabase import (
        get_auth_client,
        get_store_client,
        init_supabase,
    )

    init_supabase(settings)
    app.state.store = get_store_client()
    app.state.auth_provider = get_auth_client()

    from mrcars_admin.api.websocket import ConnectionManager

    app.state.ws_manager = ConnectionManager()

    from mrcars_admin.infrastructure.messaging import (
        LocalInvalidationChannel,
        RedisInvalidationChannel,
    )

    channel = None
    if settings.redis_enabled:
        redis_channel = RedisInvalidationChannel(settings=settings)
        await redis_channel.connect()
        if redis_channel.is_available():
            channel = redis_channel
        else:
            logger.warning("Redis unavailable; using in-process invalidation channel")
    app.state.invalidation_channel = channel or LocalInvalidationChannel()

    if settings.telemetry_enabled:
        from mrcars_admin.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        if isinstance(channel, RedisInvalidationChannel):
            telemetry.instrument_redis()
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    if isinstance(app.state.invalidation_channel, RedisInvalidationChannel):
        await app.state.invalidation_channel.disconnect()

    from mrcars_admin.infrastructure.supabase import close_supabase

    await close_supabase()

    from mrcars_admin.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")
