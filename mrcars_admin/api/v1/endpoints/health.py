"""Health check endpoint. Used by liveness checks; no auth."""

from fastapi import APIRouter, Request

from mrcars_admin.infrastructure.messaging import RedisInvalidationChannel
from mrcars_admin.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok plus the invalidation transport in use."""
    channel = getattr(request.app.state, "invalidation_channel", None)
    realtime = "redis" if isinstance(channel, RedisInvalidationChannel) else "local"
    return HealthResponse(realtime=realtime)
