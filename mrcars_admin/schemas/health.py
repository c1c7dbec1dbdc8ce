"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    realtime: str = Field(
        default="local",
        description="Invalidation transport in use: 'redis' or 'local'",
    )
