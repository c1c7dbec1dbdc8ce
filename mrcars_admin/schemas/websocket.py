"""WebSocket API schemas."""

from pydantic import BaseModel, Field


class WebSocketStatusResponse(BaseModel):
    """Response for GET /ws/status (connection counts)."""

    total_connections: int = Field(..., description="Number of active WebSocket connections")
    by_page: dict[str, int] = Field(default_factory=dict, description="Connections per page")
