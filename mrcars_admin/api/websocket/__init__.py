"""WebSocket connection management."""

from mrcars_admin.api.websocket.manager import ConnectionManager

__all__ = ["ConnectionManager"]
