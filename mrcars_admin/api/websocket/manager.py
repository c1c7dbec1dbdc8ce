"""WebSocket connection manager.

Holds active connections per page ("dashboard", "notifications",
"resources:<name>"). Use via app.state.ws_manager (set in lifespan). Each
connection also owns a PageSession; the manager only tracks membership.
"""

from __future__ import annotations

import asyncio

from fastapi import WebSocket


class ConnectionManager:
    """Manages WebSocket connections grouped by page.

    - connect() accepts and registers the socket under a page name.
    - connection counts are lock-protected for concurrent access.
    """

    def __init__(self) -> None:
        self._connections_by_page: dict[str, set[WebSocket]] = {}
        self._websocket_to_page: dict[WebSocket, str] = {}
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket, page: str) -> None:
        """Accept and register a new connection for the given page."""
        await websocket.accept()
        async with self._lock:
            self._connections_by_page.setdefault(page, set()).add(websocket)
            self._websocket_to_page[websocket] = page

    async def disconnect(self, websocket: WebSocket) -> None:
        """Remove a connection (call on disconnect)."""
        async with self._lock:
            self._forget(websocket)

    def _forget(self, websocket: WebSocket) -> None:
        page = self._websocket_to_page.pop(websocket, None)
        if page and page in self._connections_by_page:
            conns = self._connections_by_page[page]
            conns.discard(websocket)
            if not conns:
                del self._connections_by_page[page]

    async def get_connection_count(self, page: str | None = None) -> int:
        """Return active connections, for one page or in total (lock-safe)."""
        async with self._lock:
            if page is not None:
                return len(self._connections_by_page.get(page, ()))
            return sum(len(c) for c in self._connections_by_page.values())

    async def get_counts_by_page(self) -> dict[str, int]:
        async with self._lock:
            return {page: len(c) for page, c in self._connections_by_page.items()}
