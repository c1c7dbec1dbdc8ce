"""WebSocket endpoints: one live page per connection.

Each socket mounts a page (dashboard, notifications or a managed resource)
in a PageSession: the client gets a snapshot on connect and after every
invalidation of the page's collections, and may send commands such as
``{"action": "mark_read", "id": "..."}``. The connection manager and the
invalidation channel come from app.state (set in lifespan).

The session token is read like for HTTP requests (Authorization header,
?token=..., or the auth cookie) and verified with the auth provider before
the connection is registered.
"""

import json
import logging
from collections.abc import Callable

from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect

from mrcars_admin.api.v1.dependencies import (
    access_token_for,
    get_dashboard_page,
    get_notifications_page,
    get_resource_page,
)
from mrcars_admin.application.use_cases import Page, PageSession
from mrcars_admin.core.config import get_settings
from mrcars_admin.domain.exceptions import DashboardException
from mrcars_admin.schemas.websocket import WebSocketStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def _reject_websocket(websocket: WebSocket, reason: str, code: int = 1008) -> None:
    """Accept then immediately close with code/reason so client gets a proper close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


async def _authenticate(websocket: WebSocket) -> bool:
    auth = getattr(websocket.app.state, "auth_provider", None)
    if auth is None:
        await _reject_websocket(websocket, "Auth provider not initialized", code=1011)
        return False
    token = access_token_for(websocket, get_settings())
    if not token:
        await _reject_websocket(websocket, "Missing token")
        return False
    try:
        session = await auth.get_session(token)
    except DashboardException:
        logger.warning("Auth provider failed while verifying WebSocket session")
        await _reject_websocket(websocket, "Auth provider unavailable", code=1011)
        return False
    if session is None:
        await _reject_websocket(websocket, "Invalid token")
        return False
    return True


async def _serve_page(
    websocket: WebSocket, page_name: str, build_page: Callable[[], Page]
) -> None:
    """Authenticate, mount the page, then run commands until the client disconnects."""
    if not await _authenticate(websocket):
        return
    store = getattr(websocket.app.state, "store", None)
    if store is None:
        await _reject_websocket(websocket, "Collection store not initialized", code=1011)
        return
    try:
        page = build_page()
    except DashboardException as e:
        await _reject_websocket(websocket, e.message)
        return
    manager = websocket.app.state.ws_manager
    channel = getattr(websocket.app.state, "invalidation_channel", None)
    await manager.connect(websocket, page_name)
    session = PageSession(page, websocket.send_json, channel)
    try:
        await session.start()
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                message = None
            if not isinstance(message, dict):
                await websocket.send_json(
                    {"type": "error", "error": "VALIDATION_ERROR", "message": "Invalid JSON command"}
                )
                continue
            await session.handle_command(message)
    except WebSocketDisconnect:
        pass
    finally:
        await session.close()
        await manager.disconnect(websocket)


@router.websocket("/dashboard")
async def dashboard_socket(websocket: WebSocket):
    await _serve_page(
        websocket,
        "dashboard",
        lambda: get_dashboard_page(websocket.app.state.store),
    )


@router.websocket("/notifications")
async def notifications_socket(websocket: WebSocket):
    await _serve_page(
        websocket,
        "notifications",
        lambda: get_notifications_page(websocket.app.state.store),
    )


@router.websocket("/resources/{resource}")
async def resource_socket(websocket: WebSocket, resource: str):
    """Live table for one managed resource; unknown names close with 1008."""
    await _serve_page(
        websocket,
        f"resources:{resource}",
        lambda: get_resource_page(resource, websocket.app.state.store),
    )


@router.get("/status", response_model=WebSocketStatusResponse)
async def websocket_status(request: Request) -> WebSocketStatusResponse:
    """Active WebSocket connections, in total and per page."""
    manager = getattr(request.app.state, "ws_manager", None)
    if manager is None:
        return WebSocketStatusResponse(total_connections=0)
    by_page = await manager.get_counts_by_page()
    return WebSocketStatusResponse(total_connections=sum(by_page.values()), by_page=by_page)
