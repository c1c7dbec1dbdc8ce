"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from mrcars_admin.api.v1.dependencies (no manual store or
page construction).
"""

from fastapi import APIRouter

from mrcars_admin.api.v1.endpoints import (
    auth,
    dashboard,
    health,
    notifications,
    realtime,
    resources,
    websocket as ws_endpoint,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)
api_router.include_router(resources.router, prefix="/resources", tags=["resources"])
api_router.include_router(realtime.router, prefix="/realtime", tags=["realtime"])
api_router.include_router(ws_endpoint.router, prefix="/ws", tags=["websocket"])
