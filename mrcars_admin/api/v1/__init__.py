"""API v1: routers and dependencies."""

from mrcars_admin.api.v1.router import api_router

__all__ = ["api_router"]
