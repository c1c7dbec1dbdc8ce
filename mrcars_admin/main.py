"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers, HTML pages.
No business logic here. See mrcars_admin.core.lifespan and
mrcars_admin.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from mrcars_admin.api.v1 import api_router
from mrcars_admin.core.config import get_settings
from mrcars_admin.core.exception_handlers import register_exception_handlers
from mrcars_admin.core.lifespan import create_lifespan
from mrcars_admin.core.limiter import limiter
from mrcars_admin.middleware import (
    RequestIDMiddleware,
    RouteGuardMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from mrcars_admin.pages import render_dashboard_page, render_login_page, render_root_page
from mrcars_admin.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost. Order: timeout → request ID → route guard → security → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RouteGuardMiddleware, settings=settings)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/", response_class=HTMLResponse)
    def root() -> HTMLResponse:
        """Landing page with links to sign in and to API documentation."""
        return HTMLResponse(content=render_root_page(settings.app_name))

    @app.get(settings.login_path, response_class=HTMLResponse)
    def login() -> HTMLResponse:
        return HTMLResponse(content=render_login_page(settings.app_name))

    @app.get(settings.dashboard_path, response_class=HTMLResponse)
    def dashboard() -> HTMLResponse:
        """Admin overview; the route guard redirects here only with an auth cookie."""
        return HTMLResponse(content=render_dashboard_page(settings.app_name))

    return app


app = create_app()
