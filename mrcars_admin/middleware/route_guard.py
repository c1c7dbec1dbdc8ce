"""Route guard middleware.

Pre-routing redirect rule for the admin pages:

- no auth cookie and path under the protected prefix → 307 to the login page;
- auth cookie present and path under the auth prefix → 307 to the dashboard;
- anything else passes through.

This is a presence check on cookie names only, not session verification;
API endpoints verify the token with the auth provider. Uses raw ASGI (no
BaseHTTPMiddleware) like the rest of the stack.
"""

import logging
from collections.abc import Iterable
from typing import Callable

from starlette.responses import RedirectResponse

from mrcars_admin.core.config import Settings, get_settings
from mrcars_admin.middleware._asgi import get_cookies

logger = logging.getLogger(__name__)


def _under(path: str, prefix: str) -> bool:
    """Prefix match on whole path segments (/dashboard, /dashboard/..., not /dashboardx)."""
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def has_auth_cookie(cookie_names: Iterable[str], markers: Iterable[str]) -> bool:
    """True if any cookie name contains any marker substring."""
    markers = [m for m in markers if m]
    return any(marker in name for name in cookie_names for marker in markers)


def resolve_redirect(
    path: str, cookie_names: Iterable[str], settings: Settings
) -> str | None:
    """Return the redirect target for a request, or None to pass through."""
    authenticated = has_auth_cookie(cookie_names, settings.cookie_markers)
    if not authenticated and _under(path, settings.protected_prefix):
        return settings.login_path
    if authenticated and _under(path, settings.auth_prefix):
        return settings.dashboard_path
    return None


def RouteGuardMiddleware(app: Callable, settings: Settings | None = None) -> Callable:
    """Redirect page requests per cookie presence. HTTP only; websockets pass through."""
    resolved = settings or get_settings()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        path = scope.get("path", "")
        target = resolve_redirect(path, get_cookies(scope).keys(), resolved)
        if target is None:
            await app(scope, receive, send)
            return
        logger.debug("Route guard redirect %s -> %s", path, target)
        response = RedirectResponse(target, status_code=307)
        await response(scope, receive, send)

    return asgi_app
