"""HTTP middleware: timeout, request ID, security headers, route guard.

Applied in main app; order matters (last added = outermost).
"""

from mrcars_admin.middleware.request_id import RequestIDMiddleware
from mrcars_admin.middleware.route_guard import RouteGuardMiddleware, resolve_redirect
from mrcars_admin.middleware.security_headers import SecurityHeadersMiddleware
from mrcars_admin.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RouteGuardMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
    "resolve_redirect",
]
