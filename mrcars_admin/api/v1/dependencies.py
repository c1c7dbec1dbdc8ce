"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the store, auth provider and invalidation
channel (created in lifespan and held on app.state) and builds page use
cases from them. Routes depend only on these functions; tests replace them
through app.dependency_overrides.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Iterable, Mapping
from typing import Annotated

from fastapi import Depends, HTTPException
from starlette.requests import HTTPConnection

from mrcars_admin.application.dtos.auth import AuthSession
from mrcars_admin.application.interfaces.auth import IAuthProvider
from mrcars_admin.application.interfaces.realtime import IInvalidationChannel
from mrcars_admin.application.interfaces.store import ICollectionStore
from mrcars_admin.application.services import ActivityReconciler, StatsAggregator
from mrcars_admin.application.use_cases import (
    DashboardPage,
    NotificationsPage,
    PaymentVerificationPage,
    ResourcePage,
    build_resource_page,
    get_resource,
)
from mrcars_admin.core.config import Settings, get_settings
from mrcars_admin.domain.exceptions import AuthenticationException

logger = logging.getLogger(__name__)

_BASE64_PREFIX = "base64-"


def get_store(conn: HTTPConnection) -> ICollectionStore:
    """Collection store from app.state (set in lifespan)."""
    store = getattr(conn.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Collection store not initialized")
    return store


def get_auth_provider(conn: HTTPConnection) -> IAuthProvider:
    """Auth provider from app.state (set in lifespan)."""
    provider = getattr(conn.app.state, "auth_provider", None)
    if provider is None:
        raise HTTPException(status_code=503, detail="Auth provider not initialized")
    return provider


def get_invalidation_channel(conn: HTTPConnection) -> IInvalidationChannel | None:
    """Invalidation channel from app.state; None means no live updates."""
    return getattr(conn.app.state, "invalidation_channel", None)


def _token_from_cookie_value(value: str) -> str | None:
    """Access token from a stored auth cookie.

    Accepts a bare token, a JSON array ``[access_token, refresh_token, ...]``,
    a JSON object with ``access_token``, or either JSON form behind a
    ``base64-`` prefix.
    """
    raw = value.strip()
    if raw.startswith(_BASE64_PREFIX):
        encoded = raw[len(_BASE64_PREFIX):]
        try:
            raw = base64.urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4)).decode()
        except (binascii.Error, UnicodeDecodeError):
            return None
    if raw[:1] in ("[", "{"):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return None
        if isinstance(data, list) and data and isinstance(data[0], str):
            return data[0] or None
        if isinstance(data, dict) and isinstance(data.get("access_token"), str):
            return data["access_token"] or None
        return None
    return raw or None


def extract_access_token(
    authorization: str | None,
    cookies: Mapping[str, str],
    markers: Iterable[str],
    query_token: str | None = None,
) -> str | None:
    """Bearer header first, then an explicit query token, then the first auth cookie."""
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
        if token:
            return token
    if query_token:
        return query_token
    markers = [m for m in markers if m]
    for name, value in cookies.items():
        if any(marker in name for marker in markers):
            token = _token_from_cookie_value(value)
            if token:
                return token
    return None


def access_token_for(conn: HTTPConnection, settings: Settings) -> str | None:
    return extract_access_token(
        conn.headers.get("Authorization"),
        conn.cookies,
        settings.cookie_markers,
        conn.query_params.get("token"),
    )


async def get_optional_session(
    conn: HTTPConnection,
    auth: Annotated[IAuthProvider, Depends(get_auth_provider)],
) -> AuthSession | None:
    """Verified session for the request, or None when signed out."""
    token = access_token_for(conn, get_settings())
    if not token:
        return None
    return await auth.get_session(token)


async def get_current_session(
    session: Annotated[AuthSession | None, Depends(get_optional_session)],
) -> AuthSession:
    """Verified session; raises AuthenticationException (401) when signed out."""
    if session is None:
        raise AuthenticationException()
    return session


CurrentSession = Annotated[AuthSession, Depends(get_current_session)]


def get_dashboard_page(
    store: Annotated[ICollectionStore, Depends(get_store)],
) -> DashboardPage:
    """Dashboard page wired with aggregator and reconciler (composition root)."""
    settings = get_settings()
    return DashboardPage(
        StatsAggregator(store, months=settings.stats_series_months),
        ActivityReconciler(store, limit=settings.activity_feed_limit),
    )


def get_notifications_page(
    store: Annotated[ICollectionStore, Depends(get_store)],
) -> NotificationsPage:
    return NotificationsPage(store, limit=get_settings().notifications_page_limit)


def get_resource_page(
    resource: str,
    store: Annotated[ICollectionStore, Depends(get_store)],
) -> ResourcePage:
    """Resource page for the {resource} path segment; unknown names are 404."""
    return build_resource_page(store, resource)


def get_payments_page(
    store: Annotated[ICollectionStore, Depends(get_store)],
) -> PaymentVerificationPage:
    return PaymentVerificationPage(store, get_resource("payments"))
