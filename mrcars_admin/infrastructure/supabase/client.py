"""Supabase clients (REST-based, no supabase-py).

Initialized at app startup from SUPABASE_URL and the API keys. The store
and auth clients share one httpx connection pool, closed on shutdown.
"""

import logging

import httpx

from mrcars_admin.core.config import Settings, get_settings
from mrcars_admin.infrastructure.supabase._rest_client import SupabaseRESTClient
from mrcars_admin.infrastructure.supabase.auth_client import SupabaseAuthClient

logger = logging.getLogger(__name__)

_http: httpx.AsyncClient | None = None
_store: SupabaseRESTClient | None = None
_auth: SupabaseAuthClient | None = None


def init_supabase(settings: Settings | None = None) -> None:
    """Create the shared HTTP pool and both clients. Idempotent."""
    global _http, _store, _auth
    if _http is not None:
        return
    settings = settings or get_settings()
    _http = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    _store = SupabaseRESTClient(
        settings.supabase_url, settings.supabase_api_key, http_client=_http
    )
    _auth = SupabaseAuthClient(
        settings.supabase_url,
        settings.supabase_anon_key.get_secret_value(),
        http_client=_http,
    )
    logger.info("Supabase clients initialized for %s", settings.supabase_url)


def get_store_client() -> SupabaseRESTClient | None:
    """Return the collection store client, or None before init_supabase()."""
    return _store


def get_auth_client() -> SupabaseAuthClient | None:
    """Return the auth client, or None before init_supabase()."""
    return _auth


async def close_supabase() -> None:
    """Close the shared HTTP connection pool. Call from app shutdown."""
    global _http, _store, _auth
    if _http is not None:
        await _http.aclose()
        logger.info("Supabase HTTP client closed")
    _http = _store = _auth = None
