"""Pytest configuration and fixtures for mrcars-admin.

Uses mrcars_admin.main:app for HTTP tests with the store, auth provider and
invalidation channel replaced through dependency_overrides (ASGITransport
does not run the lifespan). Required env is set before the app is imported.
"""

import os

os.environ.setdefault("SUPABASE_URL", "https://project.supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")
os.environ["REDIS_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["TELEMETRY_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient

from mrcars_admin.api.v1.dependencies import (
    get_auth_provider,
    get_invalidation_channel,
    get_store,
)
from mrcars_admin.core.config import get_settings
from mrcars_admin.infrastructure.messaging import LocalInvalidationChannel
from mrcars_admin.main import app
from tests.fakes import ADMIN_SESSION, FakeAuthProvider, FakeStore

get_settings.cache_clear()


@pytest.fixture
def store() -> FakeStore:
    """Empty in-memory store; tests seed store.tables directly."""
    return FakeStore()


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def channel() -> LocalInvalidationChannel:
    return LocalInvalidationChannel()


@pytest.fixture
async def client(store, auth_provider, channel) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with fakes injected."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_invalidation_channel] = lambda: channel
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer header for the seeded admin session."""
    return {"Authorization": f"Bearer {ADMIN_SESSION.access_token}"}
