"""PostgREST and GoTrue clients against httpx.MockTransport."""

from datetime import UTC, datetime

import httpx
import pytest

from mrcars_admin.application.dtos.query import Filter, Query
from mrcars_admin.domain.exceptions import AuthProviderException, StoreException
from mrcars_admin.infrastructure.supabase import SupabaseAuthClient, SupabaseRESTClient
from mrcars_admin.infrastructure.supabase._rest_client import (
    parse_content_range,
    render_filter,
    render_query,
)

BASE = "https://project.supabase.test"


def _client(handler, cls=SupabaseRESTClient):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return cls(BASE, "service-key", http_client=http), http


def test_render_filters() -> None:
    assert render_filter(Filter("status", "eq", "active")) == ("status", "eq.active")
    assert render_filter(Filter("read", "eq", False)) == ("read", "eq.false")
    assert render_filter(Filter("deleted_at", "eq", None)) == ("deleted_at", "is.null")
    assert render_filter(Filter("deleted_at", "neq", None)) == ("deleted_at", "not.is.null")
    assert render_filter(Filter("id", "in", ("a", "b,c"))) == ("id", 'in.(a,"b,c")')
    start = datetime(2025, 3, 1, tzinfo=UTC)
    assert render_filter(Filter("created_at", "gte", start)) == (
        "created_at",
        "gte.2025-03-01T00:00:00+00:00",
    )


def test_render_query_skips_order_and_limit_for_counts() -> None:
    query = Query("orders", "total_amount").where_eq("status", "pending").order_by("created_at").take(5)
    assert render_query(query) == [
        ("select", "total_amount"),
        ("status", "eq.pending"),
        ("order", "created_at.desc"),
        ("limit", "5"),
    ]
    assert render_query(query.count()) == [("select", "total_amount"), ("status", "eq.pending")]


def test_render_query_ascending_and_nulls_last() -> None:
    assert render_query(Query("subscription_plans").order_by("sort_order", descending=False)) == [
        ("select", "*"),
        ("order", "sort_order.asc"),
    ]
    assert render_query(Query("conversations").order_by("last_message_at", nulls_last=True)) == [
        ("select", "*"),
        ("order", "last_message_at.desc.nullslast"),
    ]


def test_parse_content_range() -> None:
    assert parse_content_range("0-9/120") == 120
    assert parse_content_range("*/0") == 0
    assert parse_content_range("0-9/*") is None
    assert parse_content_range(None) is None


async def test_fetch_rows_sends_auth_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "o1"}])

    client, http = _client(handler)
    async with http:
        result = await client.fetch(Query("orders").order_by("created_at").take(1))
    assert result.rows == [{"id": "o1"}]
    assert result.count is None
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/orders"
    assert request.headers["apikey"] == "service-key"
    assert request.headers["authorization"] == "Bearer service-key"
    assert request.url.params["order"] == "created_at.desc"
    assert "prefer" not in request.headers


async def test_count_uses_head_and_content_range() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers={"Content-Range": "*/42"})

    client, http = _client(handler)
    async with http:
        result = await client.fetch(Query("users").count())
    assert result.count == 42
    assert result.rows == []
    assert seen[0].method == "HEAD"
    assert seen[0].headers["prefer"] == "count=exact"


async def test_fetch_error_status_raises_store_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "JWT expired"})

    client, http = _client(handler)
    async with http:
        with pytest.raises(StoreException) as exc_info:
            await client.fetch(Query("orders"))
    assert exc_info.value.message == "JWT expired"
    assert exc_info.value.details == {"collection": "orders", "status_code": 401}


async def test_transport_error_raises_store_exception() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    client, http = _client(handler)
    async with http:
        with pytest.raises(StoreException):
            await client.fetch(Query("orders"))


async def test_update_and_delete_send_filters() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    client, http = _client(handler)
    filters = Query("notifications").where_eq("id", "n1").filters
    async with http:
        await client.update("notifications", {"read": True}, filters)
        await client.delete("notifications", filters)
    patch, delete = seen
    assert patch.method == "PATCH"
    assert patch.url.params["id"] == "eq.n1"
    assert patch.content == b'{"read":true}' or patch.content == b'{"read": true}'
    assert patch.headers["prefer"] == "return=minimal"
    assert delete.method == "DELETE"
    assert delete.url.params["id"] == "eq.n1"


async def test_unfiltered_writes_are_refused() -> None:
    client, http = _client(lambda request: httpx.Response(204))
    async with http:
        with pytest.raises(StoreException):
            await client.update("users", {"is_active": False}, ())
        with pytest.raises(StoreException):
            await client.delete("users", ())


async def test_auth_get_session_maps_user() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/auth/v1/user"
        assert request.headers["authorization"] == "Bearer user-token"
        return httpx.Response(
            200,
            json={"id": "u1", "email": "admin@example.com", "role": "authenticated", "user_metadata": {"username": "admin"}},
        )

    client, http = _client(handler, SupabaseAuthClient)
    async with http:
        session = await client.get_session("user-token")
    assert session is not None
    assert session.user_id == "u1"
    assert session.email == "admin@example.com"
    assert session.metadata == {"username": "admin"}
    assert session.access_token == "user-token"


async def test_auth_get_session_expired_token_is_none() -> None:
    client, http = _client(lambda request: httpx.Response(401, json={"msg": "invalid JWT"}), SupabaseAuthClient)
    async with http:
        assert await client.get_session("expired") is None
        assert await client.get_session("") is None


async def test_auth_password_reset_passes_redirect() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    client, http = _client(handler, SupabaseAuthClient)
    async with http:
        await client.send_password_reset("a@example.com", redirect_to="https://admin.test/reset")
    assert seen[0].url.path == "/auth/v1/recover"
    assert seen[0].url.params["redirect_to"] == "https://admin.test/reset"


async def test_auth_provider_rejection_carries_provider_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"msg": "For security purposes, you can only request this once every 60 seconds"})

    client, http = _client(handler, SupabaseAuthClient)
    async with http:
        with pytest.raises(AuthProviderException) as exc_info:
            await client.send_password_reset("a@example.com")
    assert exc_info.value.message.startswith("For security purposes")
    assert exc_info.value.details == {"provider_status": 429}
