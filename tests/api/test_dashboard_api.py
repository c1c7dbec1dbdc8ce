"""Dashboard and auth endpoints."""

from httpx import AsyncClient

from tests.fakes import FakeAuthProvider, FakeStore


async def test_dashboard_requires_session(client: AsyncClient) -> None:
    response = await client.get("/api/v1/dashboard")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_dashboard_rejects_unknown_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/dashboard", headers={"Authorization": "Bearer forged"})
    assert response.status_code == 401


async def test_dashboard_returns_summary_series_and_activity(
    client: AsyncClient, store: FakeStore, auth_headers: dict[str, str]
) -> None:
    store.tables["users"] = [{"id": "u1", "username": "bob", "email": "b@x.io", "created_at": "2020-01-01T00:00:00Z"}]
    store.tables["cars"] = [{"id": "c1", "status": "active", "created_at": "2020-01-02T00:00:00Z"}]
    response = await client.get("/api/v1/dashboard", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["total_users"] == 1
    assert data["summary"]["active_listings"] == 1
    assert data["summary"]["inactive_listings"] == 0
    assert len(data["series"]) == 12
    assert [a["id"] for a in data["activity"]] == ["car_c1", "user_u1"]
    assert data["error"] is None


async def test_dashboard_degrades_when_store_fails(
    client: AsyncClient, store: FakeStore, auth_headers: dict[str, str]
) -> None:
    store.fail_on = lambda q: True
    response = await client.get("/api/v1/dashboard", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["total_orders"] == 0
    assert data["activity"] == []
    assert all(b["revenue"] == 0 for b in data["series"])


async def test_dashboard_accepts_session_cookie(client: AsyncClient) -> None:
    client.cookies.set("sb-project-auth-token", "valid-token")
    response = await client.get("/api/v1/dashboard")
    assert response.status_code == 200


async def test_session_endpoint_reports_identity(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    anonymous = await client.get("/api/v1/auth/session")
    assert anonymous.status_code == 200
    assert anonymous.json()["authenticated"] is False

    response = await client.get("/api/v1/auth/session", headers=auth_headers)
    body = response.json()
    assert body["authenticated"] is True
    assert body["user_id"] == "admin-1"
    assert body["email"] == "admin@mrcars.test"


async def test_password_reset_dispatches_with_redirect(
    client: AsyncClient, auth_provider: FakeAuthProvider
) -> None:
    response = await client.post("/api/v1/auth/reset-password", json={"email": "user@example.com"})
    assert response.status_code == 200
    assert response.json() == {"status": "sent"}
    assert auth_provider.reset_requests == [
        ("user@example.com", "http://localhost:3000/auth/update-password")
    ]


async def test_password_reset_rejects_invalid_email(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/reset-password", json={"email": "not-an-email"})
    assert response.status_code == 422


async def test_password_reset_surfaces_provider_message(
    client: AsyncClient, auth_provider: FakeAuthProvider
) -> None:
    auth_provider.reject_reset = "Email rate limit exceeded"
    response = await client.post("/api/v1/auth/reset-password", json={"email": "user@example.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Email rate limit exceeded"


async def test_sign_out_ends_session(
    client: AsyncClient, auth_provider: FakeAuthProvider, auth_headers: dict[str, str]
) -> None:
    response = await client.post("/api/v1/auth/sign-out", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"status": "signed_out"}
    assert auth_provider.signed_out == ["valid-token"]
    again = await client.post("/api/v1/auth/sign-out", headers=auth_headers)
    assert again.status_code == 401
