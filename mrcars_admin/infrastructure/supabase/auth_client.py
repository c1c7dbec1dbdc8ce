"""Supabase Auth (GoTrue) client: session lookup, sign-out, password reset."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from mrcars_admin.application.dtos.auth import AuthSession
from mrcars_admin.domain.exceptions import AuthProviderException

logger = logging.getLogger(__name__)

_AUTH_PATH = "/auth/v1"


def _provider_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"Auth provider returned HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"Auth provider returned HTTP {resp.status_code}"


class SupabaseAuthClient:
    """IAuthProvider over the GoTrue REST API."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base = base_url.rstrip("/") + _AUTH_PATH
        self._anon_key = anon_key
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {access_token or self._anon_key}",
        }

    async def _call(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(method, f"{self._base}{path}", **kwargs)
        except httpx.HTTPError as e:
            raise AuthProviderException(f"Auth provider unreachable: {e}") from e

    async def get_session(self, access_token: str) -> AuthSession | None:
        """Resolve access_token to a user; None if the token is missing, expired or revoked."""
        if not access_token:
            return None
        resp = await self._call("GET", "/user", headers=self._headers(access_token))
        if resp.status_code in (401, 403):
            return None
        if resp.status_code >= 400:
            raise AuthProviderException(_provider_message(resp), resp.status_code)
        user = resp.json()
        return AuthSession(
            user_id=str(user["id"]),
            email=user.get("email"),
            access_token=access_token,
            role=user.get("role"),
            metadata=user.get("user_metadata") or {},
        )

    async def sign_out(self, access_token: str) -> None:
        resp = await self._call("POST", "/logout", headers=self._headers(access_token))
        if resp.status_code >= 400:
            raise AuthProviderException(_provider_message(resp), resp.status_code)
        logger.info("Session signed out")

    async def send_password_reset(self, email: str, redirect_to: str | None = None) -> None:
        """Ask GoTrue to email a recovery link (delivery is not confirmed)."""
        params = {"redirect_to": redirect_to} if redirect_to else None
        resp = await self._call(
            "POST", "/recover", headers=self._headers(), params=params, json={"email": email}
        )
        if resp.status_code >= 400:
            raise AuthProviderException(_provider_message(resp), resp.status_code)
        logger.info("Password reset requested")
