"""Authentication provider interface (port)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mrcars_admin.application.dtos.auth import AuthSession


class IAuthProvider(Protocol):
    """Protocol for the hosted auth provider (DIP)."""

    async def get_session(self, access_token: str) -> AuthSession | None:
        """Return the identity for access_token, or None when not signed in."""

    async def sign_out(self, access_token: str) -> None:
        """Invalidate the session. Raises AuthProviderException on rejection."""

    async def send_password_reset(self, email: str, redirect_to: str | None = None) -> None:
        """Ask the provider to email a reset link.

        Success means dispatch was accepted, not that the email was delivered.
        Raises AuthProviderException on rejection.
        """
