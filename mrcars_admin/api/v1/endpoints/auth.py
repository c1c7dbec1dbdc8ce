"""Auth endpoints: password reset, sign-out, current session.

Sign-in itself happens against the auth provider from the browser; this
service only reads and ends sessions.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from mrcars_admin.api.v1.dependencies import (
    CurrentSession,
    get_auth_provider,
    get_optional_session,
)
from mrcars_admin.application.dtos.auth import AuthSession
from mrcars_admin.application.interfaces.auth import IAuthProvider
from mrcars_admin.core.config import get_settings
from mrcars_admin.core.limiter import limit_auth
from mrcars_admin.schemas.auth import (
    PasswordResetRequest,
    PasswordResetResponse,
    SessionResponse,
    SignOutResponse,
)

router = APIRouter()


@router.post("/reset-password", response_model=PasswordResetResponse)
@limit_auth
async def reset_password(
    request: Request,
    body: PasswordResetRequest,
    auth: Annotated[IAuthProvider, Depends(get_auth_provider)],
) -> PasswordResetResponse:
    """Ask the provider to email a reset link.

    Provider rejections surface as 400 with the provider's own message.
    """
    await auth.send_password_reset(
        body.email, redirect_to=get_settings().password_reset_redirect_url
    )
    return PasswordResetResponse()


@router.post("/sign-out", response_model=SignOutResponse)
@limit_auth
async def sign_out(
    request: Request,
    session: CurrentSession,
    auth: Annotated[IAuthProvider, Depends(get_auth_provider)],
) -> SignOutResponse:
    await auth.sign_out(session.access_token)
    return SignOutResponse()


@router.get("/session", response_model=SessionResponse)
async def current_session(
    session: Annotated[AuthSession | None, Depends(get_optional_session)],
) -> SessionResponse:
    """Current identity, or authenticated=false (never 401)."""
    if session is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(
        authenticated=True,
        user_id=session.user_id,
        email=session.email,
        role=session.role,
        metadata=session.metadata,
    )
