"""Auth API schemas."""

from typing import Any

from pydantic import BaseModel, EmailStr, Field


class PasswordResetRequest(BaseModel):
    """Request body for POST /auth/reset-password."""

    email: EmailStr = Field(..., description="Address to send the reset link to")


class PasswordResetResponse(BaseModel):
    """Reset dispatch accepted by the provider (delivery is not confirmed)."""

    status: str = "sent"


class SignOutResponse(BaseModel):
    status: str = "signed_out"


class SessionResponse(BaseModel):
    """Current identity, or authenticated=false when there is no valid session."""

    authenticated: bool
    user_id: str | None = None
    email: str | None = None
    role: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
