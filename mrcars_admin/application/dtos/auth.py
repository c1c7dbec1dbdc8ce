"""DTOs for the authentication provider boundary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AuthSession:
    """Signed-in identity as reported by the auth provider."""

    user_id: str
    email: str | None
    access_token: str
    role: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
