"""Mutation outcome: the user-visible signal (toast) produced by the gateway."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from mrcars_admin.domain.enums import OutcomeLevel


@dataclass(frozen=True)
class MutationOutcome:
    level: OutcomeLevel
    title: str
    message: str
    reason: str | None = None

    @property
    def ok(self) -> bool:
        """True unless the remote write failed (INFO counts as ok)."""
        return self.level is not OutcomeLevel.ERROR

    @classmethod
    def success(cls, message: str) -> MutationOutcome:
        return cls(OutcomeLevel.SUCCESS, "Success", message)

    @classmethod
    def info(cls, message: str) -> MutationOutcome:
        return cls(OutcomeLevel.INFO, "Info", message)

    @classmethod
    def error(cls, message: str, reason: str | None = None) -> MutationOutcome:
        return cls(OutcomeLevel.ERROR, "Error", message, reason)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["level"] = self.level.value
        return data
