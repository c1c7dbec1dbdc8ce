"""Mutation outcome schema (toast payload)."""

from pydantic import BaseModel

from mrcars_admin.application.dtos.outcome import MutationOutcome
from mrcars_admin.domain.enums import OutcomeLevel


class OutcomeResponse(BaseModel):
    level: OutcomeLevel
    title: str
    message: str
    reason: str | None = None

    @classmethod
    def from_outcome(cls, outcome: MutationOutcome) -> "OutcomeResponse":
        return cls(
            level=outcome.level,
            title=outcome.title,
            message=outcome.message,
            reason=outcome.reason,
        )
