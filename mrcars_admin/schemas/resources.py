"""Resource management API schemas."""

from typing import Any

from pydantic import BaseModel, Field

from mrcars_admin.schemas.outcome import OutcomeResponse


class ResourceListResponse(BaseModel):
    """Response for GET /resources/{resource}."""

    resource: str
    rows: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    error: str | None = None
    statuses: list[str] = Field(default_factory=list, description="Allowed status values")
    toggles: list[str] = Field(default_factory=list, description="Flags that can be toggled")
    deletable: bool = False


class StatusUpdateRequest(BaseModel):
    """Request body for PATCH /resources/{resource}/{id}/status."""

    status: str = Field(..., min_length=1)


class ResourceMutationResponse(BaseModel):
    outcome: OutcomeResponse
    row: dict[str, Any] | None = Field(
        default=None, description="Row after the write (None once deleted)"
    )


class PaymentApprovalRequest(BaseModel):
    """Request body for POST /resources/payments/{id}/approve."""

    notes: str = Field(default="", max_length=2000)


class PaymentRejectionRequest(BaseModel):
    """Request body for POST /resources/payments/{id}/reject."""

    reason: str = Field(..., min_length=1, max_length=2000)
