"""Resource management endpoints (orders, listings, forum, users, payments, ...).

The ``{resource}`` segment selects a ResourceDefinition; operations the
definition does not allow are 400, unknown resources 404. Payments are
decided through their own approve/reject routes.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from mrcars_admin.api.v1.dependencies import (
    CurrentSession,
    get_payments_page,
    get_resource_page,
)
from mrcars_admin.application.dtos.outcome import MutationOutcome
from mrcars_admin.application.use_cases import PaymentVerificationPage, ResourcePage
from mrcars_admin.core.limiter import limit_writes
from mrcars_admin.domain.exceptions import MutationFailedException
from mrcars_admin.schemas.outcome import OutcomeResponse
from mrcars_admin.schemas.resources import (
    PaymentApprovalRequest,
    PaymentRejectionRequest,
    ResourceListResponse,
    ResourceMutationResponse,
    StatusUpdateRequest,
)
from mrcars_admin.schemas.tables import coerce_row, coerce_rows

router = APIRouter()

ResourcePageDep = Annotated[ResourcePage, Depends(get_resource_page)]
PaymentsPageDep = Annotated[PaymentVerificationPage, Depends(get_payments_page)]


def _mutation_response(
    page: ResourcePage, row_id: str, outcome: MutationOutcome
) -> ResourceMutationResponse:
    if not outcome.ok:
        raise MutationFailedException(outcome.message, reason=outcome.reason)
    row: dict[str, Any] | None = next(
        (r for r in page.rows if str(r.get("id")) == row_id), None
    )
    return ResourceMutationResponse(
        outcome=OutcomeResponse.from_outcome(outcome),
        row=coerce_row(page.definition.collection, row) if row is not None else None,
    )


@router.get("/{resource}", response_model=ResourceListResponse)
async def list_resource(_: CurrentSession, page: ResourcePageDep) -> ResourceListResponse:
    state = await page.load()
    definition = page.definition
    return ResourceListResponse(
        resource=definition.name,
        rows=coerce_rows(definition.collection, page.rows),
        total=len(page.rows),
        error=state.error,
        statuses=list(definition.statuses),
        toggles=list(definition.toggles),
        deletable=definition.deletable,
    )


@router.patch("/{resource}/{row_id}/status", response_model=ResourceMutationResponse)
@limit_writes
async def set_status(
    request: Request,
    row_id: str,
    body: StatusUpdateRequest,
    _: CurrentSession,
    page: ResourcePageDep,
) -> ResourceMutationResponse:
    await page.load_for_write()
    return _mutation_response(page, row_id, await page.set_status(row_id, body.status))


@router.post("/{resource}/{row_id}/toggle/{field}", response_model=ResourceMutationResponse)
@limit_writes
async def toggle_flag(
    request: Request,
    row_id: str,
    field: str,
    _: CurrentSession,
    page: ResourcePageDep,
) -> ResourceMutationResponse:
    """Flip a boolean flag (is_pinned, is_locked, is_active) on a loaded row."""
    await page.load_for_write()
    return _mutation_response(page, row_id, await page.toggle(row_id, field))


@router.delete("/{resource}/{row_id}", response_model=ResourceMutationResponse)
@limit_writes
async def delete_row(
    request: Request,
    row_id: str,
    _: CurrentSession,
    page: ResourcePageDep,
) -> ResourceMutationResponse:
    await page.load_for_write()
    return _mutation_response(page, row_id, await page.delete(row_id))


@router.post("/payments/{row_id}/approve", response_model=ResourceMutationResponse)
@limit_writes
async def approve_payment(
    request: Request,
    row_id: str,
    body: PaymentApprovalRequest,
    _: CurrentSession,
    page: PaymentsPageDep,
) -> ResourceMutationResponse:
    """Complete a pending payment; subscription payments also activate the subscription."""
    await page.load_for_write()
    return _mutation_response(page, row_id, await page.approve(row_id, body.notes))


@router.post("/payments/{row_id}/reject", response_model=ResourceMutationResponse)
@limit_writes
async def reject_payment(
    request: Request,
    row_id: str,
    body: PaymentRejectionRequest,
    _: CurrentSession,
    page: PaymentsPageDep,
) -> ResourceMutationResponse:
    await page.load_for_write()
    return _mutation_response(page, row_id, await page.reject(row_id, body.reason))
