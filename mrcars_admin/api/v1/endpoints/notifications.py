"""Notification endpoints: list with filter, mark read, mark all read, delete.

Each write loads the current list first so the response carries the list
as it stands after the write. If that load fails the write is not attempted
and the response is a 502 STORE_ERROR. A rejected remote write is a 502
with the store's reason; the list is not modified in that case.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from mrcars_admin.api.v1.dependencies import CurrentSession, get_notifications_page
from mrcars_admin.application.dtos.outcome import MutationOutcome
from mrcars_admin.application.use_cases import NotificationsPage
from mrcars_admin.core.limiter import limit_writes
from mrcars_admin.domain.enums import NotificationFilter
from mrcars_admin.domain.exceptions import MutationFailedException
from mrcars_admin.schemas.notifications import (
    NotificationListResponse,
    NotificationMutationResponse,
    NotificationResponse,
)
from mrcars_admin.schemas.outcome import OutcomeResponse

router = APIRouter()

NotificationsPageDep = Annotated[NotificationsPage, Depends(get_notifications_page)]


def _mutation_response(
    page: NotificationsPage, outcome: MutationOutcome
) -> NotificationMutationResponse:
    if not outcome.ok:
        raise MutationFailedException(outcome.message, reason=outcome.reason)
    return NotificationMutationResponse(
        outcome=OutcomeResponse.from_outcome(outcome),
        notifications=[NotificationResponse.from_record(n) for n in page.notifications],
        unread_count=page.unread_count(),
    )


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    _: CurrentSession,
    page: NotificationsPageDep,
    view: Annotated[NotificationFilter, Query(alias="filter")] = NotificationFilter.ALL,
) -> NotificationListResponse:
    """Newest notifications (all, unread or read) plus the unread count."""
    state = await page.load()
    return NotificationListResponse.from_records(
        page.notifications, visible=page.visible(view), error=state.error
    )


@router.post("/read-all", response_model=NotificationMutationResponse)
@limit_writes
async def mark_all_read(
    request: Request,
    _: CurrentSession,
    page: NotificationsPageDep,
) -> NotificationMutationResponse:
    """Mark every unread notification read (INFO outcome when none are unread)."""
    await page.load_for_write()
    return _mutation_response(page, await page.mark_all_read())


@router.post("/{notification_id}/read", response_model=NotificationMutationResponse)
@limit_writes
async def mark_read(
    request: Request,
    notification_id: str,
    _: CurrentSession,
    page: NotificationsPageDep,
) -> NotificationMutationResponse:
    await page.load_for_write()
    return _mutation_response(page, await page.mark_read(notification_id))


@router.delete("/{notification_id}", response_model=NotificationMutationResponse)
@limit_writes
async def delete_notification(
    request: Request,
    notification_id: str,
    _: CurrentSession,
    page: NotificationsPageDep,
) -> NotificationMutationResponse:
    await page.load_for_write()
    return _mutation_response(page, await page.delete(notification_id))
