"""Dashboard overview endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from mrcars_admin.api.v1.dependencies import CurrentSession, get_dashboard_page
from mrcars_admin.application.use_cases import DashboardPage
from mrcars_admin.schemas.dashboard import DashboardResponse

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    _: CurrentSession,
    page: Annotated[DashboardPage, Depends(get_dashboard_page)],
) -> DashboardResponse:
    """Summary counts, 12-month series and recent activity.

    Individual query failures degrade to zeros / missing feed entries; the
    response is always 200 once the session is valid.
    """
    state = await page.load()
    return DashboardResponse.from_snapshot(state.data, error=state.error)
