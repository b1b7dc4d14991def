"""
Health check endpoint.

Used by:
  - Docker HEALTHCHECK instruction
  - Load balancers / orchestrators
  - The dashboard operator, to tell "API down" from "DB not configured"

The API is considered healthy (HTTP 200) even when the database settings
are incomplete or the poller has not fetched anything yet.
"""

from fastapi import APIRouter, Depends

from trashvision.core.config import Settings, get_settings
from trashvision.core.database import check_database_config
from trashvision.models.trash_log import HealthResponse
from trashvision.routes.dashboard import get_dashboard_state
from trashvision.services.poller import DashboardState

router = APIRouter()

VERSION = "0.1.0"


@router.get("", response_model=HealthResponse, summary="API health check")
async def health_check(
    settings: Settings = Depends(get_settings),
    state: DashboardState | None = Depends(get_dashboard_state),
) -> HealthResponse:
    """
    Returns liveness, whether all DB_* settings are present, and the
    dashboard poller's status ("loading" | "ready" | "disabled") together with
    how many of its fetches have failed since startup.
    """
    return HealthResponse(
        status="ok",
        version=VERSION,
        database=check_database_config(settings),
        dashboard=state.status if state is not None else "disabled",
        dashboard_failures=state.failures if state is not None else 0,
        environment=settings.environment,
    )
