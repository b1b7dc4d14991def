"""
dashboard.py — The TrashVision dashboard page and its JSON twin.

Routes:
  GET /               — HTML dashboard (summary cards, pie charts, log table)
  GET /api/dashboard  — the same derived data as JSON

Both read the DashboardState kept fresh by the LogPoller started in the
app lifespan (see services/poller.py). Nothing here touches the database:
counters and page slices are recomputed from the latest snapshot on every
request, so they can never drift from the table they sit next to.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from trashvision.core.config import Settings, get_settings
from trashvision.models.trash_log import DashboardResponse
from trashvision.services.aggregation import paginate, summarize
from trashvision.services.charts import PALETTE, pie_slices
from trashvision.services.poller import DashboardState

router = APIRouter(tags=["dashboard"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def get_dashboard_state(request: Request) -> DashboardState | None:
    """
    FastAPI dependency — the poller's state, or None when polling is off.
    """
    poller = getattr(request.app.state, "poller", None)
    return poller.state if poller is not None else None


def _build(state: DashboardState | None, page: int, settings: Settings) -> DashboardResponse:
    events = state.events if state is not None else ()
    return DashboardResponse(
        status=state.status if state is not None else "disabled",
        last_refresh=state.last_refresh if state is not None else None,
        summary=summarize(events, categories=settings.tracked_categories),
        page=paginate(events, page=page, page_size=settings.dashboard_page_size),
    )


@router.get("/api/dashboard", response_model=DashboardResponse)
async def dashboard_data(
    page: int = Query(default=1, ge=1),
    state: DashboardState | None = Depends(get_dashboard_state),
    settings: Settings = Depends(get_settings),
) -> DashboardResponse:
    """Counters and the requested page of the latest snapshot."""
    return _build(state, page, settings)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def dashboard_page(
    request: Request,
    page: int = Query(default=1, ge=1),
    state: DashboardState | None = Depends(get_dashboard_state),
    settings: Settings = Depends(get_settings),
):
    data = _build(state, page, settings)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "data": data,
            "charts": {
                "all_time": pie_slices(data.summary.all_time.counts),
                "this_month": pie_slices(data.summary.this_month.counts),
            },
            "palette": PALETTE,
            "refresh_seconds": max(int(settings.dashboard_poll_interval), 1),
        },
    )
