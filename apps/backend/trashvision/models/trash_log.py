"""
trash_log.py — Pydantic models for the trash log API and the dashboard.

TrashEvent mirrors one row of the three-table join served by GET /api/logs:

  trash_log l JOIN trash t ON l.trash_id = t.trash_id
              JOIN bin   b ON l.bin_id   = b.bin_id

MySQL hands `correct` back as TINYINT(1) (0 / 1); pydantic's lax bool
coercion turns that into a real boolean so the JSON carries true / false.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TrashEvent(BaseModel):
    """A single detected disposal, read-only."""

    model_config = ConfigDict(frozen=True)

    trash_id:   int | str
    trash_name: str        # e.g. "PET", "can", "Glass Bottle"
    bin_id:     int | str
    bin_name:   str
    time_stamp: datetime   # event time, newest first in every listing
    correct:    bool       # was the item placed in the right bin


class ErrorResponse(BaseModel):
    """Body of every 500 returned by /api/logs."""

    error: str


# ── Dashboard ────────────────────────────────────────────────────────────────

class CategorySummary(BaseModel):
    """Totals for one window (all time, or the current month)."""

    total:  int
    counts: dict[str, int]   # category -> count, in tracked-category order


class DashboardSummary(BaseModel):
    all_time:   CategorySummary
    this_month: CategorySummary
    month_name: str          # e.g. "October"


class PageRow(BaseModel):
    """A table row: the event plus its stable display number (oldest = 1)."""

    number: int
    event:  TrashEvent


class PageView(BaseModel):
    page:         int
    page_size:    int
    total:        int
    total_pages:  int
    has_previous: bool
    has_next:     bool
    rows:         list[PageRow] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    """Combined snapshot returned by GET /api/dashboard."""

    status:       str                  # "loading" | "ready" | "disabled"
    last_refresh: Optional[datetime] = None
    summary:      DashboardSummary
    page:         PageView


class HealthResponse(BaseModel):
    status:      str  # Always "ok" if the API process is alive
    version:     str
    database:    str  # "configured" | "unconfigured"
    dashboard:   str  # "loading" | "ready" | "disabled"
    dashboard_failures: int = 0  # Failed poller fetches since startup
    environment: str
