"""
aggregation.py — Dashboard counters and pagination.

Pure functions over an already-ordered event list (newest first, as
returned by the log query). Nothing here sorts, mutates or caches: calling
any of them twice on the same input gives the same answer.

Counting rules
──────────────
  • A category matches when the event's trash_name, uppercased, equals the
    category string exactly ("glass bottle" -> "GLASS BOTTLE" matches,
    "GLASS-BOTTLE" does not).
  • Events whose name matches no category still count towards the total,
    so sum(counts.values()) <= total.
  • "This month" means the month and year of `now` in the process's local
    time zone. Naive timestamps are taken as local time; aware ones are
    converted to local time before comparing.

Pagination rules
────────────────
  • total_pages = ceil(total / page_size); 0 when there are no events.
  • The requested page is clamped into [1, max(1, total_pages)].
  • Row numbers count down from `total`, so the oldest event is always 1
    no matter which page it lands on.

TESTING
────────
    pytest apps/backend/tests/test_aggregation.py -v
"""

from __future__ import annotations

from datetime import datetime
from math import ceil
from typing import Iterable, Sequence

from trashvision.models.trash_log import (
    CategorySummary,
    DashboardSummary,
    PageRow,
    PageView,
    TrashEvent,
)

DEFAULT_CATEGORIES: tuple[str, ...] = ("PET", "CAN", "GLASS BOTTLE")
DEFAULT_PAGE_SIZE = 10


def _local(ts: datetime) -> datetime:
    return ts.astimezone() if ts.tzinfo is not None else ts


def is_same_month(ts: datetime, now: datetime) -> bool:
    ts, now = _local(ts), _local(now)
    return ts.year == now.year and ts.month == now.month


def count_categories(
    events: Iterable[TrashEvent],
    categories: Sequence[str] = DEFAULT_CATEGORIES,
) -> CategorySummary:
    """Total plus per-category counts for `events`."""
    counts = {category: 0 for category in categories}
    total = 0
    for event in events:
        total += 1
        name = event.trash_name.upper()
        if name in counts:
            counts[name] += 1
    return CategorySummary(total=total, counts=counts)


def summarize(
    events: Sequence[TrashEvent],
    now: datetime | None = None,
    categories: Sequence[str] = DEFAULT_CATEGORIES,
) -> DashboardSummary:
    """
    Compute the all-time and current-month counters in one call.

    `now` defaults to the current local time.
    """
    now = now or datetime.now()
    this_month = [e for e in events if is_same_month(e.time_stamp, now)]
    return DashboardSummary(
        all_time=count_categories(events, categories),
        this_month=count_categories(this_month, categories),
        month_name=_local(now).strftime("%B"),
    )


def total_pages(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return ceil(total / page_size)


def clamp_page(page: int, total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    return min(max(page, 1), max(total_pages(total, page_size), 1))


def paginate(
    events: Sequence[TrashEvent],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> PageView:
    """
    Slice `events` into the requested page.

    Returns a PageView whose rows carry display numbers; the first row of
    page 1 (newest event) is numbered len(events).
    """
    total = len(events)
    pages = total_pages(total, page_size)
    page = clamp_page(page, total, page_size)

    start = (page - 1) * page_size
    rows = [
        PageRow(number=total - (start + i), event=event)
        for i, event in enumerate(events[start:start + page_size])
    ]
    return PageView(
        page=page,
        page_size=page_size,
        total=total,
        total_pages=pages,
        has_previous=page > 1,
        has_next=page < pages,
        rows=rows,
    )
