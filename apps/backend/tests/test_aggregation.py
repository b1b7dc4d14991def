"""
test_aggregation.py — Dashboard counters and pagination.

Run:
    pytest apps/backend/tests/test_aggregation.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest
from conftest import make_event

from trashvision.services.aggregation import (
    DEFAULT_CATEGORIES,
    clamp_page,
    count_categories,
    is_same_month,
    paginate,
    summarize,
    total_pages,
)

NOW = datetime(2026, 10, 19, 12, 0, 0)
THIS_MONTH = datetime(2026, 10, 3, 8, 15)
LAST_MONTH = datetime(2026, 9, 28, 22, 40)


def _events(n: int):
    """n events, newest first, one hour apart."""
    return [make_event(time_stamp=NOW - timedelta(hours=i), trash_id=n - i) for i in range(n)]


# ── Counters ─────────────────────────────────────────────────────────────────

class TestSummarize:

    def test_mixed_month_scenario(self):
        events = [
            make_event("PET", THIS_MONTH),
            make_event("can", LAST_MONTH),
            make_event("unknown", THIS_MONTH),
        ]
        summary = summarize(events, now=NOW)

        assert summary.all_time.total == 3
        assert summary.all_time.counts == {"PET": 1, "CAN": 1, "GLASS BOTTLE": 0}
        assert summary.this_month.total == 2
        assert summary.this_month.counts == {"PET": 1, "CAN": 0, "GLASS BOTTLE": 0}

    def test_month_name(self):
        assert summarize([], now=NOW).month_name == "October"

    def test_two_word_category_matches_case_insensitively(self):
        counts = count_categories([make_event("Glass Bottle"), make_event("glass bottle")]).counts
        assert counts["GLASS BOTTLE"] == 2

    def test_near_miss_names_are_not_counted(self):
        summary = count_categories([make_event("GLASS-BOTTLE"), make_event(" PET")])
        assert summary.total == 2
        assert sum(summary.counts.values()) == 0

    def test_category_sum_never_exceeds_total(self):
        events = [make_event(n) for n in ("PET", "can", "paper", "GLASS BOTTLE", "foil")]
        summary = count_categories(events)
        assert sum(summary.counts.values()) == 3
        assert summary.total == 5

    def test_sum_equals_total_when_all_names_tracked(self):
        events = [make_event(n) for n in ("pet", "CAN", "Glass bottle")]
        summary = count_categories(events)
        assert sum(summary.counts.values()) == summary.total == 3

    def test_this_month_is_subset_of_all_time(self):
        events = [
            make_event("PET", THIS_MONTH),
            make_event("PET", LAST_MONTH),
            make_event("CAN", THIS_MONTH),
            make_event("CAN", datetime(2025, 10, 10)),  # same month, last year
        ]
        summary = summarize(events, now=NOW)
        assert summary.this_month.total <= summary.all_time.total
        for category in DEFAULT_CATEGORIES:
            assert summary.this_month.counts[category] <= summary.all_time.counts[category]
        assert summary.this_month.counts == {"PET": 1, "CAN": 1, "GLASS BOTTLE": 0}

    def test_empty_events_give_zero_counters(self):
        summary = summarize([], now=NOW)
        assert summary.all_time.total == 0
        assert summary.this_month.total == 0
        assert summary.all_time.counts == {"PET": 0, "CAN": 0, "GLASS BOTTLE": 0}

    def test_custom_categories(self):
        summary = count_categories([make_event("paper"), make_event("PET")], categories=("PAPER",))
        assert summary.counts == {"PAPER": 1}
        assert summary.total == 2

    def test_counts_keep_category_order(self):
        summary = count_categories([make_event("GLASS BOTTLE"), make_event("CAN")])
        assert list(summary.counts) == ["PET", "CAN", "GLASS BOTTLE"]

    def test_idempotent_and_input_untouched(self):
        events = [make_event("PET", THIS_MONTH), make_event("can", LAST_MONTH)]
        snapshot = list(events)
        first = summarize(events, now=NOW)
        second = summarize(events, now=NOW)
        assert first == second
        assert events == snapshot


class TestIsSameMonth:

    def test_naive_same_month(self):
        assert is_same_month(THIS_MONTH, NOW)

    def test_naive_other_month(self):
        assert not is_same_month(LAST_MONTH, NOW)

    def test_same_month_other_year(self):
        assert not is_same_month(datetime(2025, 10, 19), NOW)

    def test_aware_timestamp_converted_to_local(self):
        local_now = datetime(2026, 10, 15, 12, 0).astimezone()
        aware = local_now.astimezone(timezone.utc)
        assert is_same_month(aware, local_now)


# ── Pagination ────────────────────────────────────────────────────────────────

class TestPaginate:

    def test_total_pages(self):
        assert total_pages(25, 10) == 3
        assert total_pages(20, 10) == 2
        assert total_pages(0, 10) == 0

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            total_pages(10, 0)

    def test_twenty_five_events_three_pages(self):
        events = _events(25)
        view = paginate(events, page=3, page_size=10)

        assert view.total_pages == 3
        assert [row.event for row in view.rows] == events[20:25]
        assert len(view.rows) == 5

    def test_row_numbers_count_down_from_total(self):
        events = _events(25)
        first = paginate(events, page=1, page_size=10)
        last = paginate(events, page=3, page_size=10)

        assert first.rows[0].number == 25
        assert first.rows[-1].number == 16
        assert last.rows[-1].number == 1

    def test_numbers_contiguous_across_pages(self):
        events = _events(25)
        numbers = [
            row.number
            for page in range(1, 4)
            for row in paginate(events, page=page, page_size=10).rows
        ]
        assert numbers == list(range(25, 0, -1))

    def test_page_clamped_high(self):
        view = paginate(_events(25), page=99, page_size=10)
        assert view.page == 3
        assert view.has_next is False

    def test_page_clamped_low(self):
        view = paginate(_events(25), page=0, page_size=10)
        assert view.page == 1
        assert view.has_previous is False

    def test_boundary_flags(self):
        events = _events(25)
        middle = paginate(events, page=2, page_size=10)
        assert middle.has_previous is True
        assert middle.has_next is True

    def test_empty_list(self):
        view = paginate([], page=4, page_size=10)
        assert view.page == 1
        assert view.total_pages == 0
        assert view.rows == []
        assert view.has_previous is False
        assert view.has_next is False

    def test_clamp_page(self):
        assert clamp_page(5, 25, 10) == 3
        assert clamp_page(-2, 25, 10) == 1
        assert clamp_page(1, 0, 10) == 1

    def test_idempotent_and_input_untouched(self):
        events = _events(12)
        snapshot = list(events)
        assert paginate(events, 2, 10) == paginate(events, 2, 10)
        assert events == snapshot
