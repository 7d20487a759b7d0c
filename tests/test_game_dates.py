"""Tests for scoreboard calendar normalization and prev/next navigation."""

from zoneinfo import ZoneInfo

import pytest

from utils.game_dates import (
    date_navigation,
    has_next_game_date,
    has_prev_game_date,
    nearby_dates,
    next_game_date,
    normalize_game_dates,
    prev_game_date,
)

DATES = ["20251110", "20251112", "20251115", "20251117", "20251120", "20251122", "20251125"]


class TestNormalizeGameDates:
    def test_mixed_shapes(self):
        raw = ["2025-11-17T19:00Z", "20251118", {"date": "2025-11-16T00:00Z"}, "", None]
        assert normalize_game_dates(raw) == ["20251116", "20251117", "20251118"]

    def test_dashed_plain_dates(self):
        assert normalize_game_dates(["2025-11-17", "2025/11/18"]) == ["20251117", "20251118"]

    def test_duplicates_collapse(self):
        raw = ["20251117", "2025-11-17", "2025-11-17T08:00Z", {"date": "20251117"}]
        assert normalize_game_dates(raw) == ["20251117"]

    @pytest.mark.parametrize("entry", [
        {}, {"date": None}, {"date": ""}, {"other": "20251117"},
        "garbage", "2025111", "20251340", "2025-13-01T00:00Z", "notaTdate",
        17, ["20251117"],
    ])
    def test_drops_unusable_entries(self, entry):
        assert normalize_game_dates([entry, "20251101"]) == ["20251101"]

    def test_empty_input(self):
        assert normalize_game_dates([]) == []
        assert normalize_game_dates(None) == []

    def test_sorted_fixed_width(self):
        raw = ["2025-12-01T08:00Z", "20250102", "2025-06-15", {"date": "2024-12-31T23:00Z"}]
        out = normalize_game_dates(raw)
        assert out == sorted(out)
        assert all(len(d) == 8 and d.isdigit() for d in out)

    def test_idempotent(self):
        raw = ["2025-11-17T19:00Z", "20251118", {"date": "2025-11-16T00:00Z"}]
        once = normalize_game_dates(raw)
        assert normalize_game_dates(once) == once

    def test_timestamp_read_in_given_timezone(self):
        raw = ["2025-11-16T02:00Z"]
        assert normalize_game_dates(raw) == ["20251116"]
        assert normalize_game_dates(raw, tz=ZoneInfo("America/New_York")) == ["20251115"]

    def test_offset_timestamps(self):
        assert normalize_game_dates(["2025-11-17T23:30:00-05:00"]) == ["20251117"]


class TestNearbyDates:
    def test_centered_on_selection(self):
        assert nearby_dates(DATES, "20251117") == DATES

    def test_clipped_at_start(self):
        assert nearby_dates(DATES, "20251110") == DATES[:4]

    def test_clipped_at_end(self):
        assert nearby_dates(DATES, "20251125") == DATES[-4:]

    def test_at_most_seven(self):
        many = [f"202511{d:02d}" for d in range(1, 29)]
        out = nearby_dates(many, "20251114")
        assert out == many[10:17]

    def test_absent_selection_centers_on_today(self):
        out = nearby_dates(DATES, "20251101", today="20251113")
        # first date >= today is 20251115 (index 2)
        assert out == DATES[0:6]

    def test_absent_selection_today_is_a_game_day(self):
        out = nearby_dates(DATES, "20251101", today="20251122")
        assert out == DATES[2:7]

    def test_everything_in_the_past(self):
        many = [f"202501{d:02d}" for d in range(1, 11)]
        assert nearby_dates(many, "20260301", today="20260301") == many[-7:]

    def test_empty(self):
        assert nearby_dates([], "20251117", today="20251117") == []


class TestNextPrev:
    def test_absent_selection(self):
        assert next_game_date(DATES, "20251113") == "20251115"
        assert prev_game_date(DATES, "20251113") == "20251112"

    def test_member_selection(self):
        assert next_game_date(DATES, "20251117") == "20251120"
        assert prev_game_date(DATES, "20251117") == "20251115"

    def test_edges(self):
        assert next_game_date(DATES, "20251125") is None
        assert prev_game_date(DATES, "20251110") is None
        assert not has_next_game_date(DATES, "20251125")
        assert not has_prev_game_date(DATES, "20251110")

    def test_outside_range(self):
        assert next_game_date(DATES, "20250101") == "20251110"
        assert prev_game_date(DATES, "20250101") is None
        assert prev_game_date(DATES, "20261231") == "20251125"

    def test_empty_set(self):
        assert next_game_date([], "20251117") is None
        assert prev_game_date([], "20251117") is None
        assert not has_next_game_date([], "20251117")
        assert not has_prev_game_date([], "20251117")


class TestDateNavigation:
    def test_with_calendar(self):
        nav = date_navigation(DATES, "20251113", today="20251117")
        assert nav["fallback"] is False
        assert nav["prev"] == "20251112"
        assert nav["next"] == "20251115"
        assert nav["has_prev"] and nav["has_next"]
        assert nav["count"] == 7
        assert nav["selected_display"] == "2025-11-13"
        # selection absent -> strip centers on today
        assert [d["date"] for d in nav["nearby"]] == DATES
        today_flags = [d["date"] for d in nav["nearby"] if d["today"]]
        assert today_flags == ["20251117"]

    def test_selected_flag(self):
        nav = date_navigation(DATES, "20251120", today="20250101")
        assert [d["date"] for d in nav["nearby"] if d["selected"]] == ["20251120"]

    def test_last_game_day_disables_next(self):
        nav = date_navigation(DATES, "20251125", today="20251125")
        assert nav["has_next"] is False
        assert nav["next"] is None
        assert nav["has_prev"] is True

    def test_no_calendar_steps_one_day(self):
        nav = date_navigation([], "20251231", today="20251117")
        assert nav["fallback"] is True
        assert nav["prev"] == "20251230"
        assert nav["next"] == "20260101"
        assert nav["has_prev"] and nav["has_next"]
        assert nav["nearby"] == []

    @pytest.mark.parametrize("selected", [None, "", "bogus", "20251399"])
    def test_unusable_selection_means_today(self, selected):
        nav = date_navigation(DATES, selected, today="20251117")
        assert nav["selected"] == "20251117"
