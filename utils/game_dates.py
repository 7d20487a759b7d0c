# utils/game_dates.py
"""
Game-date navigation for the scoreboard date strip.

ESPN's scoreboard `calendar` is a sparse list of days with games, and it comes
back in a few shapes depending on the league:

  ["2025-11-17T08:00Z", ...]          ISO timestamps (most leagues)
  ["20251117", ...]                   compact dates
  [{"date": "2025-11-17T08:00Z"}, ...] wrapper objects

normalize_game_dates() folds all of those into sorted, unique YYYYMMDD strings.
Everything else in here works on that normalized list and never raises for
empty or missing data (leagues between seasons have no calendar at all).
"""
from bisect import bisect_left, bisect_right
from datetime import datetime, tzinfo
from typing import Any, Iterable, Optional

from utils.dates import dashed_date, parse_compact, shift_compact, today_yyyymmdd

WINDOW_EACH_SIDE = 3


def _entry_text(entry: Any) -> str:
    # one level of {"date": ...} wrapping; anything else is dropped
    if isinstance(entry, dict):
        entry = entry.get("date")
    return entry.strip() if isinstance(entry, str) else ""


def _to_compact(text: str, tz: Optional[tzinfo]) -> str:
    if not text:
        return ""

    if "T" in text:
        iso = text[:-1] + "+00:00" if text.endswith("Z") else text
        try:
            dt = datetime.fromisoformat(iso)
        except ValueError:
            return ""
        if tz is not None and dt.tzinfo is not None:
            dt = dt.astimezone(tz)
        return dt.strftime("%Y%m%d")

    s = text.replace("-", "").replace("/", "")
    return s if parse_compact(s) else ""


def normalize_game_dates(entries: Optional[Iterable[Any]], tz: Optional[tzinfo] = None) -> list[str]:
    """
    Canonical sorted, de-duplicated YYYYMMDD list.

    tz: calendar to read ISO timestamps in. None keeps the date as written
    in the timestamp.
    """
    out = set()
    for entry in entries or []:
        d = _to_compact(_entry_text(entry), tz)
        if d:
            out.add(d)
    return sorted(out)


def nearby_dates(dates: list[str], selected: str, today: Optional[str] = None) -> list[str]:
    """Up to 7 dates centered on `selected`, or on the first date >= today."""
    if not dates:
        return []

    if selected in dates:
        center = dates.index(selected)
    else:
        today = today or today_yyyymmdd()
        center = bisect_left(dates, today)
        if center == len(dates):
            return dates[-(2 * WINDOW_EACH_SIDE + 1):]

    start = max(0, center - WINDOW_EACH_SIDE)
    end = min(len(dates), center + WINDOW_EACH_SIDE + 1)
    return dates[start:end]


def next_game_date(dates: list[str], selected: str) -> Optional[str]:
    i = bisect_right(dates, selected)
    return dates[i] if i < len(dates) else None


def prev_game_date(dates: list[str], selected: str) -> Optional[str]:
    i = bisect_left(dates, selected)
    return dates[i - 1] if i > 0 else None


def has_next_game_date(dates: list[str], selected: str) -> bool:
    return next_game_date(dates, selected) is not None


def has_prev_game_date(dates: list[str], selected: str) -> bool:
    return prev_game_date(dates, selected) is not None


def date_navigation(dates: list[str], selected: Optional[str] = None, today: Optional[str] = None) -> dict:
    """
    Prev/next controls + jump strip for the UI.

    With no calendar data the controls stay enabled and step one calendar
    day at a time; the navigator functions above still report honestly.
    """
    today = today or today_yyyymmdd()
    selected = selected if parse_compact(selected) else today

    if not dates:
        prev_d = shift_compact(selected, -1)
        next_d = shift_compact(selected, 1)
        return {
            "selected": selected,
            "selected_display": dashed_date(selected),
            "prev": prev_d,
            "next": next_d,
            "has_prev": True,
            "has_next": True,
            "nearby": [],
            "fallback": True,
            "count": 0,
        }

    return {
        "selected": selected,
        "selected_display": dashed_date(selected),
        "prev": prev_game_date(dates, selected),
        "next": next_game_date(dates, selected),
        "has_prev": has_prev_game_date(dates, selected),
        "has_next": has_next_game_date(dates, selected),
        "nearby": [
            {"date": d, "display": dashed_date(d), "selected": d == selected, "today": d == today}
            for d in nearby_dates(dates, selected, today)
        ],
        "fallback": False,
        "count": len(dates),
    }
