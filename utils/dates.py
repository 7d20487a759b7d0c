# utils/dates.py
import os
import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

TZ = ZoneInfo(os.getenv("APP_TZ", "America/New_York"))

def today_yyyymmdd() -> str:
    return datetime.now(TZ).strftime("%Y%m%d")

def dashed_date(d: str) -> str:
    """Display form YYYY-MM-DD. Accepts YYYYMMDD or YYYY-MM-DD."""
    d = (d or "").strip()
    if re.fullmatch(r"\d{8}", d):
        return f"{d[:4]}-{d[4:6]}-{d[6:8]}"
    return d

def compact_date(d: str | None) -> str:
    """ESPN expects YYYYMMDD. Returns "" for anything that isn't a real date."""
    s = re.sub(r"[-/]", "", (d or "").strip())
    return s if parse_compact(s) else ""

def parse_compact(d: str | None) -> date | None:
    if not d or not re.fullmatch(r"\d{8}", d):
        return None
    try:
        return datetime.strptime(d, "%Y%m%d").date()
    except ValueError:
        return None

def shift_compact(d: str, days: int) -> str:
    base = parse_compact(d)
    if base is None:
        raise ValueError(f"not a YYYYMMDD date: {d!r}")
    return (base + timedelta(days=days)).strftime("%Y%m%d")

def is_future_yyyymmdd(date_espn: str) -> bool:
    d = parse_compact(date_espn)
    if d is None:
        return False
    return d > datetime.now(TZ).date()
