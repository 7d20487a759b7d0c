# routers/streams.py
import logging
from datetime import date as date_type

from fastapi import APIRouter, Body, HTTPException, Query

from services.streams import (
    STREAM_CATEGORIES,
    build_stream_templates,
    build_stream_url,
    discovery_instructions,
    extract_uuids,
    format_stream_url_display,
    is_espn_stream_url,
    make_locator,
    parse_stream_url,
)
from utils.dates import dashed_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/streams")


def _parse_day(d: str) -> date_type:
    try:
        return date_type.fromisoformat(dashed_date(d))
    except ValueError:
        raise HTTPException(status_code=422, detail=f"date must be YYYY-MM-DD or YYYYMMDD, got {d!r}")


@router.get("/build")
def build(uuid: str, date: str, category: str | None = None):
    locator = make_locator(uuid.strip(), _parse_day(date), category)
    return {
        "uuid": locator.identifier,
        "category": locator.category,
        "date": locator.date.isoformat(),
        "m3u8_url": build_stream_url(locator),
    }


@router.get("/parse")
def parse(url: str):
    if not is_espn_stream_url(url):
        return {"match": False, "reason": "not an ESPN Akamai stream URL"}

    parsed = parse_stream_url(url)
    if parsed is None:
        return {"match": False, "reason": "URL does not follow the ESPN Akamai pattern"}

    if parsed.uuid_mismatch:
        logger.warning("UUID mismatch in stream URL: %s", url)

    return {"match": True, **parsed.to_dict(), "display": format_stream_url_display(url)}


@router.post("/extract")
def extract(text: str = Body("", embed=True)):
    uuids = extract_uuids(text)
    return {"count": len(uuids), "uuids": uuids}


@router.get("/templates")
def templates(date: str, uuids: list[str] = Query(default=[])):
    day = _parse_day(date)
    out = [p.to_dict() for p in build_stream_templates(day, [u.strip() for u in uuids if u.strip()])]
    return {"count": len(out), "templates": out}


@router.get("/categories")
def categories():
    return STREAM_CATEGORIES


@router.get("/instructions")
def instructions():
    return {"markdown": discovery_instructions()}
