# services/espn.py
import logging
import os
from typing import Any, Optional

import requests
from fastapi import HTTPException

from services.cache_sqlite import cached_call
from utils.dates import today_yyyymmdd

logger = logging.getLogger(__name__)

ESPN_API_BASE = "https://site.api.espn.com/apis/site/v2/sports"
ESPN_WEB_API_BASE = "https://site.web.api.espn.com/apis/site/v2/sports"
ESPN_CORE_API = "https://sports.core.api.espn.com/v2/sports"

HEADERS = {"User-Agent": "sportsdash/1.0"}

TTL_LIVE = 30
TTL_PAST = 60 * 60 * 24 * 14
TTL_REFERENCE = 60 * 60

PLACEHOLDER_LOGO = ""


def _timeout() -> float:
    return float(os.getenv("ESPN_TIMEOUT", "15"))


def _scoreboard_ttl(date_espn: Optional[str]) -> int:
    # today/undated boards change every few seconds while games are live
    if not date_espn or date_espn >= today_yyyymmdd():
        return TTL_LIVE
    return TTL_PAST


def _request(url: str, params: Optional[dict] = None) -> requests.Response:
    try:
        return requests.get(url, params=params, headers=HEADERS, timeout=_timeout())
    except requests.RequestException as e:
        logger.warning("ESPN request failed for %s: %s", url, e)
        raise HTTPException(status_code=500, detail=f"ESPN request failed: {type(e).__name__}: {e}")


def _get_json(url: str, params: Optional[dict], cache_key: str, ttl: int) -> Any:
    def fetch_fn():
        r = _request(url, params)
        if r.status_code != 200:
            logger.warning("ESPN returned HTTP %s for %s", r.status_code, r.url)
            raise HTTPException(
                status_code=500,
                detail={"source": "espn", "requested_url": r.url, "status_code": r.status_code, "body_preview": r.text[:800]},
            )
        try:
            return 200, r.json()
        except ValueError as ex:
            raise HTTPException(
                status_code=500,
                detail={"source": "espn", "error": "ESPN returned non-JSON", "body_preview": r.text[:800],
                        "exception": f"{type(ex).__name__}: {ex}"},
            )

    _, data, source = cached_call(cache_key, ttl, fetch_fn)
    logger.debug("%s served from %s", cache_key, source)
    return data


# ----------------------------
# Fetchers
# ----------------------------
def fetch_scoreboard(sport: str, league: str, date_espn: Optional[str] = None) -> dict:
    params = {"dates": date_espn} if date_espn else None
    url = f"{ESPN_API_BASE}/{sport}/{league}/scoreboard"
    return _get_json(url, params, f"espn:scoreboard:{sport}/{league}:d={date_espn or ''}", _scoreboard_ttl(date_espn))


def fetch_game_summary(sport: str, league: str, event_id: str) -> dict:
    # the summary endpoint doesn't serve MMA cards
    if sport == "mma":
        return fetch_mma_event_summary(league, event_id)

    url = f"{ESPN_WEB_API_BASE}/{sport}/{league}/summary"
    params = {"region": "us", "lang": "en", "contentorigin": "espn", "event": event_id}
    return _get_json(url, params, f"espn:summary:{sport}/{league}:{event_id}", TTL_LIVE)


def _deref(obj: Any) -> Optional[dict]:
    """Follow a core-API {"$ref": url} link. Best-effort: None on any failure."""
    if not isinstance(obj, dict) or not obj.get("$ref"):
        return None
    try:
        r = requests.get(obj["$ref"], headers=HEADERS, timeout=_timeout())
        r.raise_for_status()
        return r.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("Could not follow %s: %s", obj["$ref"], e)
        return None


def fetch_mma_event_summary(league: str, event_id: str) -> dict:
    """
    Builds a summary-shaped dict for a UFC card from the core API.
    Fighters, status and venue come back as $ref links and are resolved one by one.
    """
    url = f"{ESPN_CORE_API}/mma/leagues/{league}/events/{event_id}"
    event = _get_json(url, None, f"espn:core:mma/{league}:{event_id}", TTL_LIVE)

    competitions = []
    for comp in event.get("competitions") or []:
        competitors = []
        for c in comp.get("competitors") or []:
            athlete = _deref(c.get("athlete")) or {"id": c.get("id"), "displayName": "TBD"}
            competitors.append({
                "id": c.get("id"),
                "uid": c.get("uid"),
                "order": c.get("order"),
                "winner": c.get("winner"),
                "athlete": athlete,
            })

        status = comp.get("status") or {}
        if "$ref" in status:
            status = _deref(status) or {}
        if not status:
            status = {"type": {"state": "pre", "completed": False, "shortDetail": "Scheduled"}}

        venue = comp.get("venue")
        if isinstance(venue, dict) and "$ref" in venue and not venue.get("fullName"):
            venue = _deref(venue) or venue

        competitions.append({
            "id": comp.get("id"),
            "date": comp.get("date"),
            "status": status,
            "competitors": competitors,
            "venue": venue,
            "type": comp.get("type"),
        })

    return {
        "header": {
            "id": event.get("id"),
            "competitions": competitions,
            "season": event.get("season"),
            "league": {"id": "3321", "name": "Ultimate Fighting Championship", "abbreviation": "UFC"},
        },
        "gameInfo": {"venue": competitions[0]["venue"] if competitions else None},
        "boxscore": {},
    }


def fetch_teams(sport: str, league: str) -> dict:
    url = f"{ESPN_API_BASE}/{sport}/{league}/teams"
    return _get_json(url, None, f"espn:teams:{sport}/{league}", TTL_REFERENCE)


def fetch_team(sport: str, league: str, team_id: str) -> dict:
    url = f"{ESPN_API_BASE}/{sport}/{league}/teams/{team_id}"
    return _get_json(url, None, f"espn:team:{sport}/{league}:{team_id}", TTL_REFERENCE)


def fetch_team_schedule(sport: str, league: str, team_id: str) -> dict:
    url = f"{ESPN_API_BASE}/{sport}/{league}/teams/{team_id}/schedule"
    return _get_json(url, None, f"espn:schedule:{sport}/{league}:{team_id}", TTL_REFERENCE)


def fetch_athletes(sport: str, league: str, limit: int = 100) -> dict:
    url = f"{ESPN_API_BASE}/{sport}/{league}/athletes"
    try:
        return _get_json(url, {"limit": limit}, f"espn:athletes:{sport}/{league}:limit={limit}", TTL_REFERENCE)
    except HTTPException as e:
        logger.warning("Failed to fetch athletes for %s/%s: %s", sport, league, e.detail)
        return {"items": [], "athletes": []}


def fetch_athlete(sport: str, league: str, athlete_id: str) -> dict:
    url = f"{ESPN_API_BASE}/{sport}/{league}/athletes/{athlete_id}"
    return _get_json(url, None, f"espn:athlete:{sport}/{league}:{athlete_id}", TTL_REFERENCE)


def fetch_news(sport: str, league: str) -> dict:
    url = f"{ESPN_API_BASE}/{sport}/{league}/news"
    return _get_json(url, None, f"espn:news:{sport}/{league}", TTL_REFERENCE)


def fetch_rankings(sport: str, league: str) -> dict:
    url = f"{ESPN_API_BASE}/{sport}/{league}/rankings"
    return _get_json(url, None, f"espn:rankings:{sport}/{league}", TTL_REFERENCE)


def fetch_standings(sport: str, league: str) -> dict:
    url = f"{ESPN_API_BASE}/{sport}/{league}/standings"
    return _get_json(url, None, f"espn:standings:{sport}/{league}", TTL_REFERENCE)


# ----------------------------
# Parsers
# ----------------------------
def _safe_int(x: Any) -> Optional[int]:
    try:
        if x is None:
            return None
        if isinstance(x, str) and x.strip() == "":
            return None
        return int(float(x))
    except (TypeError, ValueError):
        return None


def team_logo(team: Optional[dict]) -> str:
    team = team or {}
    if team.get("logo"):
        return team["logo"]
    logos = team.get("logos") or []
    if logos and isinstance(logos[0], dict) and logos[0].get("href"):
        return logos[0]["href"]
    return PLACEHOLDER_LOGO


def game_state(status: Optional[dict]) -> str:
    return ((status or {}).get("type") or {}).get("state") or ""


def is_game_live(status: Optional[dict]) -> bool:
    return game_state(status) == "in"


def is_game_completed(status: Optional[dict]) -> bool:
    return bool(((status or {}).get("type") or {}).get("completed"))


def espn_game_url(league: str, event_id: Optional[str]) -> str:
    if not event_id:
        return ""
    return f"https://www.espn.com/{league}/game?gameId={event_id}"


def _network(comp: dict) -> str:
    broadcasts = comp.get("broadcasts", [])
    if isinstance(broadcasts, list) and broadcasts:
        names = broadcasts[0].get("names", []) or []
        if names:
            return names[0] or ""
    if comp.get("broadcast"):
        return comp["broadcast"]
    geo = comp.get("geoBroadcasts", [])
    if isinstance(geo, list) and geo:
        media = (geo[0].get("media") or {})
        return media.get("shortName") or ""
    return ""


def _side(c: dict, state: str) -> dict:
    team = c.get("team") or {}
    tid = team.get("id")
    records = c.get("records") or []
    return {
        "id": str(tid) if tid else "",
        "name": team.get("displayName") or team.get("name") or "",
        "short_name": team.get("shortDisplayName") or team.get("displayName") or "",
        "abbr": team.get("abbreviation") or "",
        "logo": team_logo(team),
        "score": None if state == "pre" else _safe_int(c.get("score")),
        "winner": bool(c.get("winner")),
        "record": records[0].get("summary", "") if records and isinstance(records[0], dict) else "",
    }


def parse_games(scoreboard_json: dict) -> list[dict]:
    games = []

    for ev in scoreboard_json.get("events", []) or []:
        competitions = ev.get("competitions", []) or []
        if not competitions:
            continue
        comp = competitions[0]

        status = (comp.get("status") or {})
        stype = (status.get("type") or {})
        state = game_state(status)

        home = away = None
        for c in comp.get("competitors", []) or []:
            if c.get("homeAway") == "home":
                home = _side(c, state)
            elif c.get("homeAway") == "away":
                away = _side(c, state)

        games.append({
            "event_id": ev.get("id"),
            "name": ev.get("name") or "",
            "short_name": ev.get("shortName") or "",
            "start_utc": comp.get("startDate") or comp.get("date") or ev.get("date"),
            "network": _network(comp),
            "venue": ((comp.get("venue") or {}).get("fullName")) or "",
            "away": away,
            "home": home,

            "status_state": state,                       # pre/in/post
            "status_detail": stype.get("shortDetail"),   # Final, 2nd Half - 12:34
            "live": is_game_live(status),
            "completed": is_game_completed(status),
            "clock": status.get("displayClock"),
            "period": status.get("period"),
        })

    return games


def calendar_entries(scoreboard_json: dict) -> list:
    leagues = scoreboard_json.get("leagues") or []
    if leagues and isinstance(leagues[0], dict) and leagues[0].get("calendar"):
        return leagues[0]["calendar"]
    return scoreboard_json.get("calendar") or []


def extract_athletes(payload: dict) -> list[dict]:
    if payload.get("items"):
        return payload["items"]
    if payload.get("athletes"):
        return payload["athletes"]
    sports = payload.get("sports") or [{}]
    leagues = (sports[0] or {}).get("leagues") or [{}]
    return (leagues[0] or {}).get("athletes") or []


def extract_teams(payload: dict) -> list[dict]:
    sports = payload.get("sports") or [{}]
    leagues = (sports[0] or {}).get("leagues") or [{}]
    return [t.get("team") or {} for t in (leagues[0] or {}).get("teams") or []]
