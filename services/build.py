# services/build.py
import logging
from dataclasses import asdict

from fastapi import HTTPException

from services.espn import (
    calendar_entries,
    espn_game_url,
    extract_athletes,
    extract_teams,
    fetch_athlete,
    fetch_athletes,
    fetch_game_summary,
    fetch_news,
    fetch_rankings,
    fetch_scoreboard,
    fetch_standings,
    fetch_team,
    fetch_team_schedule,
    fetch_teams,
    parse_games,
    team_logo,
)
from services.leagues import INDIVIDUAL_SPORTS, notable_games, require_league
from services.recap import extract_recap_data, format_for_teleprompter, generate_ai_prompt
from utils.dates import compact_date, is_future_yyyymmdd
from utils.game_dates import date_navigation, normalize_game_dates

logger = logging.getLogger(__name__)


def _error_detail(e: HTTPException) -> dict:
    return e.detail if isinstance(e.detail, dict) else {"error": str(e.detail)}


# ----------------------------
# Scoreboard
# ----------------------------
def build_scoreboard(sport: str, league: str, date: str | None = None) -> dict:
    """
    Scoreboard grouped into live / upcoming / completed plus date navigation.
    An ESPN failure yields an empty board with a warning instead of a 500.
    """
    info = require_league(sport, league)
    date_espn = compact_date(date) or None

    out = {"sport": sport, "league": info, "date": date_espn}
    warnings = []
    if date and not date_espn:
        logger.info("Ignoring unparseable scoreboard date %r", date)
        warnings.append(f"Unrecognized date {date!r}; showing ESPN's current board.")

    try:
        scoreboard = fetch_scoreboard(sport, league, date_espn)
    except HTTPException as e:
        logger.warning("Scoreboard fetch failed for %s/%s date=%s", sport, league, date_espn)
        scoreboard = {"events": [], "leagues": [], "calendar": []}
        warnings.append("ESPN scoreboard unavailable; showing no games.")
        out["error"] = _error_detail(e)

    if warnings:
        out["warning"] = " ".join(warnings)

    games = parse_games(scoreboard)
    for g in games:
        g["espn_url"] = espn_game_url(league, g["event_id"])
    game_dates = normalize_game_dates(calendar_entries(scoreboard))

    # ESPN echoes the board's day when no date was asked for
    selected = date_espn or compact_date(((scoreboard.get("day") or {}).get("date"))) or None

    out.update({
        "count": len(games),
        "live": [g for g in games if g["status_state"] == "in"],
        "upcoming": [g for g in games if g["status_state"] == "pre"],
        "completed": [g for g in games if g["status_state"] == "post"],
        "future": is_future_yyyymmdd(selected or ""),
        "navigation": date_navigation(game_dates, selected),
    })
    return out


# ----------------------------
# Game detail
# ----------------------------
def _header_competitors(summary: dict) -> list[dict]:
    comps = ((summary.get("header") or {}).get("competitions")) or [{}]
    out = []
    for c in comps[0].get("competitors") or []:
        team = c.get("team") or c.get("athlete") or {}
        out.append({
            "home_away": c.get("homeAway") or "",
            "name": team.get("displayName") or "",
            "abbr": team.get("abbreviation") or "",
            "logo": team_logo(team),
            "score": c.get("score"),
            "winner": bool(c.get("winner")),
            "linescores": [ls.get("displayValue") for ls in c.get("linescores") or []],
        })
    return out


def build_game(sport: str, league: str, event_id: str) -> dict:
    require_league(sport, league)
    try:
        summary = fetch_game_summary(sport, league, event_id)
    except HTTPException as e:
        # ESPN has no detail pages for golf events and flaky ones for MMA
        if sport in ("mma", "golf"):
            return {
                "event_id": event_id,
                "available": False,
                "warning": f"Detailed event information is not available through the ESPN API for {sport}.",
                "error": _error_detail(e),
            }
        raise

    comps = ((summary.get("header") or {}).get("competitions")) or [{}]
    tabs = {
        "boxscore": bool(summary.get("boxscore")),
        "plays": bool(summary.get("plays") or summary.get("drives")),
        "videos": bool(summary.get("videos")),
        "info": bool(summary.get("gameInfo")),
    }
    return {
        "event_id": event_id,
        "available": True,
        "date": comps[0].get("date"),
        "status": comps[0].get("status") or {},
        "competitors": _header_competitors(summary),
        "tabs": [name for name, ok in tabs.items() if ok],
        "summary": summary,
    }


def build_recap(sport: str, league: str, event_id: str, bpm: int = 90) -> dict:
    require_league(sport, league)
    recap = extract_recap_data(fetch_game_summary(sport, league, event_id))
    prompt = generate_ai_prompt(recap)
    return {
        "event_id": event_id,
        "recap": recap.to_dict(),
        "teleprompter": format_for_teleprompter(recap.suggested_rap_lines, bpm=bpm),
        "prompt": asdict(prompt),
    }


# ----------------------------
# Teams / athletes / news
# ----------------------------
def build_teams(sport: str, league: str) -> dict:
    info = require_league(sport, league)
    teams = [
        {
            "id": t.get("id"),
            "name": t.get("displayName") or "",
            "abbr": t.get("abbreviation") or "",
            "location": t.get("location") or "",
            "color": t.get("color") or "",
            "logo": team_logo(t),
        }
        for t in extract_teams(fetch_teams(sport, league))
    ]
    teams.sort(key=lambda t: t["name"])
    return {"league": info, "individual": sport in INDIVIDUAL_SPORTS, "count": len(teams), "teams": teams}


def build_team(sport: str, league: str, team_id: str) -> dict:
    require_league(sport, league)
    team = fetch_team(sport, league, team_id).get("team") or {}
    try:
        schedule = parse_games(fetch_team_schedule(sport, league, team_id))
    except HTTPException:
        logger.warning("Schedule fetch failed for team %s (%s/%s)", team_id, sport, league)
        schedule = []

    records = (team.get("record") or {}).get("items") or []
    return {
        "id": team.get("id") or team_id,
        "name": team.get("displayName") or "",
        "logo": team_logo(team),
        "record": records[0].get("summary", "") if records else "",
        "standing": team.get("standingSummary") or "",
        "schedule": schedule,
    }


def build_athletes(sport: str, league: str, limit: int = 200) -> dict:
    info = require_league(sport, league)
    athletes = [
        {
            "id": a.get("id"),
            "name": a.get("displayName") or a.get("fullName") or "",
            "position": (a.get("position") or {}).get("abbreviation") or "",
            "headshot": (a.get("headshot") or {}).get("href") or "",
            "flag": (a.get("flag") or {}).get("href") or "",
            "team": (a.get("team") or {}).get("name") or "",
        }
        for a in extract_athletes(fetch_athletes(sport, league, limit))
    ]
    return {"league": info, "count": len(athletes), "athletes": athletes}


def build_news(sport: str, league: str) -> dict:
    info = require_league(sport, league)
    data = fetch_news(sport, league)
    articles = []
    for a in data.get("articles") or []:
        images = a.get("images") or []
        articles.append({
            "headline": a.get("headline") or "",
            "description": a.get("description") or "",
            "published": a.get("published") or "",
            "premium": bool(a.get("premium")),
            "url": ((a.get("links") or {}).get("web") or {}).get("href") or "",
            "image": images[0].get("url", "") if images else "",
        })
    return {"league": info, "header": data.get("header") or "", "count": len(articles), "articles": articles}


def build_league_home(sport: str, league: str) -> dict:
    info = require_league(sport, league)
    return {"league": info, "notable_games": notable_games(sport, league)}


def build_athlete(sport: str, league: str, athlete_id: str) -> dict:
    require_league(sport, league)
    a = fetch_athlete(sport, league, athlete_id)
    a = a.get("athlete") or a
    birth = a.get("birthPlace") or {}
    return {
        "id": a.get("id") or athlete_id,
        "name": a.get("displayName") or a.get("fullName") or "",
        "position": (a.get("position") or {}).get("name") or "",
        "age": a.get("age"),
        "citizenship": a.get("citizenship") or "",
        "birth_place": ", ".join(p for p in (birth.get("city"), birth.get("state"), birth.get("country")) if p),
        "college": (a.get("college") or {}).get("name") or "",
        "headshot": (a.get("headshot") or {}).get("href") or "",
    }


def build_rankings(sport: str, league: str) -> dict:
    info = require_league(sport, league)
    return {"league": info, "rankings": fetch_rankings(sport, league).get("rankings") or []}


def build_standings(sport: str, league: str) -> dict:
    info = require_league(sport, league)
    return {"league": info, "standings": fetch_standings(sport, league)}
