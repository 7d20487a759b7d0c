# routers/sports.py
from fastapi import APIRouter, Query

from services.build import (
    build_athlete,
    build_athletes,
    build_game,
    build_league_home,
    build_news,
    build_rankings,
    build_recap,
    build_scoreboard,
    build_standings,
    build_team,
    build_teams,
)
from services.leagues import list_sports

router = APIRouter(prefix="/api")


@router.get("/sports")
def sports():
    return {"sports": list_sports()}


@router.get("/{sport}/{league}")
def league_home(sport: str, league: str):
    return build_league_home(sport, league)


@router.get("/{sport}/{league}/scoreboard")
def scoreboard(sport: str, league: str, date: str | None = Query(default=None)):
    """
    date: YYYYMMDD or YYYY-MM-DD. Omitted -> ESPN's current board.
    """
    return build_scoreboard(sport, league, date)


@router.get("/{sport}/{league}/game/{event_id}")
def game(sport: str, league: str, event_id: str):
    return build_game(sport, league, event_id)


@router.get("/{sport}/{league}/game/{event_id}/recap")
def recap(sport: str, league: str, event_id: str, bpm: int = Query(default=90, ge=40, le=200)):
    return build_recap(sport, league, event_id, bpm=bpm)


@router.get("/{sport}/{league}/teams")
def teams(sport: str, league: str):
    return build_teams(sport, league)


@router.get("/{sport}/{league}/teams/{team_id}")
def team(sport: str, league: str, team_id: str):
    return build_team(sport, league, team_id)


@router.get("/{sport}/{league}/athletes")
def athletes(sport: str, league: str, limit: int = Query(default=200, ge=1, le=1000)):
    return build_athletes(sport, league, limit)


@router.get("/{sport}/{league}/news")
def news(sport: str, league: str):
    return build_news(sport, league)


@router.get("/{sport}/{league}/athletes/{athlete_id}")
def athlete(sport: str, league: str, athlete_id: str):
    return build_athlete(sport, league, athlete_id)


@router.get("/{sport}/{league}/rankings")
def rankings(sport: str, league: str):
    return build_rankings(sport, league)


@router.get("/{sport}/{league}/standings")
def standings(sport: str, league: str):
    return build_standings(sport, league)
