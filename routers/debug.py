# routers/debug.py
import os
from fastapi import APIRouter, HTTPException
from services.cache_sqlite import cache_stats, purge_expired
from services.espn import fetch_scoreboard, parse_games

router = APIRouter()

def require_debug():
    if os.getenv("DEBUG", "0") != "1":
        raise HTTPException(status_code=404, detail="Not found")

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/debug/env")
def debug_env():
    require_debug()
    return {
        "cache_db_path": os.getenv("CACHE_DB_PATH", "cache.sqlite3"),
        "espn_timeout": os.getenv("ESPN_TIMEOUT", "15"),
        "app_tz": os.getenv("APP_TZ", "America/New_York"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }

@router.get("/debug/espn")
def debug_espn(sport: str, league: str, date: str | None = None):
    require_debug()
    games = parse_games(fetch_scoreboard(sport, league, date))
    return {"count": len(games), "games": games[:25]}

@router.get("/debug/cache")
def debug_cache(purge: bool = False):
    require_debug()
    purged = purge_expired() if purge else 0
    return {**cache_stats(), "purged": purged}
