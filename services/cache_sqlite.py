import json
import logging
import os
import sqlite3
import threading
import time
from contextlib import contextmanager
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS http_cache (
  cache_key     TEXT PRIMARY KEY,
  status_code   INTEGER NOT NULL,
  payload_json  TEXT NOT NULL,
  fetched_at    INTEGER NOT NULL,
  expires_at    INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_http_cache_expires ON http_cache(expires_at);
"""

UPSERT = """
INSERT INTO http_cache(cache_key, status_code, payload_json, fetched_at, expires_at)
VALUES(?,?,?,?,?)
ON CONFLICT(cache_key) DO UPDATE SET
  status_code=excluded.status_code,
  payload_json=excluded.payload_json,
  fetched_at=excluded.fetched_at,
  expires_at=excluded.expires_at;
"""

# one lock per cache key so concurrent misses hit ESPN once
_inflight: dict[str, threading.Lock] = {}
_inflight_guard = threading.Lock()
# db files whose schema exists; CACHE_DB_PATH can change between tests
_initialized: set[str] = set()

def _now() -> int:
    return int(time.time())

def db_path() -> str:
    return os.getenv("CACHE_DB_PATH", "cache.sqlite3")

@contextmanager
def _db(path: Optional[str] = None):
    conn = sqlite3.connect(path or db_path(), timeout=30, check_same_thread=False)
    try:
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        yield conn
        conn.commit()
    finally:
        conn.close()

def init_cache(path: Optional[str] = None) -> str:
    path = path or db_path()
    with _db(path) as conn:
        conn.executescript(SCHEMA)
    _initialized.add(path)
    return path

def _ensure(path: Optional[str]) -> str:
    path = path or db_path()
    return path if path in _initialized else init_cache(path)

def get_cached(cache_key: str, path: Optional[str] = None) -> Optional[Tuple[int, Any, int, int]]:
    """(status_code, payload, fetched_at, expires_at), or None when missing or unreadable."""
    path = _ensure(path)
    with _db(path) as conn:
        row = conn.execute(
            "SELECT status_code, payload_json, fetched_at, expires_at FROM http_cache WHERE cache_key=?",
            (cache_key,),
        ).fetchone()
    if not row:
        return None
    try:
        payload = json.loads(row[1])
    except ValueError:
        logger.warning("Dropping unreadable cache row %s", cache_key)
        return None
    return row[0], payload, row[2], row[3]

def set_cached(cache_key: str, status_code: int, payload: Any, ttl_seconds: int, path: Optional[str] = None):
    path = _ensure(path)
    now = _now()
    with _db(path) as conn:
        conn.execute(
            UPSERT,
            (cache_key, status_code, json.dumps(payload, separators=(",", ":")), now, now + max(1, int(ttl_seconds))),
        )

def purge_expired(path: Optional[str] = None) -> int:
    path = _ensure(path)
    with _db(path) as conn:
        return conn.execute("DELETE FROM http_cache WHERE expires_at < ?", (_now(),)).rowcount

def cache_stats(path: Optional[str] = None) -> dict:
    path = _ensure(path)
    now = _now()
    with _db(path) as conn:
        total = conn.execute("SELECT COUNT(*) FROM http_cache").fetchone()[0]
        fresh = conn.execute("SELECT COUNT(*) FROM http_cache WHERE expires_at >= ?", (now,)).fetchone()[0]
    return {"path": path, "entries": total, "fresh": fresh, "expired": total - fresh}

def _fresh(cache_key: str, path: Optional[str]) -> Optional[Tuple[int, Any]]:
    cached = get_cached(cache_key, path)
    if cached is None or cached[3] < _now():
        return None
    return cached[0], cached[1]

def _lock_for_key(cache_key: str) -> threading.Lock:
    with _inflight_guard:
        return _inflight.setdefault(cache_key, threading.Lock())

def cached_call(cache_key: str, ttl_seconds: int, fetch_fn, *, path: Optional[str] = None):
    """
    fetch_fn must return: (status_code:int, payload:any)
    Only status 200 is cached. Returns (status_code, payload, "cache"|"origin").
    """
    hit = _fresh(cache_key, path)
    if hit is None:
        with _lock_for_key(cache_key):
            # a concurrent caller may have filled it while we waited
            hit = _fresh(cache_key, path)
            if hit is None:
                sc, payload = fetch_fn()
                if sc == 200:
                    set_cached(cache_key, sc, payload, ttl_seconds, path=path)
                return sc, payload, "origin"

    logger.debug("cache hit %s", cache_key)
    return hit[0], hit[1], "cache"
