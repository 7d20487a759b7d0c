import pytest


@pytest.fixture(autouse=True)
def cache_db(tmp_path, monkeypatch):
    """Every test gets its own SQLite cache file."""
    path = tmp_path / "cache.sqlite3"
    monkeypatch.setenv("CACHE_DB_PATH", str(path))
    return path


class FakeResponse:
    def __init__(self, payload=None, status_code=200, url="https://example.test", text=None):
        self._payload = payload
        self.status_code = status_code
        self.url = url
        self.text = text if text is not None else ("" if payload is None else str(payload))

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            import requests
            raise requests.HTTPError(f"HTTP {self.status_code}")


@pytest.fixture
def fake_response():
    return FakeResponse


def _competitor(home_away, team_id, name, short, abbr, score, winner=False):
    return {
        "homeAway": home_away,
        "score": score,
        "winner": winner,
        "records": [{"summary": "10-4", "type": "total"}],
        "team": {
            "id": team_id,
            "displayName": name,
            "shortDisplayName": short,
            "abbreviation": abbr,
            "logo": f"https://a.espncdn.com/i/teamlogos/{abbr.lower()}.png",
        },
    }


def _event(event_id, state, detail, away, home, completed=False):
    return {
        "id": event_id,
        "name": f"{away['team']['displayName']} at {home['team']['displayName']}",
        "shortName": f"{away['team']['abbreviation']} @ {home['team']['abbreviation']}",
        "date": "2025-11-17T00:30Z",
        "competitions": [{
            "date": "2025-11-17T00:30Z",
            "venue": {"fullName": "Crypto.com Arena"},
            "broadcasts": [{"market": "national", "names": ["ESPN"]}],
            "status": {
                "displayClock": "4:12",
                "period": 3,
                "type": {"state": state, "completed": completed, "shortDetail": detail},
            },
            "competitors": [home, away],
        }],
    }


@pytest.fixture
def scoreboard_json():
    return {
        "leagues": [{
            "id": "46",
            "abbreviation": "NBA",
            "calendar": [
                "2025-11-10T08:00Z",
                "2025-11-12T08:00Z",
                "2025-11-15T08:00Z",
                "2025-11-17T08:00Z",
                "2025-11-20T08:00Z",
                "2025-11-22T08:00Z",
                "2025-11-25T08:00Z",
            ],
        }],
        "day": {"date": "2025-11-17"},
        "events": [
            _event(
                "401",
                "in",
                "3rd 4:12",
                _competitor("away", "13", "Los Angeles Lakers", "Lakers", "LAL", "71"),
                _competitor("home", "2", "Boston Celtics", "Celtics", "BOS", "68"),
            ),
            _event(
                "402",
                "pre",
                "7:30 PM ET",
                _competitor("away", "9", "Golden State Warriors", "Warriors", "GS", "0"),
                _competitor("home", "20", "Philadelphia 76ers", "76ers", "PHI", "0"),
            ),
            _event(
                "403",
                "post",
                "Final",
                _competitor("away", "5", "Cleveland Cavaliers", "Cavaliers", "CLE", "101", winner=True),
                _competitor("home", "17", "Brooklyn Nets", "Nets", "BKN", "99"),
                completed=True,
            ),
            {"id": "404", "competitions": []},
        ],
    }


@pytest.fixture
def game_summary():
    return {
        "header": {
            "id": "403",
            "competitions": [{
                "date": "2025-11-17T00:30Z",
                "status": {"type": {"state": "post", "completed": True, "shortDetail": "Final"}},
                "competitors": [
                    {
                        "homeAway": "home",
                        "score": "99",
                        "team": {"displayName": "Brooklyn Nets", "abbreviation": "BKN"},
                        "linescores": [{"displayValue": "25"}, {"displayValue": "24"}],
                    },
                    {
                        "homeAway": "away",
                        "score": "101",
                        "winner": True,
                        "team": {"displayName": "Cleveland Cavaliers", "abbreviation": "CLE"},
                        "linescores": [{"displayValue": "30"}, {"displayValue": "21"}],
                    },
                ],
            }],
        },
        "boxscore": {"teams": []},
        "gameInfo": {"venue": {"fullName": "Barclays Center"}},
        "scoringPlays": [{"text": f"Play {i}"} for i in range(1, 8)],
        "leaders": [
            {
                "name": "points",
                "shortDisplayName": "PTS",
                "leaders": [{
                    "displayValue": "34",
                    "athlete": {"displayName": "Donovan Mitchell", "team": {"id": "5"}},
                }],
            },
            {"name": "rebounds", "shortDisplayName": "REB", "leaders": []},
        ],
    }
