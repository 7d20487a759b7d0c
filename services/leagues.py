# services/leagues.py
from fastapi import HTTPException

# ESPN uses {sport}/{league} path segments; league slugs are ESPN's own.
SPORTS_CONFIG: dict[str, dict] = {
    "football": {
        "name": "Football",
        "icon": "🏈",
        "leagues": {
            "nfl": "NFL",
            "college-football": "College Football",
        },
    },
    "basketball": {
        "name": "Basketball",
        "icon": "🏀",
        "leagues": {
            "nba": "NBA",
            "wnba": "WNBA",
            "mens-college-basketball": "Men's College Basketball",
            "womens-college-basketball": "Women's College Basketball",
        },
    },
    "baseball": {
        "name": "Baseball",
        "icon": "⚾",
        "leagues": {
            "mlb": "MLB",
            "college-baseball": "College Baseball",
        },
    },
    "hockey": {
        "name": "Hockey",
        "icon": "🏒",
        "leagues": {
            "nhl": "NHL",
        },
    },
    "soccer": {
        "name": "Soccer",
        "icon": "⚽",
        "leagues": {
            # top European leagues
            "eng.1": "Premier League",
            "esp.1": "La Liga",
            "ger.1": "Bundesliga",
            "ita.1": "Serie A",
            "fra.1": "Ligue 1",
            # UEFA
            "uefa.champions": "Champions League",
            "uefa.europa": "Europa League",
            "uefa.europa.conf": "Conference League",
            # Americas
            "usa.1": "MLS",
            "mex.1": "Liga MX",
            "bra.1": "Brasileirao",
            "arg.1": "Liga Argentina",
            "concacaf.champions": "CONCACAF Champions",
            "conmebol.libertadores": "Copa Libertadores",
            # other European
            "eng.2": "Championship",
            "ned.1": "Eredivisie",
            "por.1": "Primeira Liga",
            "sco.1": "Scottish Premiership",
            # international
            "fifa.world": "FIFA World Cup",
            "uefa.euro": "UEFA Euro",
        },
    },
    "mma": {
        "name": "MMA",
        "icon": "🥊",
        "leagues": {
            "ufc": "UFC",
        },
    },
    "golf": {
        "name": "Golf",
        "icon": "⛳",
        "leagues": {
            "pga": "PGA Tour",
        },
    },
    "racing": {
        "name": "Racing",
        "icon": "🏎️",
        "leagues": {
            "f1": "Formula 1",
            "nascar": "NASCAR",
        },
    },
    "tennis": {
        "name": "Tennis",
        "icon": "🎾",
        "leagues": {
            "atp": "ATP",
            "wta": "WTA",
        },
    },
}

_LEAGUE_CDN = "https://a.espncdn.com/combiner/i?img=/i/teamlogos/leagues/500"
_SOCCER_CDN = "https://a.espncdn.com/combiner/i?img=/i/leaguelogos/soccer/500"

# ESPN CDN league logos; golf, racing and tennis have none
LEAGUE_LOGOS = {
    "nfl": f"{_LEAGUE_CDN}/nfl.png",
    "college-football": f"{_LEAGUE_CDN}/ncaa.png",
    "nba": f"{_LEAGUE_CDN}/nba.png",
    "wnba": f"{_LEAGUE_CDN}/wnba.png",
    "mens-college-basketball": f"{_LEAGUE_CDN}/ncaa.png",
    "womens-college-basketball": f"{_LEAGUE_CDN}/ncaa.png",
    "mlb": f"{_LEAGUE_CDN}/mlb.png",
    "nhl": f"{_LEAGUE_CDN}/nhl.png",
    "ufc": f"{_LEAGUE_CDN}/ufc.png",
    # soccer logos are keyed by ESPN's numeric league id
    "eng.1": f"{_SOCCER_CDN}/23.png",
    "esp.1": f"{_SOCCER_CDN}/15.png",
    "ger.1": f"{_SOCCER_CDN}/10.png",
    "ita.1": f"{_SOCCER_CDN}/12.png",
    "fra.1": f"{_SOCCER_CDN}/9.png",
    "uefa.champions": f"{_SOCCER_CDN}/2.png",
    "uefa.europa": f"{_SOCCER_CDN}/35.png",
    "uefa.europa.conf": f"{_SOCCER_CDN}/35.png",
    "uefa.euro": f"{_SOCCER_CDN}/4.png",
    "usa.1": f"{_SOCCER_CDN}/19.png",
    "mex.1": f"{_SOCCER_CDN}/22.png",
    "bra.1": f"{_SOCCER_CDN}/85.png",
    "arg.1": f"{_SOCCER_CDN}/1.png",
    "concacaf.champions": f"{_SOCCER_CDN}/28.png",
    "conmebol.libertadores": f"{_SOCCER_CDN}/5.png",
    "eng.2": f"{_SOCCER_CDN}/24.png",
    "ned.1": f"{_SOCCER_CDN}/11.png",
    "por.1": f"{_SOCCER_CDN}/14.png",
    "sco.1": f"{_SOCCER_CDN}/43.png",
    "fifa.world": f"{_SOCCER_CDN}/4.png",
}

# a sport borrows its flagship league's logo
SPORT_LOGOS = {
    "football": LEAGUE_LOGOS["nfl"],
    "basketball": LEAGUE_LOGOS["nba"],
    "baseball": LEAGUE_LOGOS["mlb"],
    "hockey": LEAGUE_LOGOS["nhl"],
    "soccer": LEAGUE_LOGOS["eng.1"],
    "mma": LEAGUE_LOGOS["ufc"],
}

# individual sports list athletes instead of teams
INDIVIDUAL_SPORTS = {"mma", "golf", "racing", "tennis"}

NOTABLE_GAMES = {
    "basketball": {
        "nba": [
            {"id": "400878160", "name": "2016 NBA Finals Game 7 - Cavaliers vs Warriors", "date": "2016-06-19"},
            {"id": "401307777", "name": "2021 NBA Finals Game 6 - Bucks vs Suns", "date": "2021-07-20"},
            {"id": "401584793", "name": "2023 NBA Finals Game 5 - Nuggets vs Heat", "date": "2023-06-12"},
        ],
    },
    "football": {
        "nfl": [
            {"id": "400999173", "name": "Super Bowl LI - Patriots vs Falcons", "date": "2017-02-05"},
            {"id": "401326638", "name": "Super Bowl LVI - Rams vs Bengals", "date": "2022-02-13"},
            {"id": "401547417", "name": "Super Bowl LVII - Chiefs vs Eagles", "date": "2023-02-12"},
        ],
    },
    "baseball": {
        "mlb": [
            {"id": "401472105", "name": "2022 World Series Game 6 - Astros vs Phillies", "date": "2022-11-05"},
        ],
    },
    "hockey": {
        "nhl": [
            {"id": "401559457", "name": "2023 Stanley Cup Final Game 5 - Golden Knights vs Panthers", "date": "2023-06-13"},
        ],
    },
}


def get_sport(sport: str) -> dict | None:
    return SPORTS_CONFIG.get(sport)


def get_league(sport: str, league: str) -> dict | None:
    cfg = get_sport(sport)
    if not cfg or league not in cfg["leagues"]:
        return None
    return {
        "slug": league,
        "name": cfg["leagues"][league],
        "logo": LEAGUE_LOGOS.get(league, ""),
        "sport": sport,
        "sport_name": cfg["name"],
    }


def require_league(sport: str, league: str) -> dict:
    info = get_league(sport, league)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Unknown league: {sport}/{league}")
    return info


def list_sports() -> list[dict]:
    return [
        {
            "sport": key,
            "name": cfg["name"],
            "icon": cfg["icon"],
            "logo": SPORT_LOGOS.get(key, ""),
            "leagues": [
                {"slug": slug, "name": name, "logo": LEAGUE_LOGOS.get(slug, "")}
                for slug, name in cfg["leagues"].items()
            ],
        }
        for key, cfg in SPORTS_CONFIG.items()
    ]


def notable_games(sport: str, league: str) -> list[dict]:
    return NOTABLE_GAMES.get(sport, {}).get(league, [])
