# services/recap.py
"""
Template "rap recap" for a finished game.

Pulls the winner/loser, scoring plays and stat leaders out of an ESPN game
summary and turns them into short rhymed lines, a teleprompter script, and a
prompt pair that can be handed to a language model for a better version.
"""
from dataclasses import asdict, dataclass, field

TARGET_SECONDS = 55


@dataclass
class Performer:
    name: str
    team: str
    stats: str


@dataclass
class RecapData:
    game_title: str
    winner: str
    loser: str
    winner_score: str
    loser_score: str
    key_plays: list[str] = field(default_factory=list)
    top_performers: list[Performer] = field(default_factory=list)
    game_narrative: str = ""
    suggested_rap_lines: list[str] = field(default_factory=list)
    duration: int = TARGET_SECONDS

    @property
    def final_score(self) -> str:
        return f"{self.winner_score}-{self.loser_score}"

    def to_dict(self) -> dict:
        d = asdict(self)
        d["final_score"] = self.final_score
        return d


@dataclass
class RecapPrompt:
    system_prompt: str
    user_prompt: str


def _score(competitor: dict | None) -> int:
    try:
        return int((competitor or {}).get("score") or 0)
    except (TypeError, ValueError):
        return 0


def _team_name(competitor: dict | None, default: str) -> str:
    return ((competitor or {}).get("team") or {}).get("displayName") or default


def extract_recap_data(summary: dict) -> RecapData:
    header = summary.get("header") or {}
    comps = header.get("competitions") or [{}]
    competitors = comps[0].get("competitors") or []
    home = next((c for c in competitors if c.get("homeAway") == "home"), None)
    away = next((c for c in competitors if c.get("homeAway") == "away"), None)

    # ties go to the away side, same as a strict home > away check
    if _score(home) > _score(away):
        winner, loser = home, away
    else:
        winner, loser = away, home

    key_plays = [p.get("text", "") for p in (summary.get("scoringPlays") or [])[-5:]]

    # football: scoring drives
    scoring_drives = [d for d in (summary.get("drives") or []) if d.get("isScore")][-5:]
    for drive in scoring_drives:
        if drive.get("displayResult"):
            team = (drive.get("team") or {}).get("displayName", "")
            key_plays.append(f"{team}: {drive['displayResult']} - {drive.get('yards')} yards")

    performers = []
    for category in summary.get("leaders") or []:
        leaders = category.get("leaders") or []
        if not leaders:
            continue
        top = leaders[0]
        athlete = top.get("athlete") or {}
        performers.append(Performer(
            name=athlete.get("displayName") or "Unknown",
            team=(athlete.get("team") or {}).get("id", ""),
            stats=f"{top.get('displayValue', '')} {category.get('shortDisplayName') or category.get('name', '')}",
        ))

    winner_name = _team_name(winner, "Winner")
    loser_name = _team_name(loser, "Loser")
    winner_score = str((winner or {}).get("score") or 0)
    loser_score = str((loser or {}).get("score") or 0)

    narrative = (summary.get("article") or {}).get("description") or ""
    if not narrative and winner and loser:
        narrative = f"{winner_name} defeated {loser_name} {winner_score}-{loser_score}"

    title = f"{_team_name(away, 'Away')} vs {_team_name(home, 'Home')}" if competitors else "Game Recap"

    return RecapData(
        game_title=title,
        winner=winner_name,
        loser=loser_name,
        winner_score=winner_score,
        loser_score=loser_score,
        key_plays=key_plays,
        top_performers=performers,
        game_narrative=narrative,
        suggested_rap_lines=generate_rap_lines(winner_name, loser_name, winner_score, loser_score, performers, key_plays),
    )


def generate_rap_lines(
    winner: str,
    loser: str,
    winner_score: str,
    loser_score: str,
    top_performers: list[Performer],
    key_plays: list[str],
) -> list[str]:
    lines = [
        "Yo, let me tell you 'bout this game tonight",
        f"{winner} came through and they came to fight",
        f"Final score was {winner_score} to {loser_score}",
        f"{loser} tried hard but they couldn't get more",
    ]

    for performer in top_performers[:2]:
        first_name = performer.name.split(" ")[0]
        lines.append(f"{first_name} went crazy, {performer.stats}")
        lines.append("When they're on the floor, you know they never rest")

    if key_plays:
        lines.append("Big plays all night, let me break it down")
        lines.append(f"{winner} wearing that crown")

    lines.append(f"{winner} takes the W, that's how it goes")
    lines.append("Another victory, and everybody knows")
    return lines


def format_for_teleprompter(lines: list[str], bpm: int = 90) -> str:
    # roughly two bars per line
    seconds_per_line = 60 / bpm * 2
    return "".join(f"[{i * seconds_per_line:.1f}s] {line}\n" for i, line in enumerate(lines))


SYSTEM_PROMPT = """You are a sports rap lyricist who creates engaging, rhythmic game recaps in a hip-hop style.
Your lyrics should:
- Be family-friendly and suitable for all audiences
- Have strong rhythm and flow (aim for consistent syllable counts per line)
- Include specific game details (scores, player names, key plays)
- Be energetic and celebratory of great plays from both teams
- Stay under 16 bars (about 55 seconds when performed)
- Use sports terminology and metaphors
- End with a memorable hook or punchline

Format your response as:
[VERSE 1]
(4 lines)

[CHORUS]
(4 lines - should be catchy and repeatable)

[VERSE 2]
(4 lines)

[OUTRO]
(2-4 lines)"""


def generate_ai_prompt(recap: RecapData) -> RecapPrompt:
    performers = "\n".join(f"- {p.name}: {p.stats}" for p in recap.top_performers)
    plays = "\n".join(f"- {p}" for p in recap.key_plays)

    user_prompt = f"""Create a rap recap for this game:

GAME: {recap.game_title}
FINAL SCORE: {recap.winner} {recap.winner_score} - {recap.loser} {recap.loser_score}

KEY PERFORMERS:
{performers}

KEY PLAYS:
{plays}

GAME SUMMARY:
{recap.game_narrative}

Create an engaging rap recap that highlights the winner's victory while respecting both teams. Make it energetic and fun!"""

    return RecapPrompt(system_prompt=SYSTEM_PROMPT, user_prompt=user_prompt)
