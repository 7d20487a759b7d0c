# services/streams.py
"""
ESPN HLS stream URLs.

ESPN serves streams from Akamai with a fixed path layout:

  https://service-pkgespn.akamaized.net/opp/hls/espn/{category}/{yyyy}/{mmdd}/{uuid}/{uuid}/playlist.m3u8

The UUID keys a specific video asset and is repeated in two segments. It is
not exposed by the public API; users paste URLs or network logs and we pull
UUIDs out of them.
"""
import re
from dataclasses import dataclass
from datetime import date

AKAMAI_HOST = "service-pkgespn.akamaized.net"
AKAMAI_BASE = f"https://{AKAMAI_HOST}/opp/hls/espn"
PLAYLIST = "playlist.m3u8"
DEFAULT_CATEGORY = "wsc"

# display only; unknown categories still build and parse
STREAM_CATEGORIES = {
    "wsc": "Web Stream Content",
    "watch": "ESPN Watch",
    "espnplus": "ESPN+",
    "live": "Live Streams",
    "vod": "Video on Demand",
    "highlights": "Highlights",
    "replays": "Game Replays",
}

_UUID = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
UUID_RE = re.compile(_UUID, re.IGNORECASE)
STREAM_URL_RE = re.compile(
    re.escape(AKAMAI_HOST)
    + r"/opp/hls/espn/([^/]+)/(\d{4})/(\d{4})/(" + _UUID + r")/(" + _UUID + r")/"
    + re.escape(PLAYLIST),
    re.IGNORECASE,
)


@dataclass(frozen=True)
class StreamLocator:
    category: str
    identifier: str
    date: date


@dataclass(frozen=True)
class ParsedStream:
    locator: StreamLocator
    m3u8_url: str
    uuid_mismatch: bool = False

    @property
    def uuid(self) -> str:
        return self.locator.identifier

    @property
    def category(self) -> str:
        return self.locator.category

    @property
    def date_iso(self) -> str:
        return self.locator.date.isoformat()

    def to_dict(self) -> dict:
        return {
            "uuid": self.uuid,
            "m3u8_url": self.m3u8_url,
            "date": self.date_iso,
            "category": self.category,
            "category_label": category_label(self.category),
            "uuid_mismatch": self.uuid_mismatch,
        }


def category_label(category: str) -> str:
    return STREAM_CATEGORIES.get(category, category)


def make_locator(uuid: str, d: date, category: str | None = None) -> StreamLocator:
    return StreamLocator(category=category or DEFAULT_CATEGORY, identifier=uuid, date=d)


def build_stream_url(locator: StreamLocator) -> str:
    d = locator.date
    mmdd = f"{d.month:02d}{d.day:02d}"
    uuid = locator.identifier
    return f"{AKAMAI_BASE}/{locator.category}/{d.year:04d}/{mmdd}/{uuid}/{uuid}/{PLAYLIST}"


def parse_stream_url(url: str | None) -> ParsedStream | None:
    """
    Returns None for anything that isn't an ESPN stream URL.
    Two different UUIDs in the path still parse (first one wins) but are
    flagged with uuid_mismatch so the caller can report it.
    """
    m = STREAM_URL_RE.search(url or "")
    if not m:
        return None

    category, year, mmdd, uuid1, uuid2 = m.groups()
    try:
        d = date(int(year), int(mmdd[:2]), int(mmdd[2:]))
    except ValueError:
        return None

    return ParsedStream(
        locator=StreamLocator(category=category, identifier=uuid1, date=d),
        # only the matched URL, never the pasted text around it
        m3u8_url="https://" + m.group(0),
        uuid_mismatch=uuid1 != uuid2,
    )


def extract_uuids(text: str | None) -> list[str]:
    """UUID-shaped substrings, first-seen order. Exact-match de-dupe (case matters)."""
    seen = {}
    for m in UUID_RE.finditer(text or ""):
        seen.setdefault(m.group(0), None)
    return list(seen)


def is_espn_stream_url(url: str | None) -> bool:
    url = (url or "").lower()
    return AKAMAI_HOST in url and f"/{PLAYLIST}" in url


def build_stream_templates(game_date: date, uuids: list[str]) -> list[ParsedStream]:
    """Candidate URLs for every known category x uuid."""
    out = []
    for category in STREAM_CATEGORIES:
        for uuid in uuids:
            locator = StreamLocator(category=category, identifier=uuid, date=game_date)
            out.append(ParsedStream(locator=locator, m3u8_url=build_stream_url(locator)))
    return out


def format_stream_url_display(url: str) -> str:
    parsed = parse_stream_url(url)
    if not parsed:
        return url

    return "\n".join([
        f"Stream URL: {parsed.m3u8_url}",
        f"UUID: {parsed.uuid}",
        f"Date: {parsed.date_iso}",
        f"Category: {category_label(parsed.category)}",
    ])


_CATEGORY_LINES = "\n".join(f"- {k}: {v}" for k, v in STREAM_CATEGORIES.items())

STREAM_DISCOVERY_INSTRUCTIONS = f"""
## How to Find ESPN Stream UUIDs

Stream UUIDs are not exposed in the public API. To find them:

### Method 1: Network Traffic Inspection
1. Open ESPN's website and navigate to a game or video
2. Open Developer Tools (F12) -> Network tab
3. Filter by 'fetch' or 'xhr'
4. Look for requests to 'akamaized.net' or containing UUIDs
5. The UUID format: xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx

### Method 2: Video Player Inspection
1. Right-click on the video player -> Inspect Element
2. Look for video source URLs in the HTML
3. Search for 'playlist.m3u8' or 'master.m3u8'

### URL Pattern:
`{AKAMAI_BASE}/{{category}}/{{year}}/{{mmdd}}/{{uuid}}/{{uuid}}/{PLAYLIST}`

### Categories:
{_CATEGORY_LINES}

Note: ESPN+ streams require authentication. Some streams may be geo-restricted.
""".strip()


def discovery_instructions() -> str:
    return STREAM_DISCOVERY_INSTRUCTIONS
