"""Tests for ESPN stream URL building, parsing and UUID extraction."""

from datetime import date

import pytest

from services.streams import (
    STREAM_CATEGORIES,
    StreamLocator,
    build_stream_templates,
    build_stream_url,
    discovery_instructions,
    extract_uuids,
    format_stream_url_display,
    is_espn_stream_url,
    make_locator,
    parse_stream_url,
)

UUID = "a3c7030e-be5c-462c-bfc0-eedb51242afe"
OTHER = "0f1e2d3c-4b5a-6978-8a9b-acbdcedf0011"
URL = (
    "https://service-pkgespn.akamaized.net/opp/hls/espn/wsc/2025/1117/"
    f"{UUID}/{UUID}/playlist.m3u8"
)


class TestBuildStreamUrl:
    def test_known_url(self):
        locator = StreamLocator(category="wsc", identifier=UUID, date=date(2025, 11, 17))
        assert build_stream_url(locator) == URL

    def test_month_and_day_are_zero_padded(self):
        url = build_stream_url(make_locator(UUID, date(2024, 1, 5), "vod"))
        assert "/vod/2024/0105/" in url

    def test_default_category(self):
        assert make_locator(UUID, date(2025, 11, 17)).category == "wsc"

    def test_identifier_not_validated(self):
        url = build_stream_url(make_locator("not-a-uuid", date(2025, 11, 17)))
        assert url.endswith("/not-a-uuid/not-a-uuid/playlist.m3u8")


class TestParseStreamUrl:
    def test_known_url(self):
        parsed = parse_stream_url(URL)
        assert parsed is not None
        assert parsed.locator == StreamLocator(category="wsc", identifier=UUID, date=date(2025, 11, 17))
        assert parsed.m3u8_url == URL
        assert parsed.date_iso == "2025-11-17"
        assert parsed.uuid_mismatch is False

    @pytest.mark.parametrize("category,day", [
        ("wsc", date(2025, 11, 17)),
        ("espnplus", date(2024, 2, 29)),
        ("replays", date(1999, 12, 31)),
        ("something-new", date(2026, 1, 1)),
    ])
    def test_round_trip(self, category, day):
        locator = StreamLocator(category=category, identifier=UUID, date=day)
        assert parse_stream_url(build_stream_url(locator)).locator == locator

    def test_uppercase_uuid_kept_verbatim(self):
        upper = UUID.upper()
        parsed = parse_stream_url(URL.replace(UUID, upper))
        assert parsed.uuid == upper

    def test_mismatched_uuids_flagged_first_wins(self):
        url = URL.replace(f"{UUID}/{UUID}", f"{UUID}/{OTHER}")
        parsed = parse_stream_url(url)
        assert parsed is not None
        assert parsed.uuid == UUID
        assert parsed.uuid_mismatch is True

    def test_embedded_in_surrounding_text(self):
        parsed = parse_stream_url(f"GET {URL}?token=abc 200 OK")
        assert parsed.uuid == UUID
        assert parsed.m3u8_url == URL

    @pytest.mark.parametrize("url", [
        "",
        None,
        "https://example.com/playlist.m3u8",
        URL.replace("service-pkgespn", "service-other"),
        URL.replace("playlist.m3u8", "master.m3u8"),
        URL.replace("/2025/", "/25/"),
        URL.replace(f"{UUID}/{UUID}", "abc/abc"),
        URL.replace("/wsc/", "/a/b/"),
    ])
    def test_no_match(self, url):
        assert parse_stream_url(url) is None

    def test_impossible_calendar_date(self):
        assert parse_stream_url(URL.replace("/1117/", "/1399/")) is None


class TestExtractUuids:
    def test_case_variants_stay_distinct(self):
        text = f"see {UUID} and {UUID.upper()}"
        assert extract_uuids(text) == [UUID, UUID.upper()]

    def test_duplicates_removed_first_seen_order(self):
        text = f'{{"a": "{OTHER}", "b": "{UUID}", "c": "{OTHER}"}}'
        assert extract_uuids(text) == [OTHER, UUID]

    def test_includes_parsed_uuid(self):
        assert parse_stream_url(URL).uuid in extract_uuids(URL)
        assert extract_uuids(URL) == [UUID]

    @pytest.mark.parametrize("text", ["", None, "no ids here", "a3c7030e-be5c-462c-bfc0"])
    def test_nothing_found(self, text):
        assert extract_uuids(text) == []


class TestIsEspnStreamUrl:
    def test_accepts_real_url(self):
        assert is_espn_stream_url(URL)

    def test_looser_than_parse(self):
        url = "https://service-pkgespn.akamaized.net/whatever/playlist.m3u8"
        assert is_espn_stream_url(url)
        assert parse_stream_url(url) is None

    @pytest.mark.parametrize("url", [
        URL,
        URL.upper(),
        URL.replace("service-pkgespn", "SERVICE-PKGESPN"),
        URL.replace("playlist.m3u8", "Playlist.M3U8"),
        f"GET {URL}?token=abc 200 OK",
        URL.replace(f"{UUID}/{UUID}", f"{UUID}/{OTHER}"),
    ])
    def test_accepts_everything_parse_accepts(self, url):
        assert parse_stream_url(url) is not None
        assert is_espn_stream_url(url)

    @pytest.mark.parametrize("url", ["", None, "https://service-pkgespn.akamaized.net/x/master.m3u8",
                                     "https://cdn.example.com/playlist.m3u8"])
    def test_rejects(self, url):
        assert not is_espn_stream_url(url)


class TestTemplatesAndDisplay:
    def test_templates_cover_every_category(self):
        out = build_stream_templates(date(2025, 11, 17), [UUID, OTHER])
        assert len(out) == len(STREAM_CATEGORIES) * 2
        assert [t.category for t in out[:2]] == ["wsc", "wsc"]
        assert {t.category for t in out} == set(STREAM_CATEGORIES)
        assert out[0].m3u8_url == URL

    def test_templates_no_uuids(self):
        assert build_stream_templates(date(2025, 11, 17), []) == []

    def test_display(self):
        text = format_stream_url_display(URL)
        assert f"UUID: {UUID}" in text
        assert "Date: 2025-11-17" in text
        assert "Category: Web Stream Content" in text

    def test_display_unknown_category(self):
        text = format_stream_url_display(URL.replace("/wsc/", "/mystery/"))
        assert "Category: mystery" in text

    def test_display_shows_only_the_url(self):
        text = format_stream_url_display(f"GET {URL}?token=abc 200 OK")
        assert text.splitlines()[0] == f"Stream URL: {URL}"

    def test_display_passthrough(self):
        assert format_stream_url_display("not a url") == "not a url"

    def test_to_dict(self):
        d = parse_stream_url(URL).to_dict()
        assert d["category_label"] == "Web Stream Content"
        assert d["date"] == "2025-11-17"

    def test_instructions_list_categories(self):
        text = discovery_instructions()
        assert "- wsc: Web Stream Content" in text
        assert "{category}" in text
