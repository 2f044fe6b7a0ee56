from __future__ import annotations

import pytest

from api.core.filters import (
    FeedFilters,
    parse_cursor,
    parse_list,
    parse_media_type,
    parse_year,
    translate,
)


def test_parse_list_trims_and_drops_empty_entries():
    assert parse_list("foo,,bar") == ["foo", "bar"]
    assert parse_list(" drama , , sci-fi ") == ["drama", "sci-fi"]
    assert parse_list(",,") == []
    assert parse_list(None) == []
    assert parse_list("") == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2000", 2000),
        (" 1999", 1999),
        ("2001abc", 2001),
        ("-5", -5),
        ("abc", None),
        ("", None),
        ("２０００", None),
        ("١٩٩٩", None),
        (None, None),
    ],
)
def test_parse_year(raw, expected):
    assert parse_year(raw) == expected


def test_parse_media_type_accepts_only_exact_values():
    assert parse_media_type("movie") == "movie"
    assert parse_media_type("tv") == "tv"
    assert parse_media_type("Movie") is None
    assert parse_media_type("bogus") is None
    assert parse_media_type(None) is None


def test_parse_cursor_blank_is_none():
    assert parse_cursor("  ") is None
    assert parse_cursor(None) is None
    assert parse_cursor("abc") == "abc"


def test_translate_builds_typed_filters():
    filters, cursor = translate(
        {
            "type": "tv",
            "genres": "drama,crime",
            "countries": "US",
            "lang": "en, es",
            "year_min": "1990",
            "year_max": "2005",
            "cursor": "t10",
        }
    )

    assert filters == FeedFilters(
        media_type="tv",
        genres=("drama", "crime"),
        countries=("US",),
        languages=("en", "es"),
        year_min=1990,
        year_max=2005,
    )
    assert cursor == "t10"
    assert filters.has_filters() is True


def test_translate_bogus_type_is_no_type_filter():
    bogus, _ = translate({"type": "bogus"})
    empty, _ = translate({})

    assert bogus == empty
    assert bogus.has_filters() is False


def test_translate_ignores_unparsable_years():
    filters, cursor = translate({"year_min": "soon", "year_max": ""})

    assert filters.year_min is None
    assert filters.year_max is None
    assert filters.has_year_range() is False
    assert cursor is None


def test_translate_half_bounded_year_range():
    filters, _ = translate({"year_max": "1999"})

    assert filters.has_year_range() is True
    assert filters.year_min is None
    assert filters.year_max == 1999
    assert filters.year_range_is_empty() is False


def test_translate_inverted_year_range_is_kept_not_rejected():
    filters, _ = translate({"year_min": "2000", "year_max": "1999"})

    assert filters.year_min == 2000
    assert filters.year_max == 1999
    assert filters.year_range_is_empty() is True


def test_nul_bytes_are_dropped_from_list_and_cursor_values():
    assert parse_list("\x00") == []
    assert parse_list("dra\x00ma,\x00,noir") == ["drama", "noir"]
    assert parse_cursor("\x00") is None
    assert parse_cursor("t0\x006") == "t06"


def test_translate_nul_only_genres_is_no_genre_filter():
    filters, cursor = translate({"genres": "\x00", "cursor": "\x00"})

    assert filters.genres == ()
    assert filters.has_filters() is False
    assert cursor is None
