from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

MEDIA_TYPES = ("movie", "tv")

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def _without_nul(raw: str) -> str:
    # Postgres text values cannot contain NUL bytes.
    return raw.replace("\x00", "")


@dataclass(frozen=True)
class FeedFilters:
    """Typed catalog predicate. Empty tuples and ``None`` mean "no constraint"."""

    media_type: Optional[str] = None
    genres: Tuple[str, ...] = ()
    countries: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()
    year_min: Optional[int] = None
    year_max: Optional[int] = None

    def has_year_range(self) -> bool:
        return self.year_min is not None or self.year_max is not None

    def has_filters(self) -> bool:
        return bool(
            self.media_type
            or self.genres
            or self.countries
            or self.languages
            or self.has_year_range()
        )

    def year_range_is_empty(self) -> bool:
        return (
            self.year_min is not None
            and self.year_max is not None
            and self.year_min > self.year_max
        )


def parse_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated value, trimming entries and dropping blanks."""
    if not raw:
        return []
    raw = _without_nul(raw)
    return [entry.strip() for entry in raw.split(",") if entry.strip()]


def parse_year(raw: Optional[str]) -> Optional[int]:
    # Lenient like parseInt: "2001abc" -> 2001, "abc" -> None.
    if not raw:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    return int(match.group(1))


def parse_media_type(raw: Optional[str]) -> Optional[str]:
    if raw in MEDIA_TYPES:
        return raw
    return None


def parse_cursor(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    cursor = _without_nul(raw).strip()
    return cursor or None


def translate(params: Mapping[str, Optional[str]]) -> Tuple[FeedFilters, Optional[str]]:
    """
    Translate raw request parameters into a ``FeedFilters`` value and cursor.

    Invalid values never fail the request; each one degrades to "unset" for
    its own dimension.
    """
    filters = FeedFilters(
        media_type=parse_media_type(params.get("type")),
        genres=tuple(parse_list(params.get("genres"))),
        countries=tuple(parse_list(params.get("countries"))),
        languages=tuple(parse_list(params.get("lang"))),
        year_min=parse_year(params.get("year_min")),
        year_max=parse_year(params.get("year_max")),
    )
    return filters, parse_cursor(params.get("cursor"))
