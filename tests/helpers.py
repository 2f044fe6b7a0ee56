from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from api.core.catalog import FeedUnavailableError
from api.core.filters import FeedFilters
from api.db.models import Collection, Title, Trailer

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_trailer(
    kind: str = "trailer",
    *,
    is_official: bool = False,
    video_id: str | None = None,
    source: str = "youtube",
) -> Trailer:
    return Trailer(
        source=source,
        source_video_id=video_id or f"{kind}-{'o' if is_official else 'u'}",
        kind=kind,
        is_official=is_official,
    )


def make_title(
    title_id: str,
    *,
    seq: int = 0,
    media_type: str = "movie",
    genres: Sequence[str] = (),
    countries: Sequence[str] = (),
    languages: Sequence[str] = (),
    year: int | None = 2020,
    overview: str | None = "An overview.",
    trailers: Iterable[Trailer] = (),
    created_at: datetime | None = None,
) -> Title:
    title = Title(
        id=title_id,
        provider="tmdb",
        provider_id=f"tmdb-{title_id}",
        type=media_type,
        title=f"Title {title_id}",
        year=year,
        overview=overview,
        poster_url=f"https://img.example/{title_id}/poster.jpg",
        backdrop_url=f"https://img.example/{title_id}/backdrop.jpg",
        genres=list(genres),
        countries=list(countries),
        languages=list(languages),
        created_at=created_at or _EPOCH + timedelta(minutes=seq),
    )
    title.trailers = list(trailers)
    return title


def make_catalog(count: int, **kwargs: Any) -> List[Title]:
    """Titles t01..tNN created at strictly increasing timestamps."""
    return [make_title(f"t{i:02d}", seq=i, **kwargs) for i in range(1, count + 1)]


def _overlaps(values: Sequence[str], wanted: Sequence[str]) -> bool:
    return bool(set(values or []) & set(wanted))


def _matches(title: Title, filters: FeedFilters) -> bool:
    if filters.media_type and title.type != filters.media_type:
        return False
    if filters.genres and not _overlaps(title.genres, filters.genres):
        return False
    if filters.countries and not _overlaps(title.countries, filters.countries):
        return False
    if filters.languages and not _overlaps(title.languages, filters.languages):
        return False
    if filters.has_year_range():
        if title.year is None:
            return False
        if filters.year_min is not None and title.year < filters.year_min:
            return False
        if filters.year_max is not None and title.year > filters.year_max:
            return False
    return True


class InMemoryCatalogStore:
    """
    Catalog store double with the same contract as ``SqlCatalogStore``:
    any-of membership filters, (created_at DESC, id DESC) ordering and an
    exclusive "strictly after this id" cursor.
    """

    def __init__(
        self,
        titles: Iterable[Title] = (),
        collections: Optional[Dict[Collection, List[Title]]] = None,
    ):
        self.titles = list(titles)
        self.collections = collections or {}
        self.calls: List[Dict[str, Any]] = []

    def _sorted(self) -> List[Title]:
        return sorted(
            self.titles, key=lambda t: (t.created_at, t.id), reverse=True
        )

    def query_titles(
        self, filters: FeedFilters, *, after: Optional[str], limit: int
    ) -> List[Title]:
        self.calls.append({"filters": filters, "after": after, "limit": limit})
        rows = [t for t in self._sorted() if _matches(t, filters)]
        if after:
            anchor = next((t for t in self.titles if t.id == after), None)
            if anchor is None:
                return []
            key = (anchor.created_at, anchor.id)
            rows = [t for t in rows if (t.created_at, t.id) < key]
        return rows[:limit]

    def get_title(self, title_id: str) -> Optional[Title]:
        return next((t for t in self.titles if t.id == title_id), None)

    def list_collections(self) -> List[Collection]:
        return sorted(self.collections, key=lambda c: (c.title, c.id))

    def collection_previews(
        self, collection_ids: Sequence[int], limit: int
    ) -> Dict[int, List[Title]]:
        self.calls.append({"collection_ids": list(collection_ids), "limit": limit})
        by_id = {c.id: titles for c, titles in self.collections.items()}
        return {cid: list(by_id.get(cid, []))[:limit] for cid in collection_ids}


class FailingCatalogStore:
    def _fail(self, *args: Any, **kwargs: Any):
        raise FeedUnavailableError("Catalog title query failed")

    query_titles = _fail
    get_title = _fail
    list_collections = _fail
    collection_previews = _fail


class FakeResult:
    """
    Minimal result wrapper to emulate SQLAlchemy scalar result contract.
    """

    def __init__(self, rows: Sequence[Any]):
        self._rows = list(rows)
        self._scalar_mode = False

    def scalars(self) -> "FakeResult":
        result = FakeResult(self._rows)
        result._scalar_mode = True
        return result

    def all(self) -> List[Any]:
        if self._scalar_mode:
            return [
                row[0] if isinstance(row, (tuple, list)) else row for row in self._rows
            ]
        return list(self._rows)

    def first(self) -> Any | None:
        if not self._rows:
            return None
        if self._scalar_mode and isinstance(self._rows[0], (tuple, list)):
            return self._rows[0][0]
        return self._rows[0]


class RecordingSession:
    """Session stub that records statements and replays canned rows."""

    def __init__(self, rows: Sequence[Any] = (), error: Exception | None = None):
        self._rows = list(rows)
        self._error = error
        self.statements: List[Any] = []
        self.closed = False

    def execute(self, statement, params=None):
        self.statements.append(statement)
        if self._error is not None:
            raise self._error
        return FakeResult(self._rows)

    def close(self):
        self.closed = True
