from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Protocol, Sequence

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased, selectinload

from api.core.filters import FeedFilters
from api.db.models import Collection, CollectionItem, Title

logger = logging.getLogger(__name__)


class FeedUnavailableError(RuntimeError):
    """Raised when the catalog store cannot serve a read."""


@dataclass
class CatalogPage:
    items: List[Title] = field(default_factory=list)
    next_cursor: Optional[str] = None


class CatalogStore(Protocol):
    def query_titles(
        self, filters: FeedFilters, *, after: Optional[str], limit: int
    ) -> List[Title]: ...

    def get_title(self, title_id: str) -> Optional[Title]: ...

    def list_collections(self) -> List[Collection]: ...

    def collection_previews(
        self, collection_ids: Sequence[int], limit: int
    ) -> Dict[int, List[Title]]: ...


@contextmanager
def _storage_guard(operation: str) -> Iterator[None]:
    try:
        yield
    # psycopg2 raises a bare ValueError for parameters it cannot bind (NUL bytes).
    except (SQLAlchemyError, ValueError) as exc:
        raise FeedUnavailableError(f"Catalog {operation} failed") from exc


def _apply_filters(stmt, filters: FeedFilters):
    if filters.media_type:
        stmt = stmt.where(Title.type == filters.media_type)
    if filters.genres:
        stmt = stmt.where(Title.genres.overlap(list(filters.genres)))
    if filters.countries:
        stmt = stmt.where(Title.countries.overlap(list(filters.countries)))
    if filters.languages:
        stmt = stmt.where(Title.languages.overlap(list(filters.languages)))
    if filters.year_min is not None:
        stmt = stmt.where(Title.year >= filters.year_min)
    if filters.year_max is not None:
        stmt = stmt.where(Title.year <= filters.year_max)
    return stmt


def build_titles_statement(
    filters: FeedFilters, *, after: Optional[str], limit: int
):
    """Filtered titles in (created_at DESC, id DESC) order, strictly after ``after``."""
    stmt = _apply_filters(select(Title), filters)
    if after:
        # An unknown cursor id yields a NULL anchor and therefore an empty page.
        anchor_row = aliased(Title, name="anchor")
        anchor = (
            select(anchor_row.created_at)
            .where(anchor_row.id == after)
            .scalar_subquery()
        )
        stmt = stmt.where(
            or_(
                Title.created_at < anchor,
                and_(Title.created_at == anchor, Title.id < after),
            )
        )
    return (
        stmt.options(selectinload(Title.trailers))
        .order_by(Title.created_at.desc(), Title.id.desc())
        .limit(limit)
    )


def build_previews_statement(collection_ids: Sequence[int], *, limit: int):
    """First ``limit`` titles of every collection, in curated order, in one query."""
    ranked = (
        select(
            CollectionItem.collection_id,
            CollectionItem.title_id,
            func.row_number()
            .over(
                partition_by=CollectionItem.collection_id,
                order_by=(CollectionItem.order_index.asc(), CollectionItem.id.asc()),
            )
            .label("preview_rank"),
        )
        .where(CollectionItem.collection_id.in_(collection_ids))
        .subquery("ranked")
    )
    return (
        select(ranked.c.collection_id, Title)
        .join(ranked, ranked.c.title_id == Title.id)
        .where(ranked.c.preview_rank <= limit)
        .options(selectinload(Title.trailers))
        .order_by(ranked.c.collection_id.asc(), ranked.c.preview_rank.asc())
    )


class SqlCatalogStore:
    """Read-only catalog access over a request-scoped SQLAlchemy session."""

    def __init__(self, db: Session):
        self._db = db

    def query_titles(
        self, filters: FeedFilters, *, after: Optional[str], limit: int
    ) -> List[Title]:
        stmt = build_titles_statement(filters, after=after, limit=limit)
        with _storage_guard("title query"):
            return list(self._db.execute(stmt).scalars().all())

    def get_title(self, title_id: str) -> Optional[Title]:
        stmt = (
            select(Title)
            .where(Title.id == title_id)
            .options(selectinload(Title.trailers))
        )
        with _storage_guard("title lookup"):
            return self._db.execute(stmt).scalars().first()

    def list_collections(self) -> List[Collection]:
        stmt = select(Collection).order_by(Collection.title.asc(), Collection.id.asc())
        with _storage_guard("collection listing"):
            return list(self._db.execute(stmt).scalars().all())

    def collection_previews(
        self, collection_ids: Sequence[int], limit: int
    ) -> Dict[int, List[Title]]:
        previews: Dict[int, List[Title]] = {cid: [] for cid in collection_ids}
        if not previews:
            return previews
        stmt = build_previews_statement(list(previews), limit=limit)
        with _storage_guard("collection items query"):
            rows = self._db.execute(stmt).all()
        for collection_id, title in rows:
            previews.setdefault(collection_id, []).append(title)
        return previews


def fetch_page(
    store: CatalogStore,
    filters: FeedFilters,
    cursor: Optional[str],
    page_size: int,
) -> CatalogPage:
    """
    Fetch one page of titles and the cursor for the next one.

    One extra row is requested to detect whether the feed continues. When it
    does, ``next_cursor`` is the id of the last title on this page, and the
    next call resumes strictly after it. No retries happen here.
    """
    page_size = max(1, page_size)
    if filters.year_range_is_empty():
        logger.debug("Inverted year range; skipping catalog query")
        return CatalogPage()
    rows: Sequence[Title] = store.query_titles(
        filters, after=cursor, limit=page_size + 1
    )
    if len(rows) > page_size:
        items = list(rows[:page_size])
        next_cursor = items[-1].id
    else:
        items = list(rows)
        next_cursor = None
    logger.debug(
        "Fetched catalog page | size=%d cursor=%s next_cursor=%s filtered=%s",
        len(items),
        cursor,
        next_cursor,
        filters.has_filters(),
    )
    return CatalogPage(items=items, next_cursor=next_cursor)
