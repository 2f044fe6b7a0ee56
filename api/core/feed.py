from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from api.config import (
    COLLECTION_PREVIEW_SIZE,
    FEED_DIVERSITY_PENALTY_WEIGHT,
    FEED_DIVERSITY_WINDOW,
    FEED_PAGE_SIZE,
    OVERVIEW_MAX_LENGTH,
)
from api.core.catalog import CatalogStore, fetch_page
from api.core.diversity import diversify_by_genre
from api.core.filters import translate
from api.core.trailers import select_trailer, trailer_payload
from api.db.models import Title
from api.schemas import CollectionOut, FeedItem, FeedPage, TrailerOut

logger = logging.getLogger(__name__)

_ELLIPSIS = "..."


class TitleNotFoundError(LookupError):
    def __init__(self, title_id: str):
        super().__init__(f"Title not found: {title_id}")
        self.title_id = title_id


def overview_short(text: Optional[str], limit: int = OVERVIEW_MAX_LENGTH) -> str:
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[: limit - len(_ELLIPSIS)] + _ELLIPSIS


def to_feed_item(title: Title) -> FeedItem:
    trailer = trailer_payload(select_trailer(list(title.trailers or [])))
    return FeedItem(
        id=title.id,
        title=title.title,
        year=title.year,
        countries=list(title.countries or []),
        genres=list(title.genres or []),
        overview_short=overview_short(title.overview),
        poster_url=title.poster_url,
        backdrop_url=title.backdrop_url,
        trailer=TrailerOut(**trailer) if trailer else None,
    )


def get_feed_page(
    store: CatalogStore,
    params: Mapping[str, Optional[str]],
    *,
    page_size: int = FEED_PAGE_SIZE,
) -> FeedPage:
    """Filter, page, diversify and render one feed page."""
    filters, cursor = translate(params)
    page = fetch_page(store, filters, cursor, page_size)
    ordered = diversify_by_genre(
        page.items, window=FEED_DIVERSITY_WINDOW, weight=FEED_DIVERSITY_PENALTY_WEIGHT
    )
    return FeedPage(
        items=[to_feed_item(title) for title in ordered],
        next_cursor=page.next_cursor,
    )


def get_title(store: CatalogStore, title_id: str) -> FeedItem:
    title = store.get_title(title_id)
    if title is None:
        raise TitleNotFoundError(title_id)
    return to_feed_item(title)


def get_collections(
    store: CatalogStore, *, preview_size: int = COLLECTION_PREVIEW_SIZE
) -> List[CollectionOut]:
    # Collections keep their curated order; no diversification here.
    collections = store.list_collections()
    previews = store.collection_previews([c.id for c in collections], preview_size)
    results: List[CollectionOut] = []
    for collection in collections:
        titles: List[Any] = previews.get(collection.id, [])
        results.append(
            CollectionOut(
                id=collection.id,
                slug=collection.slug,
                title=collection.title,
                description=collection.description,
                items=[to_feed_item(title) for title in titles[:preview_size]],
            )
        )
    logger.debug("Assembled %d collections", len(results))
    return results
