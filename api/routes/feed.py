from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from api.core.catalog import CatalogStore, FeedUnavailableError
from api.core.feed import get_feed_page
from api.routes.dependencies import get_catalog_store
from api.schemas import FeedPage

router = APIRouter(prefix="/v1/feed", tags=["feed"])
logger = logging.getLogger(__name__)


@router.get("", response_model=FeedPage)
def feed(
    request: Request,
    media_type: str | None = Query(
        None, alias="type", description="'movie' or 'tv'; other values are ignored."
    ),
    genres: str | None = Query(None, description="Comma-separated genres (any-of)."),
    countries: str | None = Query(
        None, description="Comma-separated country codes (any-of)."
    ),
    lang: str | None = Query(
        None, description="Comma-separated language codes (any-of)."
    ),
    year_min: str | None = Query(None, description="Lowest release year, inclusive."),
    year_max: str | None = Query(None, description="Highest release year, inclusive."),
    cursor: str | None = Query(
        None, description="Opaque cursor returned by a previous request."
    ),
    store: CatalogStore = Depends(get_catalog_store),
):
    """Return one diversified page of the title feed."""
    params = {
        "type": media_type,
        "genres": genres,
        "countries": countries,
        "lang": lang,
        "year_min": year_min,
        "year_max": year_max,
        "cursor": cursor,
    }
    try:
        return get_feed_page(store, params)
    except FeedUnavailableError:
        logger.exception("Feed query failed | url=%s", request.url)
        raise HTTPException(status_code=500, detail="Failed to load feed.")
