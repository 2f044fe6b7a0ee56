from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from api.core.catalog import CatalogStore, FeedUnavailableError
from api.core.feed import get_collections
from api.routes.dependencies import get_catalog_store
from api.schemas import CollectionsResponse

router = APIRouter(prefix="/v1/collections", tags=["collections"])
logger = logging.getLogger(__name__)


@router.get("", response_model=CollectionsResponse)
def collections(
    request: Request,
    store: CatalogStore = Depends(get_catalog_store),
):
    """List curated collections with a preview of their titles."""
    try:
        return {"collections": get_collections(store)}
    except FeedUnavailableError:
        logger.exception("Collections query failed | url=%s", request.url)
        raise HTTPException(status_code=500, detail="Failed to load collections.")
