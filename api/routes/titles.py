from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from api.core.catalog import CatalogStore, FeedUnavailableError
from api.core.feed import TitleNotFoundError, get_title
from api.routes.dependencies import get_catalog_store
from api.schemas import TitleResponse

router = APIRouter(prefix="/v1/titles", tags=["titles"])
logger = logging.getLogger(__name__)


@router.get("/{title_id}", response_model=TitleResponse)
def title_detail(
    title_id: str,
    request: Request,
    store: CatalogStore = Depends(get_catalog_store),
):
    """Resolve a single title with its representative trailer."""
    title_id = title_id.strip()
    if not title_id:
        raise HTTPException(status_code=400, detail="Missing title_id")
    try:
        item = get_title(store, title_id)
    except TitleNotFoundError:
        raise HTTPException(status_code=404, detail="Title not found")
    except FeedUnavailableError:
        logger.exception("Title lookup failed | url=%s", request.url)
        raise HTTPException(status_code=500, detail="Failed to load title.")
    return {"item": item}
