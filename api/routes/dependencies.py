from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from api.core.catalog import SqlCatalogStore
from api.db.session import get_db


def get_catalog_store(db: Session = Depends(get_db)) -> SqlCatalogStore:
    return SqlCatalogStore(db)
