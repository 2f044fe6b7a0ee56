import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import CORS_ALLOW_ORIGINS
from api.db.session import init_engine, get_sessionmaker, get_db
from api.routes.health import router as health_router
from api.routes.feed import router as feed_router
from api.routes.titles import router as titles_router
from api.routes.collections import router as collections_router
from api.routes.dependencies import get_catalog_store

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logging.getLogger("api.core.diversity").setLevel(logging.INFO)
# Reduce noise from other modules
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    _initialise_application(app)
    yield


app = FastAPI(title="Trailer Feed", version="0.1.0", lifespan=app_lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routes
app.include_router(health_router, prefix="")
app.include_router(feed_router)
app.include_router(titles_router)
app.include_router(collections_router)


def _initialise_application(app: FastAPI) -> None:
    # Tests that override the storage dependencies never touch a real database.
    overrides = app.dependency_overrides
    if get_db in overrides or get_catalog_store in overrides:
        return
    init_engine()
    get_sessionmaker()


def on_startup() -> None:
    """Startup hook for process managers that do not run the lifespan."""
    _initialise_application(app)
