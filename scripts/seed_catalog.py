from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import List, Sequence, TypeVar

from sqlalchemy import delete
from sqlalchemy.orm import Session

from api.db.models import Collection, CollectionItem, Title, Trailer
from api.db.session import get_sessionmaker

logger = logging.getLogger(__name__)
if logger.level == logging.NOTSET:
    logger.setLevel(logging.INFO)
if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    logger.addHandler(_handler)
    logger.propagate = False

T = TypeVar("T")

TITLE_COUNT = 200
ITEMS_PER_COLLECTION = 20

COLLECTIONS = [
    ("cult-midnight", "Cult / Midnight", "Rare late-night picks."),
    ("noir", "Noir", "Shadows, crime and mystery."),
    ("grindhouse", "Grindhouse / Exploitation", "B-movies and excess."),
    ("thriller-mystery", "Mystery thrillers", "Twists and clues."),
    ("retro-80-90", "80s/90s vibes", "Retro local flavour."),
    ("hidden-gems", "Hidden gems", "Little-seen treasures."),
]
GENRES = [
    "thriller",
    "drama",
    "horror",
    "action",
    "comedy",
    "mystery",
    "sci-fi",
    "crime",
    "fantasy",
    "romance",
]
COUNTRIES = ["ES", "US", "FR", "IT", "MX", "DE", "JP", "KR", "UK", "AR"]
LANGUAGES = ["es", "en", "fr", "it", "pt", "de", "ja", "ko"]
TRAILER_KINDS = ["teaser", "trailer", "clip"]


def _pick(values: Sequence[T], index: int) -> T:
    return values[index % len(values)]


def build_titles(
    count: int = TITLE_COUNT, *, start: datetime | None = None
) -> List[Title]:
    """Sample titles with strictly increasing creation timestamps."""
    start = start or datetime.now(UTC) - timedelta(minutes=count)
    titles: List[Title] = []
    for i in range(1, count + 1):
        language = _pick(LANGUAGES, i)
        title = Title(
            provider="tmdb",
            provider_id=f"tmdb-{1000 + i}",
            type="movie" if i % 2 == 0 else "tv",
            title=f"Sample Title {i}",
            original_title=f"Original Title {i}",
            year=1980 + (i % 44),
            runtime_minutes=80 + (i % 60),
            overview="Seeded overview for local development.",
            poster_url=f"https://image.tmdb.org/t/p/w500/sample-{i}.jpg",
            backdrop_url=f"https://image.tmdb.org/t/p/w1280/sample-{i}.jpg",
            countries=[_pick(COUNTRIES, i)],
            languages=[language],
            genres=[_pick(GENRES, i), _pick(GENRES, i + 3)],
            created_at=start + timedelta(seconds=i),
        )
        title.trailers = [
            Trailer(
                source="youtube",
                source_video_id=f"seed{i:08d}",
                kind=_pick(TRAILER_KINDS, i),
                language=language,
                duration_seconds=90 + (i % 120),
                is_official=i % 3 == 0,
            )
        ]
        titles.append(title)
    return titles


def seed(db: Session) -> None:
    for model in (CollectionItem, Collection, Trailer, Title):
        db.execute(delete(model))

    collections = [
        Collection(slug=slug, title=title, description=description)
        for slug, title, description in COLLECTIONS
    ]
    titles = build_titles(TITLE_COUNT)
    db.add_all(collections)
    db.add_all(titles)
    db.flush()

    for c, collection in enumerate(collections):
        for i in range(ITEMS_PER_COLLECTION):
            title = titles[(c * 30 + i) % len(titles)]
            db.add(
                CollectionItem(
                    collection_id=collection.id, title_id=title.id, order_index=i + 1
                )
            )
    db.commit()
    logger.info(
        "Seed completed: %d titles + %d collections", len(titles), len(collections)
    )


def run() -> None:
    SessionLocal = get_sessionmaker()
    db = SessionLocal()
    try:
        seed(db)
    except Exception:
        db.rollback()
        logger.exception("Seeding the catalog failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    run()
