import os
from dotenv import load_dotenv

load_dotenv()


def _int_from_env(name: str, default: int) -> int:
    """Read an integer override from the environment, falling back to *default*."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


FEED_PAGE_SIZE = max(1, _int_from_env("FEED_PAGE_SIZE", 20))
COLLECTION_PREVIEW_SIZE = max(1, _int_from_env("COLLECTION_PREVIEW_SIZE", 10))
# Window of recently emitted genre sets and per-overlap penalty used by the
# feed diversification pass. Tunable; 3 and 2 are the production values.
FEED_DIVERSITY_WINDOW = max(1, _int_from_env("FEED_DIVERSITY_WINDOW", 3))
FEED_DIVERSITY_PENALTY_WEIGHT = max(
    0, _int_from_env("FEED_DIVERSITY_PENALTY_WEIGHT", 2)
)
OVERVIEW_MAX_LENGTH = max(4, _int_from_env("OVERVIEW_MAX_LENGTH", 160))
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = _int_from_env("API_PORT", 8000)
