from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque, FrozenSet, Iterable, List, Sequence, TypeVar

from api.config import FEED_DIVERSITY_PENALTY_WEIGHT, FEED_DIVERSITY_WINDOW

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _title_genres(item: Any) -> Iterable[str]:
    return getattr(item, "genres", None) or ()


def genre_penalty(
    candidate: FrozenSet[str],
    history: Iterable[FrozenSet[str]],
    weight: int = FEED_DIVERSITY_PENALTY_WEIGHT,
) -> int:
    """Weighted count of candidate genres present in each history slot."""
    return weight * sum(len(candidate & slot) for slot in history)


def diversify_by_genre(
    items: Sequence[T],
    *,
    window: int = FEED_DIVERSITY_WINDOW,
    weight: int = FEED_DIVERSITY_PENALTY_WEIGHT,
    genres_of: Callable[[T], Iterable[str]] = _title_genres,
) -> List[T]:
    """
    Reorder a fetched page so same-genre titles do not bunch up.

    Greedy and page-local: each slot takes the remaining candidate with the
    lowest overlap against the genre sets of the last ``window`` picks. Ties go
    to the earliest candidate, and a zero-penalty candidate is taken as soon as
    the scan reaches it. The result is a permutation of ``items``.
    """
    if not items:
        return []

    remaining: List[tuple[T, FrozenSet[str]]] = [
        (item, frozenset(genres_of(item))) for item in items
    ]
    history: Deque[FrozenSet[str]] = deque(maxlen=max(1, window))
    ordered: List[T] = []
    total_penalty = 0

    while remaining:
        best_idx = 0
        best_penalty: int | None = None
        for idx, (_, genres) in enumerate(remaining):
            penalty = genre_penalty(genres, history, weight)
            if best_penalty is None or penalty < best_penalty:
                best_idx = idx
                best_penalty = penalty
            if penalty == 0:
                break

        item, genres = remaining.pop(best_idx)
        ordered.append(item)
        history.append(genres)
        total_penalty += best_penalty or 0

    logger.debug(
        "Diversified page | size=%d window=%d weight=%d total_penalty=%d",
        len(ordered),
        window,
        weight,
        total_penalty,
    )
    return ordered
