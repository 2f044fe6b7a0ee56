from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

_KIND_PRIORITY: dict[str, int] = {
    "trailer": 3,
    "teaser": 2,
    "clip": 1,
}


def trailer_priority(kind: Optional[str]) -> int:
    """Rank a trailer kind; unknown kinds rank 0 but remain eligible."""
    if not kind:
        return 0
    return _KIND_PRIORITY.get(kind, 0)


def _selection_key(trailer: Any) -> tuple[int, int]:
    official = bool(getattr(trailer, "is_official", False))
    return (0 if official else 1, -trailer_priority(getattr(trailer, "kind", None)))


def select_trailer(candidates: Sequence[Any]) -> Any | None:
    """
    Pick the representative trailer for a title.

    Official assets win over unofficial ones, then trailer > teaser > clip >
    anything else. Remaining ties keep the input order, so callers passing the
    same (official, kind) pairs in a different order may get a different pick.
    """
    if not candidates:
        return None
    # min() returns the first minimal element, matching a stable sort's head.
    return min(candidates, key=_selection_key)


def trailer_payload(trailer: Any | None) -> Dict[str, Any] | None:
    if trailer is None:
        return None
    return {
        "source": trailer.source,
        "video_id": trailer.source_video_id,
        "kind": trailer.kind,
        "is_official": bool(trailer.is_official),
    }
