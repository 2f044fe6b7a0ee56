from __future__ import annotations

from types import SimpleNamespace

from api.core.trailers import select_trailer, trailer_payload, trailer_priority
from tests.helpers import make_trailer


def test_trailer_priority_ranks_known_kinds():
    assert trailer_priority("trailer") == 3
    assert trailer_priority("teaser") == 2
    assert trailer_priority("clip") == 1
    assert trailer_priority("featurette") == 0
    assert trailer_priority(None) == 0


def test_select_trailer_returns_none_for_empty_input():
    assert select_trailer([]) is None


def test_select_trailer_prefers_official_over_better_kind():
    unofficial_trailer = make_trailer("trailer", is_official=False)
    official_clip = make_trailer("clip", is_official=True)

    assert select_trailer([unofficial_trailer, official_clip]) is official_clip


def test_select_trailer_prefers_trailer_kind_among_officials():
    teaser = make_trailer("teaser", is_official=True)
    clip = make_trailer("clip", is_official=True)
    trailer = make_trailer("trailer", is_official=True)

    assert select_trailer([teaser, clip, trailer]) is trailer


def test_select_trailer_keeps_input_order_on_ties():
    first = make_trailer("trailer", is_official=True, video_id="first")
    second = make_trailer("trailer", is_official=True, video_id="second")
    teaser = make_trailer("teaser", is_official=True, video_id="teaser")

    assert select_trailer([teaser, first, second]) is first
    assert select_trailer([teaser, second, first]) is second


def test_select_trailer_falls_back_to_unknown_kind():
    behind = make_trailer("behind_the_scenes", is_official=False)

    assert select_trailer([behind]) is behind


def test_select_trailer_unknown_kind_sorts_after_clip():
    featurette = make_trailer("featurette", is_official=False)
    clip = make_trailer("clip", is_official=False)

    assert select_trailer([featurette, clip]) is clip


def test_select_trailer_accepts_plain_objects():
    a = SimpleNamespace(kind="teaser", is_official=False)
    b = SimpleNamespace(kind="teaser", is_official=True)

    assert select_trailer((a, b)) is b


def test_trailer_payload_shapes_response():
    trailer = make_trailer("teaser", is_official=True, video_id="abc123")

    assert trailer_payload(trailer) == {
        "source": "youtube",
        "video_id": "abc123",
        "kind": "teaser",
        "is_official": True,
    }
    assert trailer_payload(None) is None
