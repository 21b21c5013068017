"""앵커 좌표 계산 테스트."""

import pytest

from layerbuilder.layout import Anchor, pivot, resolve_anchor

CANVAS = (1200, 750)


@pytest.mark.parametrize("anchor, expected", [
    ("top-left", (0, 0)),
    ("top", (600, 0)),
    ("top-right", (1200, 0)),
    ("left", (0, 375)),
    ("center", (600, 375)),
    ("right", (1200, 375)),
    ("bottom-left", (0, 750)),
    ("bottom", (600, 750)),
    ("bottom-right", (1200, 750)),
])
def test_zero_size_element_lands_on_anchor_point(anchor, expected):
    assert resolve_anchor(CANVAS, (0, 0), anchor) == expected


def test_top_left_offset_is_paint_coordinate():
    assert resolve_anchor(CANVAS, (175, 175), "top-left", 10, 10) == (10, 10)


def test_right_and_bottom_offsets_point_inward():
    assert resolve_anchor(CANVAS, (100, 50), "bottom-right", 10, 20) == (1090, 680)
    assert resolve_anchor(CANVAS, (100, 50), "top-right", 10, 20) == (1090, 20)


def test_center_applies_both_offsets():
    assert resolve_anchor(CANVAS, (175, 175), "center") == (600 - 87, 375 - 87)
    assert resolve_anchor(CANVAS, (175, 175), "center", 5, -5) == (600 - 87 + 5, 375 - 87 - 5)


def test_centered_axis_ignores_offset_on_edge_anchor():
    assert pivot(CANVAS, "top", 40, 12) == (600, 12)
    assert pivot(CANVAS, "left", 40, 12) == (40, 375)


def test_text_pivot_at_canvas_center():
    assert pivot(CANVAS, Anchor.CENTER) == (600, 375)


@pytest.mark.parametrize("alias, anchor", [
    ("top-center", Anchor.TOP),
    ("CENTER-TOP", Anchor.TOP),
    ("middle", Anchor.CENTER),
    ("right-bottom", Anchor.BOTTOM_RIGHT),
    ("left-middle", Anchor.LEFT),
    (" bottom-center ", Anchor.BOTTOM),
])
def test_anchor_aliases(alias, anchor):
    assert Anchor.parse(alias) is anchor


def test_unknown_anchor_rejected():
    with pytest.raises(ValueError):
        Anchor.parse("upper-left")
