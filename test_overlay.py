"""오버레이 가공 테스트 — 리사이즈, 원형 마스크, 테두리."""

import pytest
from PIL import Image

from conftest import AVATAR_COLOR
from layerbuilder.directives import Border, OverlayDirective
from layerbuilder.errors import DecodeError
from layerbuilder.overlay import add_border, fit_size, materialize, round_image


def test_fit_size_keeps_ratio_and_never_upscales():
    assert fit_size((400, 200), (175, 175)) == (175, 88)
    assert fit_size((100, 80), (175, 175)) == (100, 80)
    assert fit_size((300, 300), (175, 175)) == (175, 175)


def test_materialize_does_not_upscale_small_source():
    small = Image.new("RGBA", (50, 40), AVATAR_COLOR)
    img = materialize(OverlayDirective(small, width=500, height=500, rounded=False))
    assert img.size == (50, 40)


def test_materialize_resizes_to_target(avatar):
    img = materialize(OverlayDirective(avatar, rounded=False))
    assert img.size == (175, 175)
    assert img.getpixel((0, 0)) == AVATAR_COLOR


def test_rounded_corners_transparent_and_interior_kept(avatar):
    img = materialize(OverlayDirective(avatar))
    w, h = img.size
    for corner in [(0, 0), (w - 1, 0), (0, h - 1), (w - 1, h - 1)]:
        assert img.getpixel(corner)[3] == 0
    assert img.getpixel((w // 2, h // 2)) == AVATAR_COLOR
    assert img.getpixel((w // 2, 5)) == AVATAR_COLOR


def test_round_uses_width_as_diameter():
    wide = round_image(Image.new("RGBA", (200, 100), AVATAR_COLOR))
    # 지름 200인 원이 세로 100을 넘으므로 위/아래 가운데는 불투명
    assert wide.getpixel((100, 0))[3] == 255
    assert wide.getpixel((100, 99))[3] == 255
    assert wide.getpixel((0, 0))[3] == 0
    assert wide.getpixel((199, 99))[3] == 0


def test_round_does_not_modify_source(avatar):
    round_image(avatar.copy())
    materialize(OverlayDirective(avatar))
    assert avatar.getpixel((0, 0)) == AVATAR_COLOR


def test_border_keeps_outer_size_and_draws_ring(avatar):
    rounded = round_image(avatar.resize((175, 175)))
    img = add_border(rounded, 5, "#00ff00")
    assert img.size == (175, 175)
    assert img.getpixel((87, 1)) == (0, 255, 0, 255)
    assert img.getpixel((0, 0))[3] == 0
    assert img.getpixel((87, 87)) == AVATAR_COLOR


def test_materialize_with_border(avatar):
    directive = OverlayDirective(avatar, border=Border(4, "#ffffff"))
    img = materialize(directive)
    assert img.size == (175, 175)
    assert img.getpixel((87, 1)) == (255, 255, 255, 255)


def test_materialize_bad_source_raises():
    with pytest.raises(DecodeError):
        materialize(OverlayDirective(b"not an image"))


@pytest.mark.parametrize("value, expected", [
    (None, None),
    ((3, "#fff"), Border(3, "#fff")),
    ([2, "red", "extra"], Border(2, "red")),
    ([2], None),
])
def test_border_coerce(value, expected):
    assert Border.coerce(value) == expected
