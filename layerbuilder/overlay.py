"""오버레이 이미지 가공 모듈 — 리사이즈, 원형 마스크, 테두리.

가공 순서는 고정이다: 리사이즈 → (rounded) 원형 마스크 → (border) 테두리.
"""

import logging

from PIL import Image, ImageChops, ImageDraw

from .directives import OverlayDirective
from .sources import load_image

logger = logging.getLogger(__name__)


def fit_size(src_size: tuple[int, int], box: tuple[int, int]) -> tuple[int, int]:
    """비율을 유지하며 box 안에 들어가는 크기를 반환한다. 원본보다 키우지 않는다."""
    sw, sh = src_size
    bw, bh = box
    scale = min(bw / sw, bh / sh, 1.0)
    return max(1, round(sw * scale)), max(1, round(sh * scale))


def resize_overlay(img: Image.Image, width: int, height: int) -> Image.Image:
    """오버레이를 요청 크기 안으로 축소한다 (확대 없음)."""
    size = fit_size(img.size, (width, height))
    if size == img.size:
        return img
    return img.resize(size, Image.Resampling.LANCZOS)


def _circle_box(width: int, height: int) -> tuple[float, float, float, float]:
    """지름 = width, 래스터 중앙에 놓인 원의 외접 사각형."""
    cx, cy = width / 2, height / 2
    r = width / 2
    return cx - r, cy - r, cx + r - 1, cy + r - 1


def round_image(img: Image.Image) -> Image.Image:
    """원형 알파 마스크를 적용한다.

    마스크 원의 지름은 래스터의 가로 길이를 사용한다. 세로가 더 짧으면
    원이 위아래로 잘리고, 더 길면 위아래 여백이 투명해진다.
    """
    img = img.convert("RGBA")
    mask = Image.new("L", img.size, 0)
    ImageDraw.Draw(mask).ellipse(_circle_box(img.width, img.height), fill=255)
    alpha = ImageChops.multiply(img.getchannel("A"), mask)
    img.putalpha(alpha)
    return img


def add_border(img: Image.Image, width: int, color: str) -> Image.Image:
    """원형 테두리를 두른다. 결과 크기는 입력 래스터와 같다."""
    src_w, src_h = img.size
    inner = resize_overlay(img, src_w - width, src_h - width)

    border = Image.new("RGBA", (src_w, src_h), (0, 0, 0, 0))
    ImageDraw.Draw(border).ellipse(_circle_box(src_w, src_h), outline=color, width=width)

    # 축소된 이미지를 가운데에 합성
    x = src_w // 2 - inner.width // 2
    y = src_h // 2 - inner.height // 2
    border.alpha_composite(inner, (x, y))
    return border


def materialize(directive: OverlayDirective, timeout: float = 10) -> Image.Image:
    """오버레이 지시를 캔버스에 붙일 최종 래스터로 만든다."""
    img = load_image(directive.source, timeout)
    src_size = img.size
    img = resize_overlay(img, directive.width, directive.height)

    if directive.rounded:
        img = round_image(img)

    if directive.border is not None:
        img = add_border(img, directive.border.width, directive.border.color)

    logger.debug("오버레이 가공: %dx%d → %dx%d (rounded=%s, border=%s)",
                 src_size[0], src_size[1], img.width, img.height,
                 directive.rounded, directive.border)
    return img
