"""텍스트 렌더링 모듈 — 기준점 기준 가운데/위 정렬, 시계 방향 회전."""

import logging
import math
import os

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

# 폰트 캐시
_font_cache: dict[tuple[str, int], ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}


def get_font(size: int, font_path: str | None = None):
    """폰트를 로드한다 (캐싱). 사용자 폰트가 없으면 Pillow 기본 폰트."""
    path = str(font_path) if font_path else ""
    key = (path, size)
    if key not in _font_cache:
        if path and os.path.exists(path):
            _font_cache[key] = ImageFont.truetype(path, size)
        else:
            if path:
                logger.warning("폰트 파일 없음, 기본 폰트 사용: %s", path)
            _font_cache[key] = ImageFont.load_default(size)
    return _font_cache[key]


def render_text(
    text: str,
    font_size: int = 32,
    color: str | tuple = "#fdf6e3",
    angle: float = 0,
    font_path: str | None = None,
) -> tuple[Image.Image, int]:
    """기준점이 정중앙에 오는 정사각형 투명 이미지에 텍스트를 그린다.

    반환: (이미지, 반지름). 기준점은 이미지 안의 (반지름, 반지름).
    어떤 각도로 돌려도 글자가 잘리지 않도록 한 변은 기준점에서
    가장 먼 글자 모서리까지 거리의 두 배다.
    """
    font = get_font(font_size, font_path)
    bbox = ImageDraw.Draw(Image.new("RGBA", (1, 1))).textbbox((0, 0), text, font=font)
    tw = bbox[2] - bbox[0]
    th = bbox[3] - bbox[1]
    radius = math.ceil(math.hypot(tw / 2, th)) + 2

    img = Image.new("RGBA", (radius * 2, radius * 2), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.text((radius - (bbox[0] + bbox[2]) / 2, radius - bbox[1]), text, font=font, fill=color)

    if angle % 360:
        # Pillow rotate는 반시계 방향
        img = img.rotate(-angle, resample=Image.Resampling.BICUBIC, center=(radius, radius))
    return img, radius


def render_text_layer(
    size: tuple[int, int],
    text: str,
    position: tuple[int, int],
    font_size: int = 32,
    color: str | tuple = "#fdf6e3",
    angle: float = 0,
    font_path: str | None = None,
) -> Image.Image:
    """캔버스 크기의 투명 레이어에 텍스트를 그려 반환한다.

    텍스트는 position을 기준으로 가로 가운데, 세로 위쪽 정렬이다.
    angle은 시계 방향 각도(도)이며 position을 중심으로 회전한다.
    """
    img, radius = render_text(text, font_size, color, angle, font_path)
    px, py = position
    layer = Image.new("RGBA", size, (0, 0, 0, 0))
    layer.paste(img, (px - radius, py - radius))
    return layer
