"""오버레이/텍스트 지시 데이터 모듈."""

from dataclasses import dataclass
from typing import Any

from .layout import Anchor


@dataclass(frozen=True)
class Border:
    """원형 테두리 (두께 px, 색상)."""
    width: int
    color: str

    @classmethod
    def coerce(cls, value) -> "Border | None":
        """Border, (width, color) 쌍, None을 Border 또는 None으로 변환한다.

        원소가 2개 미만인 시퀀스는 테두리 없음으로 취급한다.
        """
        if value is None or isinstance(value, cls):
            return value
        items = list(value)
        if len(items) < 2:
            return None
        return cls(int(items[0]), str(items[1]))


@dataclass(frozen=True, eq=False)
class OverlayDirective:
    """배경 위에 붙일 이미지 한 장."""
    source: Any
    width: int = 175
    height: int = 175
    rounded: bool = True
    anchor: Anchor = Anchor.CENTER
    offset_x: int = 0
    offset_y: int = 0
    border: Border | None = None


@dataclass(frozen=True)
class TextDirective:
    """배경 위에 그릴 텍스트 한 줄."""
    text: str
    anchor: Anchor = Anchor.TOP
    offset_x: int = 0
    offset_y: int = 0
    font_size: int = 32
    color: str = "#fdf6e3"
    angle: float = 0
