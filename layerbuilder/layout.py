"""화면 레이아웃 모듈 — 앵커 이름을 캔버스 좌표로 계산한다."""

from enum import Enum


class Anchor(Enum):
    """캔버스 위의 9개 기준점."""
    TOP_LEFT = "top-left"
    TOP = "top"
    TOP_RIGHT = "top-right"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM = "bottom"
    BOTTOM_RIGHT = "bottom-right"

    @classmethod
    def parse(cls, value: "Anchor | str") -> "Anchor":
        """앵커 이름(별칭 포함, 대소문자 무시)을 Anchor로 변환한다."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValueError(f"알 수 없는 앵커: {value!r}") from None


_ALIASES = {
    "top-left": Anchor.TOP_LEFT,
    "left-top": Anchor.TOP_LEFT,
    "top": Anchor.TOP,
    "top-center": Anchor.TOP,
    "top-middle": Anchor.TOP,
    "center-top": Anchor.TOP,
    "middle-top": Anchor.TOP,
    "top-right": Anchor.TOP_RIGHT,
    "right-top": Anchor.TOP_RIGHT,
    "left": Anchor.LEFT,
    "left-center": Anchor.LEFT,
    "left-middle": Anchor.LEFT,
    "center-left": Anchor.LEFT,
    "middle-left": Anchor.LEFT,
    "center": Anchor.CENTER,
    "middle": Anchor.CENTER,
    "center-center": Anchor.CENTER,
    "middle-middle": Anchor.CENTER,
    "right": Anchor.RIGHT,
    "right-center": Anchor.RIGHT,
    "right-middle": Anchor.RIGHT,
    "center-right": Anchor.RIGHT,
    "middle-right": Anchor.RIGHT,
    "bottom-left": Anchor.BOTTOM_LEFT,
    "left-bottom": Anchor.BOTTOM_LEFT,
    "bottom": Anchor.BOTTOM,
    "bottom-center": Anchor.BOTTOM,
    "bottom-middle": Anchor.BOTTOM,
    "center-bottom": Anchor.BOTTOM,
    "middle-bottom": Anchor.BOTTOM,
    "bottom-right": Anchor.BOTTOM_RIGHT,
    "right-bottom": Anchor.BOTTOM_RIGHT,
}


def pivot(size: tuple[int, int], anchor: Anchor | str,
          offset_x: int = 0, offset_y: int = 0) -> tuple[int, int]:
    """크기 (w, h)인 상자에서 앵커 기준점 좌표를 반환한다.

    오른쪽/아래 앵커의 오프셋은 안쪽(왼쪽/위)으로 적용된다.
    가장자리 앵커에서 가운데 정렬되는 축의 오프셋은 무시한다.
    """
    anchor = Anchor.parse(anchor)
    w, h = size

    # 가로
    if anchor in (Anchor.TOP_LEFT, Anchor.LEFT, Anchor.BOTTOM_LEFT):
        x = offset_x
    elif anchor in (Anchor.TOP_RIGHT, Anchor.RIGHT, Anchor.BOTTOM_RIGHT):
        x = w - offset_x
    elif anchor is Anchor.CENTER:
        x = w // 2 + offset_x
    else:
        x = w // 2

    # 세로
    if anchor in (Anchor.TOP_LEFT, Anchor.TOP, Anchor.TOP_RIGHT):
        y = offset_y
    elif anchor in (Anchor.BOTTOM_LEFT, Anchor.BOTTOM, Anchor.BOTTOM_RIGHT):
        y = h - offset_y
    elif anchor is Anchor.CENTER:
        y = h // 2 + offset_y
    else:
        y = h // 2

    return x, y


def resolve_anchor(canvas_size: tuple[int, int], element_size: tuple[int, int],
                   anchor: Anchor | str, offset_x: int = 0,
                   offset_y: int = 0) -> tuple[int, int]:
    """요소를 캔버스에 붙일 좌상단 좌표 (x, y)를 계산한다."""
    cx, cy = pivot(canvas_size, anchor, offset_x, offset_y)
    ex, ey = pivot(element_size, anchor)
    return cx - ex, cy - ey
