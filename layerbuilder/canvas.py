"""Pillow 캔버스 관리 모듈."""

from PIL import Image

# 기본 캔버스 크기
WIDTH = 1200
HEIGHT = 750


class Canvas:
    """고정 크기 RGBA 캔버스. 배경을 불러온 뒤에는 크기가 바뀌지 않는다."""

    def __init__(self, size: tuple[int, int] = (WIDTH, HEIGHT),
                 color: tuple = (0, 0, 0, 0)):
        self._image = Image.new("RGBA", size, color)

    @classmethod
    def from_background(cls, background: Image.Image,
                        size: tuple[int, int] = (WIDTH, HEIGHT)) -> "Canvas":
        """배경 이미지를 캔버스 크기로 리사이즈하여 캔버스를 만든다 (확대 허용)."""
        canvas = cls(size)
        bg = background.convert("RGBA")
        if bg.size != size:
            bg = bg.resize(size, Image.Resampling.LANCZOS)
        canvas.paste(bg)
        return canvas

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def paste(self, layer: Image.Image, position: tuple = (0, 0)) -> None:
        """레이어를 캔버스 위에 합성한다 (알파 블렌딩)."""
        if layer.mode != "RGBA":
            layer = layer.convert("RGBA")
        self._image = Image.alpha_composite(self._image, _place(layer, self.size, position))


def _place(layer: Image.Image, size: tuple[int, int], position: tuple) -> Image.Image:
    """레이어를 캔버스 크기에 맞춰 지정 위치에 배치한다. 캔버스 밖은 잘린다."""
    if layer.size == size and tuple(position) == (0, 0):
        return layer
    result = Image.new("RGBA", size, (0, 0, 0, 0))
    result.paste(layer, tuple(position))
    return result
