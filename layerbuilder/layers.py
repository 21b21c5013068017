"""레이어 합성 모듈 — 배경 + 이미지 오버레이 + 텍스트."""

import logging
from collections.abc import Iterable
from pathlib import Path

from PIL import Image

from .background import BackgroundLibrary
from .canvas import Canvas
from .config import LayerConfig, load_config
from .directives import Border, OverlayDirective, TextDirective
from .layout import Anchor, pivot, resolve_anchor
from .output import decode, encode, pillow_format, random_filename
from .overlay import materialize
from .scratch import ScratchSpace
from .sources import snapshot_source
from .text import render_text_layer

logger = logging.getLogger(__name__)


def render(
    config: LayerConfig,
    background: str,
    overlays: Iterable[OverlayDirective] = (),
    texts: Iterable[TextDirective] = (),
) -> Image.Image:
    """지시 목록을 배경 위에 순서대로 합성하여 RGBA 이미지를 반환한다.

    1) 배경 경로 확인 (없으면 BackgroundNotFound, 래스터 작업 전)
    2) 오버레이 가공 후 임시 파일에 저장
    3) 배경을 캔버스 크기로 리사이즈하고 오버레이를 등록 순서대로 합성
    4) 텍스트를 등록 순서대로 합성

    임시 파일은 성공/실패와 관계없이 삭제된다.
    """
    library = BackgroundLibrary(config.background_dir)
    library.resolve(background)

    with ScratchSpace(config.temp_dir) as scratch:
        stored = []
        for directive in overlays:
            img = materialize(directive, config.fetch_timeout)
            stored.append((directive, scratch.store(img)))

        canvas = Canvas.from_background(library.load(background), config.canvas_size)

        for directive, path in stored:
            layer = scratch.load(path)
            position = resolve_anchor(canvas.size, layer.size, directive.anchor,
                                      directive.offset_x, directive.offset_y)
            logger.debug("오버레이 배치: %s %s → %s", directive.anchor.value, layer.size, position)
            canvas.paste(layer, position)

    for directive in texts:
        position = pivot(canvas.size, directive.anchor, directive.offset_x, directive.offset_y)
        layer = render_text_layer(
            canvas.size,
            directive.text,
            position,
            font_size=directive.font_size,
            color=directive.color,
            angle=directive.angle,
            font_path=config.custom_font,
        )
        canvas.paste(layer)

    return canvas.image


class LayerCompositor:
    """배경 이미지 위에 이미지와 텍스트를 쌓아 한 장의 이미지를 만든다.

    설정 메서드와 add_* 메서드는 모두 self를 반환하므로 체이닝할 수 있다::

        filename = (
            LayerCompositor.make()
            .set_background("sunset.png")
            .add_overlay("avatar.jpg", anchor="top-left", offset_x=10, offset_y=10)
            .add_text("Hello", anchor="center")
            .generate()
            .save_to_file()
        )
    """

    def __init__(
        self,
        config: LayerConfig | None = None,
        *,
        bg_dir_path: str | None = None,
        output_path: str | None = None,
        temp_path: str | None = None,
    ):
        self._config = config or load_config()
        if bg_dir_path:
            self.set_bg_dir_path(bg_dir_path)
        if output_path:
            self.set_output_path(output_path)
        if temp_path:
            self.set_temp_path(temp_path)

        self._background_name = ""
        self._overlays: list[OverlayDirective] = []
        self._texts: list[TextDirective] = []
        self._result: Image.Image | None = None

    @classmethod
    def make(cls, config: LayerConfig | None = None, **kwargs) -> "LayerCompositor":
        """기본 설정으로 새 인스턴스를 만든다."""
        return cls(config, **kwargs)

    @property
    def config(self) -> LayerConfig:
        return self._config

    @property
    def overlays(self) -> tuple[OverlayDirective, ...]:
        return tuple(self._overlays)

    @property
    def texts(self) -> tuple[TextDirective, ...]:
        return tuple(self._texts)

    @property
    def image(self) -> Image.Image | None:
        """마지막 generate() 결과. 아직 생성 전이거나 변경 후라면 None."""
        return self._result

    def _configure(self, **changes) -> "LayerCompositor":
        self._config = self._config.replace(**changes)
        self._result = None
        return self

    # --- 설정 ---

    def set_bg_dir_path(self, bg_dir_path: str) -> "LayerCompositor":
        """배경 이미지를 찾을 디렉토리."""
        return self._configure(background_dir=str(bg_dir_path))

    def set_output_path(self, output_path: str) -> "LayerCompositor":
        """결과 파일을 저장할 디렉토리."""
        return self._configure(output_dir=str(output_path))

    def set_temp_path(self, temp_path: str) -> "LayerCompositor":
        """가공 중인 오버레이를 임시 저장할 디렉토리. 생성 후 정리된다."""
        return self._configure(temp_dir=str(temp_path))

    def resize_background_width(self, width: int) -> "LayerCompositor":
        return self._configure(canvas_width=int(width))

    def resize_background_height(self, height: int) -> "LayerCompositor":
        return self._configure(canvas_height=int(height))

    def set_custom_font(self, font_path: str) -> "LayerCompositor":
        return self._configure(custom_font=str(font_path))

    def set_output_format(self, fmt: str) -> "LayerCompositor":
        pillow_format(fmt)
        return self._configure(output_format=fmt.lower().lstrip("."))

    def set_background(self, background: str) -> "LayerCompositor":
        """배경 디렉토리 안의 파일 이름을 배경으로 지정한다."""
        self._background_name = background
        self._result = None
        return self

    def get_backgrounds(self) -> list[dict[str, str]]:
        """배경 디렉토리의 사용 가능한 배경 목록."""
        return BackgroundLibrary(self._config.background_dir).list_backgrounds()

    # --- 지시 등록 ---

    def add_overlay(
        self,
        source,
        width: int = 175,
        height: int = 175,
        rounded: bool = True,
        anchor: Anchor | str = "center",
        offset_x: int = 0,
        offset_y: int = 0,
        border=None,
    ) -> "LayerCompositor":
        """배경 위에 이미지를 추가한다. 여러 번 호출할 수 있다.

        source: 파일 경로, URL, 이미지 바이트, data-URL, base64 문자열,
        PIL 이미지, 파일 객체. 디코딩은 generate() 시점에 이루어진다.
        border: Border 또는 (두께, 색상).
        """
        self._overlays.append(OverlayDirective(
            source=snapshot_source(source),
            width=width,
            height=height,
            rounded=rounded,
            anchor=Anchor.parse(anchor),
            offset_x=offset_x,
            offset_y=offset_y,
            border=Border.coerce(border),
        ))
        self._result = None
        return self

    add_image = add_overlay

    def add_text(
        self,
        text: str,
        anchor: Anchor | str = "top-center",
        offset_x: int = 0,
        offset_y: int = 0,
        font_size: int = 32,
        color: str = "#fdf6e3",
        angle: float = 0,
    ) -> "LayerCompositor":
        """배경 위에 텍스트를 추가한다. 여러 번 호출할 수 있다."""
        self._texts.append(TextDirective(
            text=text,
            anchor=Anchor.parse(anchor),
            offset_x=offset_x,
            offset_y=offset_y,
            font_size=font_size,
            color=color,
            angle=angle,
        ))
        self._result = None
        return self

    # --- 생성/출력 ---

    def generate(self) -> "LayerCompositor":
        """현재 지시 목록으로 이미지를 생성한다."""
        overlays = tuple(self._overlays)
        texts = tuple(self._texts)
        self._result = render(self._config, self._background_name, overlays, texts)
        logger.info("이미지 생성: 배경=%s, 오버레이 %d개, 텍스트 %d개 (%dx%d)",
                    self._background_name, len(overlays), len(texts),
                    self._result.width, self._result.height)
        return self

    def get_raw_stream(self) -> bytes:
        """결과 이미지를 출력 형식으로 인코딩한 바이트열."""
        if self._result is None:
            self.generate()
        return encode(self._result, self._config.output_format)

    def get_output_stream(self) -> Image.Image:
        """인코딩된 결과를 다시 디코딩한 이미지."""
        return decode(self.get_raw_stream())

    def save_to_file(self, filename: str | None = None) -> str:
        """결과를 출력 디렉토리에 저장하고 파일 이름을 반환한다.

        filename이 없으면 무작위 25자 이름을 사용한다.
        """
        fmt = self._config.output_format
        name = f"{filename}.{fmt}" if filename else random_filename(fmt)
        data = self.get_raw_stream()

        output_dir = Path(self._config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        (output_dir / name).write_bytes(data)
        logger.info("이미지 저장: %s", output_dir / name)
        return name
