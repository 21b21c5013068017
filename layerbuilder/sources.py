"""이미지 소스 모듈 — 경로/URL/바이트/base64/data-URL/이미지 객체를 RGBA 래스터로 변환한다.

오버레이 등록 시에는 원본 값을 그대로 보관하고 (파일 객체만 바이트로 읽어 둔다),
생성 단계에서 coerce_source()로 소스 종류를 판별한 뒤 load()로 디코딩한다.
"""

import base64
import binascii
import logging
import os
import re
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from urllib.parse import unquote_to_bytes

import requests
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(?:;[\w.+-]+=[\w.+-]+)*)(?P<b64>;base64)?,(?P<data>.*)$",
    re.DOTALL,
)
_BASE64_RE = re.compile(r"^[A-Za-z0-9+/\s]+={0,2}\s*$")


def _decode_bytes(data: bytes, label: str) -> Image.Image:
    """바이트열을 Pillow로 열어 RGBA로 변환한다."""
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError(label, str(e)) from e
    return img.convert("RGBA")


@dataclass(frozen=True)
class PathSource:
    """파일 시스템 경로."""
    path: str

    def describe(self) -> str:
        return f"path:{self.path}"

    def load(self, timeout: float = 10) -> Image.Image:
        path = Path(self.path)
        if not path.is_file():
            raise DecodeError(self.describe(), "파일 없음")
        return _decode_bytes(path.read_bytes(), self.describe())


@dataclass(frozen=True)
class UrlSource:
    """원격 이미지 URL (blocking fetch)."""
    url: str

    def describe(self) -> str:
        return f"url:{self.url}"

    def load(self, timeout: float = 10) -> Image.Image:
        logger.debug("원격 이미지 요청: %s", self.url)
        try:
            resp = requests.get(self.url, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise DecodeError(self.describe(), str(e)) from e
        return _decode_bytes(resp.content, self.describe())


@dataclass(frozen=True)
class BytesSource:
    """인코딩된 이미지 바이너리."""
    data: bytes

    def describe(self) -> str:
        return f"bytes({len(self.data)})"

    def load(self, timeout: float = 10) -> Image.Image:
        return _decode_bytes(self.data, self.describe())


@dataclass(frozen=True)
class Base64Source:
    """base64 인코딩된 이미지 문자열."""
    data: str

    def describe(self) -> str:
        return f"base64({len(self.data)})"

    def load(self, timeout: float = 10) -> Image.Image:
        try:
            raw = base64.b64decode("".join(self.data.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(self.describe(), str(e)) from e
        return _decode_bytes(raw, self.describe())


@dataclass(frozen=True)
class DataUrlSource:
    """data:image/...;base64,... 형식의 data-URL."""
    data: str

    def describe(self) -> str:
        return f"data-url({len(self.data)})"

    def load(self, timeout: float = 10) -> Image.Image:
        m = _DATA_URL_RE.match(self.data)
        if not m:
            raise DecodeError(self.describe(), "data-URL 형식 아님")
        payload = m.group("data")
        if m.group("b64"):
            return Base64Source(payload).load(timeout)
        return _decode_bytes(unquote_to_bytes(payload), self.describe())


@dataclass(frozen=True, eq=False)
class RasterSource:
    """이미 디코딩된 Pillow 이미지."""
    image: Image.Image

    def describe(self) -> str:
        return f"raster({self.image.width}x{self.image.height})"

    def load(self, timeout: float = 10) -> Image.Image:
        # 호출자의 이미지를 변경하지 않도록 사본 사용
        return self.image.convert("RGBA") if self.image.mode != "RGBA" else self.image.copy()


ImageSource = PathSource | UrlSource | BytesSource | Base64Source | DataUrlSource | RasterSource

_SOURCE_TYPES = (PathSource, UrlSource, BytesSource, Base64Source, DataUrlSource, RasterSource)


def _is_file(value: str) -> bool:
    try:
        return os.path.isfile(value)
    except (OSError, ValueError):
        return False


def _classify_str(value: str) -> ImageSource:
    """문자열 소스의 종류를 판별한다."""
    stripped = value.strip()
    if stripped.startswith("data:"):
        return DataUrlSource(stripped)
    if stripped.lower().startswith(("http://", "https://")):
        return UrlSource(stripped)
    if _is_file(value):
        return PathSource(value)
    if len(stripped) >= 16 and _BASE64_RE.match(stripped):
        return Base64Source(stripped)
    return PathSource(value)


def coerce_source(value) -> ImageSource:
    """임의의 오버레이 소스 값을 ImageSource 변형 중 하나로 변환한다."""
    if isinstance(value, _SOURCE_TYPES):
        return value
    if isinstance(value, Image.Image):
        return RasterSource(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BytesSource(bytes(value))
    if isinstance(value, str):
        return _classify_str(value)
    if isinstance(value, os.PathLike):
        return PathSource(os.fspath(value))
    if hasattr(value, "read"):
        # 업로드 파일 등 파일 객체
        data = value.read()
        if isinstance(data, str):
            return _classify_str(data)
        return BytesSource(bytes(data))
    raise DecodeError(repr(type(value).__name__), "지원하지 않는 소스 타입")


def load_image(value, timeout: float = 10) -> Image.Image:
    """소스 값을 RGBA 래스터로 디코딩한다. 실패 시 DecodeError."""
    return coerce_source(value).load(timeout)


def snapshot_source(value):
    """등록 시점에 한 번만 읽을 수 있는 소스(파일 객체)를 BytesSource로 고정한다.

    그 외 값은 그대로 반환하며, 디코딩과 오류는 생성 단계로 미룬다.
    """
    if isinstance(value, (str, bytes, bytearray, memoryview, Image.Image, os.PathLike, *_SOURCE_TYPES)):
        return value
    if hasattr(value, "read"):
        return coerce_source(value)
    return value
