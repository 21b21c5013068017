"""출력 모듈 — 결과 이미지를 바이트 스트림/파일로 저장한다."""

import secrets
import string
from io import BytesIO

from PIL import Image

from .errors import DecodeError

_ALPHABET = string.ascii_letters + string.digits

# 출력 형식 → Pillow 저장 형식
_FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "webp": "WEBP",
    "gif": "GIF",
    "bmp": "BMP",
    "tif": "TIFF",
    "tiff": "TIFF",
}

# 알파 채널을 저장할 수 없는 형식
_NO_ALPHA = {"JPEG", "BMP"}


def pillow_format(fmt: str) -> str:
    """출력 형식 이름을 Pillow 형식 이름으로 변환한다."""
    try:
        return _FORMATS[fmt.lower().lstrip(".")]
    except KeyError:
        raise ValueError(f"지원하지 않는 출력 형식: {fmt!r}") from None


def random_name(length: int = 25) -> str:
    """영문/숫자로 된 무작위 문자열."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def random_filename(fmt: str = "png") -> str:
    """무작위 25자 이름 + 확장자."""
    return f"{random_name()}.{fmt}"


def encode(img: Image.Image, fmt: str = "png", quality: int = 100) -> bytes:
    """이미지를 지정 형식의 바이트열로 인코딩한다."""
    pil_fmt = pillow_format(fmt)
    if pil_fmt in _NO_ALPHA and img.mode != "RGB":
        img = img.convert("RGB")
    buffer = BytesIO()
    if pil_fmt in ("JPEG", "WEBP"):
        img.save(buffer, format=pil_fmt, quality=quality)
    else:
        img.save(buffer, format=pil_fmt)
    return buffer.getvalue()


def decode(data: bytes) -> Image.Image:
    """encode()로 만든 바이트열을 다시 이미지로 연다."""
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except OSError as e:
        raise DecodeError(f"bytes({len(data)})", str(e)) from e
    return img
