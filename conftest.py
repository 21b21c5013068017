"""공용 테스트 픽스처 — 임시 배경/출력/임시 디렉토리와 샘플 이미지."""

from pathlib import Path

import pytest
from PIL import Image

from layerbuilder.config import LayerConfig

BG_COLOR = (30, 60, 120)
AVATAR_COLOR = (220, 40, 40, 255)


@pytest.fixture
def bg_dir(tmp_path) -> Path:
    """작은 배경 이미지 두 장이 들어 있는 디렉토리."""
    directory = tmp_path / "backgrounds"
    directory.mkdir()
    Image.new("RGB", (400, 250), BG_COLOR).save(directory / "sunset.png")
    Image.new("RGB", (1600, 1000), (10, 10, 10)).save(directory / "night.jpg")
    return directory


@pytest.fixture
def config(tmp_path, bg_dir) -> LayerConfig:
    return LayerConfig(
        background_dir=str(bg_dir),
        output_dir=str(tmp_path / "output"),
        temp_dir=str(tmp_path / "temp"),
    )


@pytest.fixture
def avatar() -> Image.Image:
    return Image.new("RGBA", (300, 300), AVATAR_COLOR)


@pytest.fixture
def avatar_path(tmp_path, avatar) -> Path:
    path = tmp_path / "avatar.png"
    avatar.save(path)
    return path
