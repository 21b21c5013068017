"""배경 이미지 관리 모듈 — 배경 디렉토리 목록, 경로 확인, 로드."""

import logging
from pathlib import Path

from PIL import Image

from .errors import BackgroundNotFound
from .sources import PathSource

logger = logging.getLogger(__name__)


class BackgroundLibrary:
    """배경 디렉토리의 이미지들을 관리한다."""

    def __init__(self, bg_dir: str = "storage/image-layers/backgrounds"):
        self._bg_dir = Path(bg_dir)

    @property
    def directory(self) -> Path:
        return self._bg_dir

    def list_backgrounds(self) -> list[dict[str, str]]:
        """사용 가능한 배경 목록 [{"path": 파일명, "name": 첫 '.' 앞부분}]을 반환한다."""
        if not self._bg_dir.is_dir():
            logger.warning("배경 디렉토리 없음: %s", self._bg_dir)
            return []

        backgrounds = []
        for path in sorted(self._bg_dir.iterdir()):
            if not path.is_file() or path.name.startswith("."):
                continue
            backgrounds.append({"path": path.name, "name": path.name.split(".", 1)[0]})
        return backgrounds

    def resolve(self, name: str) -> Path:
        """배경 파일 경로를 반환한다. 없으면 BackgroundNotFound."""
        path = self._bg_dir / name
        if not name or not path.is_file():
            raise BackgroundNotFound(path)
        return path

    def load(self, name: str) -> Image.Image:
        """배경 이미지를 RGBA로 디코딩한다."""
        path = self.resolve(name)
        img = PathSource(str(path)).load()
        logger.info("배경 로드: %s (%dx%d)", path.name, img.width, img.height)
        return img
