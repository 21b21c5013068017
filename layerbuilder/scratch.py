"""임시 파일 관리 모듈 — 가공된 오버레이를 임시 디렉토리에 저장하고 반드시 삭제한다."""

import logging
import shutil
import tempfile
from pathlib import Path

from PIL import Image

from .output import random_name

logger = logging.getLogger(__name__)


class ScratchSpace:
    """with 블록 안에서만 유효한 임시 파일 공간.

    블록을 빠져나갈 때 (예외 포함) 저장한 파일을 모두 삭제한다.
    temp_dir이 없으면 tempfile로 전용 디렉토리를 만들고 통째로 지운다.
    """

    def __init__(self, temp_dir: str | None = None):
        self._temp_dir = Path(temp_dir) if temp_dir else None
        self._own_dir: Path | None = None
        self._files: list[Path] = []

    def __enter__(self) -> "ScratchSpace":
        if self._temp_dir is None:
            self._own_dir = Path(tempfile.mkdtemp(prefix="layerbuilder-"))
        else:
            self._temp_dir.mkdir(parents=True, exist_ok=True)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    @property
    def directory(self) -> Path:
        return self._own_dir or self._temp_dir

    @property
    def files(self) -> list[Path]:
        return list(self._files)

    def store(self, img: Image.Image) -> Path:
        """이미지를 PNG 임시 파일로 저장하고 경로를 반환한다."""
        path = self.directory / f"{random_name()}.png"
        self._files.append(path)
        img.save(path, format="PNG")
        return path

    def load(self, path: Path) -> Image.Image:
        """저장한 임시 파일을 메모리로 읽어 온다."""
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")

    def cleanup(self) -> None:
        """저장한 임시 파일을 모두 삭제한다."""
        for path in self._files:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("임시 파일 삭제 실패: %s (%s)", path, e)
        self._files.clear()
        if self._own_dir is not None:
            shutil.rmtree(self._own_dir, ignore_errors=True)
            self._own_dir = None
