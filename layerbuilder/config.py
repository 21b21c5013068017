"""설정 파일 로더 모듈."""

import json
import dataclasses
from dataclasses import dataclass
from pathlib import Path

# 기본 설정 경로
_CONFIG_PATH = Path(__file__).parent / "config.json"

# 기본값 — config.json에 누락된 키가 있을 때 사용
_DEFAULTS = {
    "path": {
        "background_dir": "storage/image-layers/backgrounds",
        "output_dir": "storage/image-layers/output",
        "temp_dir": None,
        "custom_font": None,
    },
    "canvas": {
        "width": 1200,
        "height": 750,
    },
    "output": {
        "format": "png",
    },
    "fetch": {
        "timeout_sec": 10,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """base 딕셔너리에 override 값을 병합한다 (깊은 병합)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


@dataclass(frozen=True)
class LayerConfig:
    """합성기 한 개가 사용하는 설정 값."""
    background_dir: str = _DEFAULTS["path"]["background_dir"]
    output_dir: str = _DEFAULTS["path"]["output_dir"]
    temp_dir: str | None = _DEFAULTS["path"]["temp_dir"]
    custom_font: str | None = None
    canvas_width: int = 1200
    canvas_height: int = 750
    output_format: str = "png"
    fetch_timeout: float = 10

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self.canvas_width, self.canvas_height

    @classmethod
    def from_dict(cls, data: dict) -> "LayerConfig":
        """load_config 형식의 딕셔너리로부터 설정을 만든다."""
        merged = _deep_merge(_DEFAULTS, data)
        paths = merged["path"]
        return cls(
            background_dir=paths["background_dir"],
            output_dir=paths["output_dir"],
            temp_dir=paths["temp_dir"],
            custom_font=paths["custom_font"],
            canvas_width=int(merged["canvas"]["width"]),
            canvas_height=int(merged["canvas"]["height"]),
            output_format=str(merged["output"]["format"]).lower(),
            fetch_timeout=float(merged["fetch"]["timeout_sec"]),
        )

    def replace(self, **changes) -> "LayerConfig":
        """일부 값만 바꾼 사본을 반환한다."""
        return dataclasses.replace(self, **changes)


def load_config(path: Path | None = None) -> LayerConfig:
    """설정 파일을 읽어 LayerConfig로 반환한다.

    파일이 없으면 기본값을 사용한다.
    """
    config_path = path or _CONFIG_PATH
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            user_config = json.load(f)
        return LayerConfig.from_dict(user_config)
    return LayerConfig.from_dict({})
