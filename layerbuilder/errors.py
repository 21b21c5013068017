"""이미지 레이어 생성 중 발생하는 예외 모듈."""


class ImageLayerError(Exception):
    """레이어 생성 예외의 기본 클래스."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class BackgroundNotFound(ImageLayerError):
    """배경 이미지 파일이 존재하지 않을 때."""

    def __init__(self, path):
        super().__init__(
            f"배경 이미지가 없음: {path} (배경 디렉토리와 파일 이름을 확인하세요)",
            details={"path": str(path)},
        )
        self.path = path


class DecodeError(ImageLayerError):
    """이미지 소스를 래스터로 디코딩할 수 없을 때."""

    def __init__(self, source: str, reason: str = ""):
        message = f"이미지 디코딩 실패: {source}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, details={"source": source, "reason": reason})
        self.source = source
        self.reason = reason
