"""
Error definitions for the oplog state store.

규칙:
- 파일 없음 → 에러 아님 (기본값 반환)
- 파일 손상 → StateParseError로 명시적 실패 (기본값으로 조용히 대체 금지)
- 구버전 modified_at 포맷 → 에러 아님 (epoch로 대체)
- 재시도 없음: 모든 실패는 호출자에게 그대로 전달
"""

from typing import Any


class OplogStateError(Exception):
    """
    oplog 상태 저장소 에러의 기반 클래스.

    code + 키워드 컨텍스트로 구성:
    - code: ErrorCodes 상수
    - context: path, error 등 진단용 정보

    Usage:
        raise StateParseError(ErrorCodes.STATE_FILE_CORRUPT, path=str(p), error=str(e))
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    @property
    def path(self) -> str | None:
        """문제가 된 파일 경로 (있으면)."""
        return self.context.get("path")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


class StateIOError(OplogStateError):
    """파일시스템 작업(open/read/write/rename) 또는 인코딩 실패."""


class StateParseError(OplogStateError):
    """
    상태 파일이 존재하지만 구조적으로 잘못됨.

    구버전 timestamp 포맷은 여기에 해당하지 않음 (epoch로 복구).
    """


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === I/O ===
    STATE_READ_FAILED = "STATE_READ_FAILED"
    STATE_WRITE_FAILED = "STATE_WRITE_FAILED"
    STATE_ENCODE_FAILED = "STATE_ENCODE_FAILED"

    # === Parse ===
    STATE_FILE_CORRUPT = "STATE_FILE_CORRUPT"
