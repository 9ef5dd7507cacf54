"""
oplog 상태 관리: operations-log.toml

규칙:
- 파일 하나 = base_path 하나의 oplog head 상태 (head_sha, modified_at)
- 매 호출마다 디스크에서 읽음 (메모리 캐시 없음)
- 쓰기 = 레코드 전체 덮어쓰기, modified_at은 항상 현재 시각으로 갱신
- 원자적 쓰기: temp → rename + fsync
- 파일 없음 → 기본값, 파일 손상 → StateParseError (두 경우를 섞지 않음)
- 락 없음: 동시 접근 직렬화는 호출자 책임
"""

import dataclasses
import logging
import tomllib
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import tomli_w

from src.core.fs import atomic_write_text
from src.core.timestamps import decode_system_time_or_epoch, encode_system_time
from src.domain.constants import (
    DEFAULT_FSYNC,
    KEY_HEAD_SHA,
    KEY_MODIFIED_AT,
    OPLOG_STATE_FILENAME,
    UNIX_EPOCH,
)
from src.domain.errors import ErrorCodes, StateIOError, StateParseError
from src.domain.schemas import OplogRecord

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


# =============================================================================
# Document <-> Record
# =============================================================================


def decode_record(document: dict[str, Any]) -> OplogRecord:
    """
    TOML 문서 → OplogRecord.

    - head_sha 없음 → None
    - modified_at 없음/구버전/판독 불가 → epoch
    - 알 수 없는 키는 무시

    Raises:
        ValueError: head_sha가 문자열이 아님
    """
    head_sha = document.get(KEY_HEAD_SHA)
    if head_sha is not None and not isinstance(head_sha, str):
        raise ValueError(
            f"{KEY_HEAD_SHA} must be a string, got {type(head_sha).__name__}"
        )

    if KEY_MODIFIED_AT in document:
        modified_at = decode_system_time_or_epoch(document[KEY_MODIFIED_AT])
    else:
        modified_at = UNIX_EPOCH

    return OplogRecord(head_sha=head_sha, modified_at=modified_at)


def encode_record(record: OplogRecord) -> str:
    """
    OplogRecord → TOML 텍스트.

    head_sha가 None이면 키 자체를 생략.

    Raises:
        TypeError: head_sha가 문자열이 아님
        ValueError: modified_at이 epoch 이전
    """
    document: dict[str, Any] = {}
    if record.head_sha is not None:
        if not isinstance(record.head_sha, str):
            raise TypeError(
                f"{KEY_HEAD_SHA} must be a string, got {type(record.head_sha).__name__}"
            )
        document[KEY_HEAD_SHA] = record.head_sha
    document[KEY_MODIFIED_AT] = encode_system_time(record.modified_at)
    return tomli_w.dumps(document)


# =============================================================================
# Store
# =============================================================================


class OplogStateStore:
    """
    base_path 하나에 대한 oplog head 상태 접근자.

    사용법:
        store = OplogStateStore(project_dir)
        store.set_head("abc123")
        store.get_head()  # "abc123"

    동시성:
    - 내부 락 없음. 각 호출은 독립적인 read-modify-write.
    - 동시 set_head는 last-writer-wins 경쟁 (마지막 파일 교체만 원자적).
    - 같은 경로를 가리키는 여러 인스턴스는 메모리 상태를 공유하지 않음.
    """

    def __init__(
        self,
        base_path: Path,
        config: dict | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Args:
            base_path: 상태 파일이 위치할 디렉토리 (존재하지 않아도 됨)
            config: 설정 (paths.oplog_state_filename, storage.fsync)
            clock: 현재 시각 공급자 (기본: datetime.now(UTC))
        """
        config = config or {}
        filename = config.get("paths", {}).get(
            "oplog_state_filename", OPLOG_STATE_FILENAME
        )
        self.file_path = Path(base_path) / filename
        self._fsync = config.get("storage", {}).get("fsync", DEFAULT_FSYNC)
        self._clock = clock or _utc_now

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.file_path)!r})"

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def set_head(self, sha: str) -> None:
        """
        oplog head 저장.

        파일이 없으면 생성, 있으면 전체 덮어쓰기. modified_at 갱신.

        Raises:
            StateIOError: 읽기(파일 존재 시) 또는 쓰기 실패
            StateParseError: 기존 파일 손상
        """
        record = self.read_state()
        record.head_sha = sha
        self._write_file(record)

    def get_head(self) -> str | None:
        """
        oplog head sha 조회. 기록된 적 없으면 None.

        Raises:
            StateIOError, StateParseError
        """
        return self.read_state().head_sha

    def get_modified_at(self) -> datetime:
        """
        마지막 쓰기 시각 조회. 기록된 적 없으면 epoch.

        Raises:
            StateIOError, StateParseError
        """
        return self.read_state().modified_at

    def read_state(self) -> OplogRecord:
        """
        상태 파일 전체를 한 번에 읽어 레코드로 반환.

        Returns:
            OplogRecord (파일이 없으면 기본값)

        Raises:
            StateIOError: STATE_READ_FAILED
            StateParseError: STATE_FILE_CORRUPT
        """
        if not self.file_path.exists():
            return OplogRecord.default()

        try:
            raw = self.file_path.read_bytes()
        except OSError as e:
            raise StateIOError(
                ErrorCodes.STATE_READ_FAILED,
                path=str(self.file_path),
                error=str(e),
            ) from e

        try:
            document = tomllib.loads(raw.decode("utf-8"))
            return decode_record(document)
        except (UnicodeDecodeError, tomllib.TOMLDecodeError, ValueError) as e:
            raise StateParseError(
                ErrorCodes.STATE_FILE_CORRUPT,
                path=str(self.file_path),
                error=str(e),
            ) from e

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _write_file(self, record: OplogRecord) -> None:
        """modified_at을 현재 시각으로 찍고 원자적으로 저장."""
        record = dataclasses.replace(record, modified_at=self._clock())

        try:
            contents = encode_record(record)
        except (TypeError, ValueError) as e:
            raise StateIOError(
                ErrorCodes.STATE_ENCODE_FAILED,
                path=str(self.file_path),
                error=str(e),
            ) from e

        try:
            atomic_write_text(self.file_path, contents, fsync=self._fsync)
        except OSError as e:
            raise StateIOError(
                ErrorCodes.STATE_WRITE_FAILED,
                path=str(self.file_path),
                error=str(e),
            ) from e

        logger.debug(
            f"Wrote oplog state {self.file_path}: "
            f"head_sha={record.head_sha}, modified_at={record.modified_at.isoformat()}"
        )
