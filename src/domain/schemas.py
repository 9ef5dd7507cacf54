"""
Data schemas for the oplog state store.

규칙:
- 레코드는 통째로 읽고 통째로 씀 (부분 필드 갱신 없음)
- head_sha is None ⇔ set_head가 한 번도 호출되지 않음
- modified_at은 항상 정의됨 (모르면 epoch)
"""

from dataclasses import dataclass, field
from datetime import datetime

from .constants import UNIX_EPOCH

# =============================================================================
# Oplog State
# =============================================================================

@dataclass
class OplogRecord:
    """
    operations-log.toml에 저장되는 oplog 상태.

    파일 외의 정체성 없음: 값 객체.
    """
    head_sha: str | None = None  # 마지막 oplog 커밋 sha
    modified_at: datetime = field(default=UNIX_EPOCH)  # 마지막 쓰기 시각 (UTC)

    @classmethod
    def default(cls) -> "OplogRecord":
        """상태 파일이 없을 때의 기본 레코드."""
        return cls(head_sha=None, modified_at=UNIX_EPOCH)

    @property
    def has_head(self) -> bool:
        """head가 기록된 적 있는지."""
        return self.head_sha is not None
