"""
Core layer: oplog 상태 저장 핵심 모듈.

역할:
- operations-log.toml 읽기/쓰기 (OplogStateStore)
- 원자적 쓰기, modified_at 직렬화, 설정 로드
"""

from .config import load_config
from .fs import atomic_write_text
from .oplog_state import OplogStateStore, decode_record, encode_record
from .timestamps import (
    decode_system_time,
    decode_system_time_or_epoch,
    encode_system_time,
)

__all__ = [
    # oplog_state
    "OplogStateStore",
    "decode_record",
    "encode_record",
    # fs
    "atomic_write_text",
    # timestamps
    "encode_system_time",
    "decode_system_time",
    "decode_system_time_or_epoch",
    # config
    "load_config",
]
