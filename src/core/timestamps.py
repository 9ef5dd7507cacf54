"""
modified_at 직렬화: 현재 포맷 + 구버전 호환

현재 포맷 (TOML 테이블):
    [modified_at]
    secs_since_epoch = 1717171717
    nanos_since_epoch = 123456000

구버전 포맷:
    modified_at = 1717171717   # 정수 초

구버전/손상 값은 엄격 디코딩에서 거부되고, decode_system_time_or_epoch()가
epoch로 대체함. 문서 전체 디코딩은 실패시키지 않음.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from src.domain.constants import (
    KEY_NANOS_SINCE_EPOCH,
    KEY_SECS_SINCE_EPOCH,
    NANOS_PER_MICROSECOND,
    NANOS_PER_SECOND,
    UNIX_EPOCH,
)

logger = logging.getLogger(__name__)


def encode_system_time(value: datetime) -> dict[str, int]:
    """
    datetime → {secs_since_epoch, nanos_since_epoch}.

    naive datetime은 UTC로 간주.

    Raises:
        ValueError: epoch 이전 시각
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)

    delta = value - UNIX_EPOCH
    if delta < timedelta(0):
        raise ValueError(f"Timestamp before Unix epoch: {value.isoformat()}")

    secs = delta.days * 86400 + delta.seconds
    return {
        KEY_SECS_SINCE_EPOCH: secs,
        KEY_NANOS_SINCE_EPOCH: delta.microseconds * NANOS_PER_MICROSECOND,
    }


def _require_int(table: dict[str, Any], key: str) -> int:
    value = table.get(key)
    # bool은 int 하위 타입이므로 명시적으로 제외
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{key} must be non-negative, got {value}")
    return value


def decode_system_time(value: Any) -> datetime:
    """
    엄격한 modified_at 디코딩.

    Args:
        value: TOML에서 읽은 modified_at 값

    Returns:
        UTC datetime (마이크로초 정밀도, 나노초 이하는 버림)

    Raises:
        ValueError: 현재 포맷(테이블)이 아닌 경우 (구버전 정수 포함)
    """
    if not isinstance(value, dict):
        raise ValueError(f"Expected a timestamp table, got {type(value).__name__}")

    secs = _require_int(value, KEY_SECS_SINCE_EPOCH)
    nanos = _require_int(value, KEY_NANOS_SINCE_EPOCH)
    if nanos >= NANOS_PER_SECOND:
        raise ValueError(f"{KEY_NANOS_SINCE_EPOCH} out of range: {nanos}")

    try:
        return UNIX_EPOCH + timedelta(
            seconds=secs, microseconds=nanos // NANOS_PER_MICROSECOND
        )
    except OverflowError as e:
        raise ValueError(f"Timestamp out of range: {secs}s") from e


def decode_system_time_or_epoch(value: Any) -> datetime:
    """
    관대한 modified_at 디코딩.

    엄격 디코딩 실패 시 epoch 반환 (구버전 파일 호환).
    """
    try:
        return decode_system_time(value)
    except ValueError as e:
        logger.debug(f"Unreadable modified_at {value!r} ({e}); using Unix epoch")
        return UNIX_EPOCH
