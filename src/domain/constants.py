"""
Domain Constants: oplog 상태 파일 관련 상수.

파일명 정책, TOML 키 이름 등 저장소 전반에서 사용되는 값들.
"""

from datetime import UTC, datetime

# =============================================================================
# State File (상태 파일명 정책)
# =============================================================================
# <base_path>/
# └── operations-log.toml   # oplog head + modified_at

OPLOG_STATE_FILENAME = "operations-log.toml"

# =============================================================================
# Document Keys (TOML 키)
# =============================================================================
# head_sha = "<sha>"          # 없으면 키 생략
#
# [modified_at]
# secs_since_epoch = 1717171717
# nanos_since_epoch = 0
#
# 구버전 포맷: modified_at = 1717171717 (정수 초) → epoch로 대체

KEY_HEAD_SHA = "head_sha"
KEY_MODIFIED_AT = "modified_at"
KEY_SECS_SINCE_EPOCH = "secs_since_epoch"
KEY_NANOS_SINCE_EPOCH = "nanos_since_epoch"

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MICROSECOND = 1_000

# =============================================================================
# Config Defaults (default.yaml 키 기본값)
# =============================================================================

DEFAULT_CONFIG_FILENAME = "default.yaml"
DEFAULT_FSYNC = True
