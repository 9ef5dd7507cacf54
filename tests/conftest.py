"""
Pytest fixtures for the oplog state tests.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from src.core.oplog_state import OplogStateStore

# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def test_config() -> dict:
    """테스트용 설정 (fsync 끔)."""
    return {
        "paths": {
            "oplog_state_filename": "operations-log.toml",
        },
        "storage": {
            "fsync": False,
        },
    }


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def base_path(tmp_path: Path) -> Path:
    """상태 파일이 없는 저장소 디렉토리."""
    repo = tmp_path / "repoX"
    repo.mkdir()
    return repo


@pytest.fixture
def fake_clock() -> Callable[[], datetime]:
    """호출할 때마다 1초씩 증가하는 시계."""
    current = [datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)]

    def clock() -> datetime:
        current[0] += timedelta(seconds=1)
        return current[0]

    return clock


@pytest.fixture
def store(base_path: Path, test_config: dict) -> OplogStateStore:
    """실제 시계를 쓰는 store."""
    return OplogStateStore(base_path, config=test_config)
