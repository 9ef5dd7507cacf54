"""
설정 로드: default.yaml

사용 키:
- paths.oplog_state_filename: 상태 파일명 (기본 operations-log.toml)
- storage.fsync: 쓰기 시 fsync 여부 (기본 true)
"""

from pathlib import Path
from typing import Any

import yaml

from src.domain.constants import DEFAULT_CONFIG_FILENAME


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드. 파일이 없거나 비어 있으면 빈 dict."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = Path(__file__).parent.parent.parent / DEFAULT_CONFIG_FILENAME

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] | None = yaml.safe_load(f)
        return data or {}
