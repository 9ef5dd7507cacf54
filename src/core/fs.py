"""
원자적 파일 쓰기

규칙:
- 중간 상태 없음: temp → rename (같은 디렉토리)
- 가능한 환경에서 내구성 강화: 파일 fsync + 디렉토리 fsync
- fsync 실패 시 경고 남기고 계속 진행
- 실패 시 cleanup: temp 파일 삭제, 기존 파일 보존
"""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def _fsync_dir(dir_path: Path) -> None:
    """
    디렉토리 fsync (가능한 환경에서).

    rename 후 디렉토리 엔트리까지 내구성을 강화하려면 필요.
    Linux에서 주로 유효하며, 일부 OS/파일시스템에서는 지원되지 않을 수 있음.

    Args:
        dir_path: fsync할 디렉토리 경로
    """
    try:
        dir_fd = os.open(str(dir_path), os.O_RDONLY | os.O_DIRECTORY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
    except (OSError, AttributeError) as e:
        # O_DIRECTORY 미지원, 권한 문제 등
        logger.warning(
            f"Directory fsync failed for {dir_path}: {e}. "
            f"Rename durability may not be guaranteed."
        )


def atomic_write_text(path: Path, contents: str, *, fsync: bool = True) -> None:
    """
    원자적 텍스트 쓰기.

    동시 reader는 이전 내용 전체 또는 새 내용 전체만 보게 됨.

    Args:
        path: 저장할 파일 경로 (부모 디렉토리는 없으면 생성)
        contents: 파일 전체 내용
        fsync: 파일/디렉토리 fsync 여부

    Raises:
        OSError: 디렉토리 생성, 쓰기, rename 실패
    """
    dir_path = path.parent
    dir_path.mkdir(parents=True, exist_ok=True)

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=dir_path,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            newline="",
        ) as f:
            temp_path = Path(f.name)
            f.write(contents)
            f.flush()  # Python 버퍼 → OS 버퍼
            if fsync:
                try:
                    os.fsync(f.fileno())  # OS 버퍼 → 디스크
                except OSError as e:
                    logger.warning(
                        f"File fsync failed for {path}: {e}. "
                        f"Data may not be durable on power loss."
                    )

        os.replace(temp_path, path)  # 원자적 (기존 파일 덮어쓰기 포함)

        if fsync:
            _fsync_dir(dir_path)

    except Exception:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
        raise
