"""Directory Registry - 세션 디렉토리 초기화 캐시

매 세션 생성마다 디렉토리 존재를 확인하지 않도록, 이미 확인/생성한
디렉토리를 기억한다. reset()으로 캐시를 비우면 다음 사용 시 다시 확인.
"""

import threading
from pathlib import Path
from typing import Union

from yaml_session.core.errors import DirectoryCreationError
from yaml_session.core.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def normalize_dir(path: PathLike) -> Path:
    """캐시 키로 쓰는 정규화된 경로"""
    return Path(path).expanduser().resolve()


class DirectoryRegistry:
    """세션 디렉토리 레지스트리

    SessionStoreFactory가 소유하며, 같은 팩토리에서 만든 스토어들이 공유한다.
    """

    def __init__(self):
        # given spelling or normalized path -> normalized path
        self._initialized: dict[Path, Path] = {}
        self._lock = threading.Lock()

    def ensure_initialized(self, path: PathLike) -> Path:
        """디렉토리가 없으면 한 번만 생성

        경로는 생성 시도 전에 캐시에 기록된다. 생성에 실패한 경로도
        reset() 전까지 다시 시도하지 않는다. 캐시된 경로는 파일시스템을
        전혀 건드리지 않는다 (resolve 포함).

        Raises:
            DirectoryCreationError: 디렉토리가 없고 생성할 수 없을 때
        """
        key = Path(path)
        with self._lock:
            cached = self._initialized.get(key)
        if cached is not None:
            return cached

        session_dir = normalize_dir(key)

        with self._lock:
            known = session_dir in self._initialized
            if key.is_absolute():
                # relative spellings depend on the cwd, never cached as given
                self._initialized[key] = session_dir
            if known:
                return session_dir
            self._initialized[session_dir] = session_dir

            if not session_dir.is_dir():
                self._create(session_dir)

        return session_dir

    def _create(self, session_dir: Path) -> None:
        try:
            session_dir.mkdir(parents=True)
        except FileExistsError:
            # created by another process in the meantime
            if not session_dir.is_dir():
                logger.error("Session dir path is not a directory", path=str(session_dir))
                raise DirectoryCreationError(session_dir, "path exists and is not a directory")
        except OSError as e:
            logger.error("Session dir creation failed", path=str(session_dir), error=str(e))
            raise DirectoryCreationError(session_dir, str(e)) from e
        else:
            logger.debug("Session dir created", path=str(session_dir))

    def is_initialized(self, path: PathLike) -> bool:
        """캐시 여부 (파일시스템은 확인하지 않음)"""
        key = Path(path)
        with self._lock:
            if key in self._initialized:
                return True
        normalized = normalize_dir(key)
        with self._lock:
            return normalized in self._initialized

    def reset(self) -> None:
        """캐시 전체 삭제

        디렉토리를 지운 뒤에도 재시작 없이 다음 사용 시 다시 생성되도록 한다.
        """
        with self._lock:
            self._initialized.clear()
        logger.debug("Session dir cache reset")
