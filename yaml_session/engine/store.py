"""Session Store - YAML 파일 기반 세션 저장소 (Repository 패턴)

저장 경로: {session_dir}/{session_id}.yml
개발 환경에서 세션 내용을 직접 열어보고 수정할 수 있도록 사람이 읽을 수 있는
YAML을 사용한다.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from yaml_session.core.errors import (
    DeserializationError,
    InvalidSessionIdError,
    LockTimeoutError,
    SerializationError,
    SessionIOError,
)
from yaml_session.core.logging import get_logger
from yaml_session.engine.locking import DEFAULT_POLL_INTERVAL, exclusive_lock
from yaml_session.engine.record import SessionRecord, validate_session_id
from yaml_session.engine.registry import DirectoryRegistry, PathLike, normalize_dir

logger = get_logger(__name__)

SESSION_FILE_SUFFIX = ".yml"
DEFAULT_FILE_MODE = 0o600


class SessionStore(ABC):
    """세션 저장소 인터페이스 (Repository)"""

    @abstractmethod
    def create(self, attributes: Optional[dict[str, Any]] = None, **kwargs: Any) -> SessionRecord:
        """메모리 상에 새 세션 생성 (저장은 flush)"""
        ...

    @abstractmethod
    def retrieve(self, session_id: str) -> Optional[SessionRecord]:
        """세션 로드 (없으면 None)"""
        ...

    @abstractmethod
    def flush(self, session: SessionRecord) -> SessionRecord:
        """세션 저장/덮어쓰기"""
        ...

    @abstractmethod
    def destroy(self, session: Union[str, SessionRecord]) -> bool:
        """세션 삭제 (삭제했으면 True, 원래 없었으면 False)"""
        ...

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        """세션 존재 여부"""
        ...


class YamlSessionStore(SessionStore):
    """YAML 파일 기반 세션 저장소

    같은 ID에 대한 retrieve/flush는 파일의 배타적 advisory lock으로 직렬화된다.
    서로 다른 ID의 작업은 독립적이다.
    """

    def __init__(
        self,
        session_dir: PathLike,
        registry: Optional[DirectoryRegistry] = None,
        file_mode: int = DEFAULT_FILE_MODE,
        lock_timeout: Optional[float] = None,
        lock_poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        """
        Args:
            session_dir: 세션 파일 디렉토리 (없으면 첫 create/flush 때 생성)
            registry: 디렉토리 초기화 캐시. 스토어 간 공유하려면 같은 객체를 전달
            file_mode: 세션 파일 권한
            lock_timeout: 잠금 대기 제한(초). None이면 무기한 대기
            lock_poll_interval: lock_timeout 사용 시 재시도 간격
        """
        self.session_dir = normalize_dir(session_dir)
        self.registry = registry if registry is not None else DirectoryRegistry()
        self.file_mode = file_mode
        self.lock_timeout = lock_timeout
        self.lock_poll_interval = lock_poll_interval

    def path_for(self, session_id: str) -> Path:
        return self.session_dir / f"{validate_session_id(session_id)}{SESSION_FILE_SUFFIX}"

    def create(self, attributes: Optional[dict[str, Any]] = None, **kwargs: Any) -> SessionRecord:
        """새 세션 레코드 생성

        id가 없으면 생성된다. 디스크에는 쓰지 않으므로 flush()를 호출해야 한다.

        Raises:
            DirectoryCreationError: session_dir을 만들 수 없을 때
            InvalidSessionIdError: id가 파일 이름으로 쓸 수 없을 때
        """
        values = {**(attributes or {}), **kwargs}
        if values.get("id") is None:
            values.pop("id", None)
        session = SessionRecord(**values)
        self.registry.ensure_initialized(self.session_dir)
        return session

    def retrieve(self, session_id: str) -> Optional[SessionRecord]:
        """저장된 세션 반환. 파일이 없거나 비어 있으면 None

        Raises:
            SessionIOError: 열기/읽기/닫기 실패
            LockTimeoutError: lock_timeout 내에 잠금을 얻지 못함
            DeserializationError: 올바른 YAML 세션이 아닐 때 (파일은 그대로 둠)
        """
        path = self.path_for(session_id)
        if not path.is_file():
            return None

        try:
            with open(path, "r+", encoding="utf-8") as fh:
                with exclusive_lock(fh, self.lock_timeout, self.lock_poll_interval):
                    content = fh.read()
        except FileNotFoundError:
            # destroyed between the check and the open
            return None
        except LockTimeoutError as e:
            raise LockTimeoutError(path, e.timeout, session_id=session_id) from e
        except UnicodeDecodeError as e:
            raise DeserializationError(path, str(e), session_id=session_id) from e
        except OSError as e:
            raise SessionIOError(path, "read", e.strerror or str(e), session_id=session_id) from e

        if not content:
            # created by a flush that has not obtained the lock yet
            return None

        session = self._load(path, content, session_id)
        logger.debug("Session retrieved", session_id=session_id, path=str(path))
        return session

    def flush(self, session: SessionRecord) -> SessionRecord:
        """세션 전체를 파일에 기록 (기존 내용 덮어쓰기)

        직렬화가 파일을 열기 전에 끝나므로 직렬화 실패 시 기존 파일은 보존된다.
        기존 내용은 잠금을 얻은 뒤에 비워지므로 동시에 읽는 쪽이 잘린 내용을 보지 않는다.

        Raises:
            SerializationError: YAML로 표현할 수 없는 값이 있을 때
            SessionIOError: 열기/쓰기/닫기 실패
            LockTimeoutError: lock_timeout 내에 잠금을 얻지 못함
        """
        path = self.path_for(session.id)
        content = self._dump(session)
        self.registry.ensure_initialized(self.session_dir)

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT, self.file_mode)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                with exclusive_lock(fh, self.lock_timeout, self.lock_poll_interval):
                    os.chmod(path, self.file_mode)
                    fh.truncate(0)
                    fh.write(content)
                    fh.flush()
                    os.fsync(fh.fileno())  # 디스크에 강제 쓰기
        except LockTimeoutError as e:
            raise LockTimeoutError(path, e.timeout, session_id=session.id) from e
        except OSError as e:
            raise SessionIOError(path, "write", e.strerror or str(e), session_id=session.id) from e

        logger.debug("Session flushed", session_id=session.id, path=str(path))
        return session

    def destroy(self, session: Union[str, SessionRecord]) -> bool:
        """세션 파일 삭제. 이미 없으면 아무것도 하지 않음

        Raises:
            SessionIOError: 존재하는 파일을 지우지 못했을 때
        """
        session_id = session.id if isinstance(session, SessionRecord) else session
        path = self.path_for(session_id)
        if not path.is_file():
            return False

        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise SessionIOError(path, "delete", e.strerror or str(e), session_id=session_id) from e

        logger.debug("Session destroyed", session_id=session_id, path=str(path))
        return True

    def exists(self, session_id: str) -> bool:
        return self.path_for(session_id).is_file()

    @staticmethod
    def _dump(session: SessionRecord) -> str:
        try:
            return yaml.safe_dump(
                session.to_mapping(),
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )
        except yaml.YAMLError as e:
            raise SerializationError(session.id, str(e)) from e

    @staticmethod
    def _load(path: Path, content: str, session_id: str) -> SessionRecord:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise DeserializationError(path, str(e), session_id=session_id) from e

        if not isinstance(data, dict):
            raise DeserializationError(
                path,
                f"expected a mapping, got {type(data).__name__}",
                session_id=session_id,
            )

        if "id" not in data:
            # a generated id would fork the session into another file
            raise DeserializationError(path, "missing id", session_id=session_id)

        try:
            return SessionRecord.model_validate(data)
        except (ValidationError, InvalidSessionIdError) as e:
            raise DeserializationError(path, str(e), session_id=session_id) from e
