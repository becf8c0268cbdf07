"""Session Store Factory - 스토어 생성 및 디렉토리 레지스트리 소유"""

from typing import Optional

from yaml_session.core.config import Settings, settings as default_settings
from yaml_session.engine.registry import DirectoryRegistry, PathLike
from yaml_session.engine.store import YamlSessionStore


class SessionStoreFactory:
    """세션 스토어 팩토리

    하나의 DirectoryRegistry를 소유하고, 여기서 만든 모든 스토어가 공유한다.
    session_dir을 생략하면 settings.SESSION_DIR을 사용한다.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        registry: Optional[DirectoryRegistry] = None,
    ):
        self.settings = settings or default_settings
        self.registry = registry if registry is not None else DirectoryRegistry()

    def store(self, session_dir: Optional[PathLike] = None) -> YamlSessionStore:
        return YamlSessionStore(
            session_dir if session_dir is not None else self.settings.SESSION_DIR,
            registry=self.registry,
            file_mode=self.settings.SESSION_FILE_MODE,
            lock_timeout=self.settings.SESSION_LOCK_TIMEOUT_SEC,
            lock_poll_interval=self.settings.SESSION_LOCK_POLL_INTERVAL_SEC,
        )

    def reset(self) -> None:
        """디렉토리 캐시 초기화 (DirectoryRegistry.reset 참고)"""
        self.registry.reset()
