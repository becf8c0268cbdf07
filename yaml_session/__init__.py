"""YAML Session Store

세션 객체를 session_dir 아래 `{id}.yml` 파일로 영속화하는 스토리지 엔진

사용 예:
    from yaml_session import SessionStoreFactory

    factory = SessionStoreFactory()
    store = factory.store("/tmp/sessions")
    session = store.create({"user": "alice"})
    store.flush(session)
"""

from .engine import (
    DirectoryRegistry,
    SessionRecord,
    SessionStore,
    SessionStoreFactory,
    YamlSessionStore,
)

__version__ = "0.1.0"

__all__ = [
    "DirectoryRegistry",
    "SessionRecord",
    "SessionStore",
    "SessionStoreFactory",
    "YamlSessionStore",
]
