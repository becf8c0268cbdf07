"""Session Engine Package

세션 디렉토리 레지스트리와 YAML 파일 세션 저장소

구조:
- registry.py: DirectoryRegistry (디렉토리 초기화 캐시)
- record.py: SessionRecord 모델
- locking.py: flock 기반 배타적 잠금
- store.py: SessionStore 인터페이스, YamlSessionStore
- factory.py: SessionStoreFactory (레지스트리 소유, 스토어 생성)
"""

from .factory import SessionStoreFactory
from .record import SessionRecord, new_session_id, validate_session_id
from .registry import DirectoryRegistry
from .store import SessionStore, YamlSessionStore

__all__ = [
    "DirectoryRegistry",
    "SessionRecord",
    "SessionStore",
    "SessionStoreFactory",
    "YamlSessionStore",
    "new_session_id",
    "validate_session_id",
]
