"""테스트 설정 및 공통 fixture"""

import sys
from pathlib import Path

import pytest

# 프로젝트 루트를 Python 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from yaml_session.engine.registry import DirectoryRegistry  # noqa: E402
from yaml_session.engine.store import YamlSessionStore  # noqa: E402


@pytest.fixture
def session_dir(tmp_path):
    """아직 존재하지 않는 세션 디렉토리"""
    return tmp_path / "sessions"


@pytest.fixture
def registry():
    return DirectoryRegistry()


@pytest.fixture
def store(session_dir, registry):
    return YamlSessionStore(session_dir, registry=registry)


@pytest.fixture
def sample_session_data():
    """샘플 세션 데이터"""
    return {
        "id": "abc",
        "user": "alice",
        "roles": ["admin", "editor"],
        "prefs": {"theme": "dark", "page_size": 20},
        "visits": 3,
        "active": True,
        "nickname": None,
    }
