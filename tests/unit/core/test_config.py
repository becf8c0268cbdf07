"""설정 테스트

위치: yaml_session.core.config
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from yaml_session.core.config import Settings


class TestSettings:
    """Settings 테스트"""

    def test_defaults(self, monkeypatch, tmp_path):
        """기본값"""
        monkeypatch.chdir(tmp_path)
        settings = Settings()

        assert settings.SESSION_DIR == Path.cwd() / "sessions"
        assert settings.SESSION_FILE_MODE == 0o600
        assert settings.SESSION_LOCK_TIMEOUT_SEC is None
        assert settings.LOG_FORMAT == "json"

    def test_from_env(self, monkeypatch, tmp_path):
        """환경 변수 (대소문자 무시)"""
        monkeypatch.setenv("session_dir", str(tmp_path / "env-sessions"))
        monkeypatch.setenv("SESSION_LOCK_TIMEOUT_SEC", "3")

        settings = Settings()

        assert settings.SESSION_DIR == tmp_path / "env-sessions"
        assert settings.SESSION_LOCK_TIMEOUT_SEC == 3.0

    @pytest.mark.parametrize("value", [0, -1])
    def test_timeout_must_be_positive(self, value):
        with pytest.raises(ValidationError):
            Settings(SESSION_LOCK_TIMEOUT_SEC=value)

    def test_poll_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(SESSION_LOCK_POLL_INTERVAL_SEC=0)
