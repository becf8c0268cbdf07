"""Application Configuration

pydantic-settings 기반 환경 설정
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """세션 스토어 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Session Storage ===
    SESSION_DIR: Path = Field(default_factory=lambda: Path.cwd() / "sessions")
    SESSION_FILE_MODE: int = 0o600  # owner read/write only

    # === Locking ===
    SESSION_LOCK_TIMEOUT_SEC: Optional[float] = None  # None: block until locked
    SESSION_LOCK_POLL_INTERVAL_SEC: float = 0.05

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json, text

    @field_validator("SESSION_LOCK_TIMEOUT_SEC")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("SESSION_LOCK_TIMEOUT_SEC must be positive")
        return value

    @field_validator("SESSION_LOCK_POLL_INTERVAL_SEC")
    @classmethod
    def _positive_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("SESSION_LOCK_POLL_INTERVAL_SEC must be positive")
        return value


# Singleton
settings = Settings()
