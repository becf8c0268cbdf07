"""SessionRecord Model

id 외의 필드는 호출자가 자유롭게 정의 (extra="allow")
"""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from yaml_session.core.errors import InvalidSessionIdError

_FORBIDDEN_IDS = {".", ".."}
_FORBIDDEN_CHARS = ("/", "\\", "\0")


def new_session_id() -> str:
    return uuid.uuid4().hex


def validate_session_id(session_id: Any) -> str:
    """파일 이름(stem)으로 쓸 수 있는 ID인지 검사

    Raises:
        InvalidSessionIdError: 빈 문자열, 경로 구분자 포함, "." / ".."
    """
    if not isinstance(session_id, str) or not session_id:
        raise InvalidSessionIdError(session_id)
    if session_id in _FORBIDDEN_IDS or any(c in session_id for c in _FORBIDDEN_CHARS):
        raise InvalidSessionIdError(session_id)
    return session_id


class SessionRecord(BaseModel):
    """세션 레코드

    저장소는 직렬화된 형태만 읽고 쓴다. 세션 데이터의 의미는 호출자 몫.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=new_session_id)

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any) -> str:
        return validate_session_id(value)

    @property
    def session_data(self) -> dict[str, Any]:
        """id를 제외한 세션 데이터

        모델 속성과 이름이 겹치는 키(model_config 등)도 여기서는 항상 읽을 수 있다.
        """
        return dict(self.model_extra or {})

    def to_mapping(self) -> dict[str, Any]:
        """YAML로 쓸 매핑 (id가 첫 번째 키)"""
        return self.model_dump()
