"""Error Codes and Exceptions

Not found는 에러가 아님: retrieve()는 None을 반환
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class ErrorCategory(str, Enum):
    """에러 카테고리"""
    SESSION = "SESSION"    # E1xxx: 세션 식별자
    STORAGE = "STORAGE"    # E2xxx: 파일시스템 / 잠금
    FORMAT = "FORMAT"      # E21xx: YAML 직렬화


class ErrorCode(str, Enum):
    """에러 코드"""

    # === E1xxx: Session ===
    SESSION_INVALID_ID = "E1001"

    # === E2xxx: Storage ===
    DIRECTORY_CREATION_FAILED = "E2001"
    FILE_IO_FAILED = "E2002"
    LOCK_TIMEOUT = "E2003"

    # === E21xx: Format ===
    DESERIALIZATION_FAILED = "E2101"
    SERIALIZATION_FAILED = "E2102"


# Error Code -> Message mapping
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.SESSION_INVALID_ID: "세션 ID를 파일 이름으로 사용할 수 없습니다.",
    ErrorCode.DIRECTORY_CREATION_FAILED: "세션 디렉토리를 생성할 수 없습니다.",
    ErrorCode.FILE_IO_FAILED: "세션 파일 입출력에 실패했습니다.",
    ErrorCode.LOCK_TIMEOUT: "세션 파일 잠금 대기 시간이 초과되었습니다.",
    ErrorCode.DESERIALIZATION_FAILED: "세션 파일 내용이 올바른 YAML 세션이 아닙니다.",
    ErrorCode.SERIALIZATION_FAILED: "세션을 YAML로 직렬화할 수 없습니다.",
}


class ErrorDetail(BaseModel):
    """에러 상세 (호스트 애플리케이션 응답용)"""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    session_id: Optional[str] = None


class SessionStoreError(Exception):
    """Base Session Store Exception"""

    def __init__(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        session_id: Optional[str] = None,
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Unknown error")
        self.details = details
        self.session_id = session_id
        super().__init__(self.message)

    def to_detail(self) -> ErrorDetail:
        """Convert to response format"""
        return ErrorDetail(
            code=self.code.value,
            message=self.message,
            details=self.details,
            session_id=self.session_id,
        )


class InvalidSessionIdError(SessionStoreError):
    """Session id is not a usable filename stem"""

    def __init__(self, session_id: Any, message: Optional[str] = None):
        super().__init__(
            ErrorCode.SESSION_INVALID_ID,
            message,
            details={"session_id": repr(session_id)},
        )


class DirectoryCreationError(SessionStoreError):
    """Session directory is absent and cannot be created"""

    def __init__(self, path: Any, reason: Optional[str] = None):
        super().__init__(
            ErrorCode.DIRECTORY_CREATION_FAILED,
            f"session_dir {path} cannot be created",
            details={"path": str(path), "reason": reason},
        )


class SessionIOError(SessionStoreError):
    """Open / read / write / close / delete failure"""

    def __init__(
        self,
        path: Any,
        operation: str,
        reason: Optional[str] = None,
        session_id: Optional[str] = None,
        code: ErrorCode = ErrorCode.FILE_IO_FAILED,
    ):
        super().__init__(
            code,
            f"Can't {operation} '{path}': {reason}" if reason else None,
            details={"path": str(path), "operation": operation},
            session_id=session_id,
        )
        self.path = path
        self.operation = operation


class LockTimeoutError(SessionIOError):
    """Exclusive lock not obtained within the configured timeout"""

    def __init__(self, path: Any, timeout: float, session_id: Optional[str] = None):
        super().__init__(
            path,
            "lock",
            f"timed out after {timeout}s",
            session_id=session_id,
            code=ErrorCode.LOCK_TIMEOUT,
        )
        self.timeout = timeout


class DeserializationError(SessionStoreError):
    """Session file contents are not a valid session record"""

    def __init__(self, path: Any, reason: Optional[str] = None, session_id: Optional[str] = None):
        super().__init__(
            ErrorCode.DESERIALIZATION_FAILED,
            details={"path": str(path), "reason": reason},
            session_id=session_id,
        )
        self.path = path


class SerializationError(SessionStoreError):
    """Session record cannot be represented as YAML"""

    def __init__(self, session_id: Optional[str] = None, reason: Optional[str] = None):
        super().__init__(
            ErrorCode.SERIALIZATION_FAILED,
            details={"reason": reason},
            session_id=session_id,
        )
