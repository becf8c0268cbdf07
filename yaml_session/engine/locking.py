"""Advisory file locking (flock)"""

import time
from contextlib import contextmanager
from typing import IO, Iterator, Optional

from yaml_session.core.errors import LockTimeoutError
from yaml_session.core.logging import get_logger

logger = get_logger(__name__)

# Platform-specific file locking
try:
    import fcntl  # Unix/Linux/Mac
    HAS_FCNTL = True
except ImportError:
    HAS_FCNTL = False
    logger.warning("No file locking available on this platform")


DEFAULT_POLL_INTERVAL = 0.05


def _acquire(fh: IO, timeout: Optional[float], poll_interval: float) -> None:
    if timeout is None:
        # blocks until the lock is obtained
        fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
        return

    deadline = time.monotonic() + timeout
    while True:
        try:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
            return
        except BlockingIOError:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise LockTimeoutError(getattr(fh, "name", fh), timeout)
            time.sleep(min(poll_interval, remaining))


@contextmanager
def exclusive_lock(
    fh: IO,
    timeout: Optional[float] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> Iterator[IO]:
    """파일 핸들에 배타적 advisory lock

    Args:
        fh: 열린 파일 객체
        timeout: None이면 무기한 대기, 양수면 초과 시 LockTimeoutError
        poll_interval: timeout 사용 시 재시도 간격

    잠금은 블록 종료 시 해제된다. 파일을 닫아도 해제된다.
    """
    if not HAS_FCNTL:
        yield fh
        return

    _acquire(fh, timeout, poll_interval)
    try:
        yield fh
    finally:
        fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
