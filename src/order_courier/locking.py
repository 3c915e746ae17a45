from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Protocol

from .exceptions import LockAcquireTimeout


class LockBackend(Protocol):
    """
    Protocol describing the minimal backend interface.

    Anything with per-key acquire/release works; the inventory only ever
    talks to this interface.
    """
    def acquire(self, key: str, timeout: float | None) -> bool: ...
    def release(self, key: str) -> None: ...


@contextmanager
def lock(
    key: str,
    timeout: float | None = 3.0,
    *,
    backend: LockBackend,
) -> Iterator[None]:
    """
    Hold the backend lock for ``key`` for the duration of the block.

    Parameters
    ----------
    key : str
        Lock identifier derived from business context, e.g. "stock:Pizza".

    timeout : float | None, default=3.0
        Maximum time (in seconds) to wait for acquisition.

        - None: block indefinitely.
        - float: raise LockAcquireTimeout if exceeded.

    backend : LockBackend
        Backend that owns the actual locks. There is no process-wide
        default; callers pass the backend they were constructed with.

    Raises
    ------
    LockAcquireTimeout
        If the lock cannot be acquired within the timeout.

    Example
    -------
    >>> with lock("stock:Pizza", backend=StripedLockBackend()):
    ...     decrement()
    """
    acquired = backend.acquire(key, timeout)

    if not acquired:
        raise LockAcquireTimeout(
            f"Failed to acquire lock for key='{key}' within timeout={timeout}s"
        )

    try:
        yield
    finally:
        backend.release(key)
