import threading

from ..hashing import key_to_int64


class StripedLockBackend:
    """
    In-process lock backend built on a fixed array of ``threading.Lock``.

    Each key is hashed onto one stripe, so every caller using the same key
    contends for the same lock while unrelated keys usually proceed in
    parallel.

    Key properties
    --------------
    - Thread-scoped: locks coordinate threads of one process only.
    - Fixed size: the stripe array is allocated once, so acquiring never
      mutates shared structure.
    - Collisions: two distinct keys may share a stripe. That only costs
      parallelism, never correctness, as long as a caller does not hold two
      keys at once (locks are not reentrant).

    Timeout behavior
    ----------------
    - timeout=None:
        Blocks indefinitely until the lock is acquired.

    - timeout=float:
        Waits at most that many seconds, then gives up.
    """

    def __init__(self, stripes: int = 16) -> None:
        if stripes < 1:
            raise ValueError(f"stripes must be >= 1, got {stripes}")
        self._locks = tuple(threading.Lock() for _ in range(stripes))

    @property
    def stripes(self) -> int:
        return len(self._locks)

    def stripe_for(self, key: str) -> int:
        """Index of the stripe guarding ``key``."""
        return key_to_int64(key) % len(self._locks)

    def acquire(self, key: str, timeout: float | None) -> bool:
        """
        Attempt to acquire the stripe lock for the given key.

        Returns
        -------
        bool
            True if the lock was acquired, False if the timeout expired first.
        """
        stripe = self._locks[self.stripe_for(key)]

        if timeout is None:
            return stripe.acquire()

        return stripe.acquire(timeout=timeout)

    def release(self, key: str) -> None:
        """
        Release the stripe lock for the given key.

        Raises RuntimeError (from ``threading.Lock``) if the stripe is not
        currently held.
        """
        self._locks[self.stripe_for(key)].release()
