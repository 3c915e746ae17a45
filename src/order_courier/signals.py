from __future__ import annotations

import threading
from typing import Callable

WakeCallback = Callable[[], None]


class StopSignal:
    """
    One-shot cancellation token shared between a task and whoever stops it.

    ``cancel()`` sets the flag before running the wake callbacks. A waiter
    that re-checks ``cancelled`` under its own lock after every wakeup
    therefore cannot miss the signal: either it sees the flag before parking,
    or the callback reaches it while parked.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._mutex = threading.Lock()
        self._callbacks: list[WakeCallback] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        with self._mutex:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = list(self._callbacks)

        for callback in callbacks:
            callback()

    def register(self, callback: WakeCallback) -> Callable[[], None]:
        """
        Run ``callback`` when the signal is cancelled.

        If the signal has already fired, the callback runs right away.
        Returns a function that unregisters the callback.
        """
        with self._mutex:
            fired = self._event.is_set()
            if not fired:
                self._callbacks.append(callback)

        if fired:
            callback()

        def unregister() -> None:
            with self._mutex:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unregister
