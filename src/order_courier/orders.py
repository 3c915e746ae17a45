from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass

from .exceptions import OrderWaitCancelled, OrderWaitTimeout
from .signals import StopSignal


@dataclass(frozen=True)
class Order:
    """A unit of stock that was successfully reserved for a customer."""

    customer: str
    product: str


class OrderQueue:
    """
    Unbounded FIFO of pending orders with a blocking, cancellable dequeue.

    Producers never block. The consumer parks on a condition variable until
    an order arrives, its stop signal fires or its timeout runs out.

    Alongside the items the queue keeps a count of orders that were enqueued
    but not yet reported finished through ``task_done()``, which is what
    ``wait_drained()`` waits on.
    """

    def __init__(self) -> None:
        self._items: deque[Order] = deque()
        self._mutex = threading.Lock()
        self._not_empty = threading.Condition(self._mutex)
        self._all_done = threading.Condition(self._mutex)
        self._unfinished = 0

    def __len__(self) -> int:
        with self._mutex:
            return len(self._items)

    def enqueue(self, order: Order) -> None:
        with self._mutex:
            self._items.append(order)
            self._unfinished += 1
            self._not_empty.notify()

    def dequeue_blocking(
        self,
        stop: StopSignal | None = None,
        timeout: float | None = None,
    ) -> Order:
        """
        Remove and return the oldest order, waiting for one if necessary.

        Parameters
        ----------
        stop : StopSignal | None
            Checked before every wait and on every wakeup. Once cancelled it
            wins over queued orders: nothing more is handed out.

        timeout : float | None
            None waits indefinitely.

        Raises
        ------
        OrderWaitCancelled
            If ``stop`` is (or becomes) cancelled.
        OrderWaitTimeout
            If ``timeout`` expires with the queue still empty.
        """
        unregister = stop.register(self._wake) if stop is not None else None
        deadline = None if timeout is None else time.monotonic() + timeout

        try:
            with self._not_empty:
                while True:
                    if stop is not None and stop.cancelled:
                        raise OrderWaitCancelled("Order wait cancelled by stop signal")

                    if self._items:
                        return self._items.popleft()

                    if deadline is None:
                        self._not_empty.wait()
                        continue

                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise OrderWaitTimeout(
                            f"No order arrived within timeout={timeout}s"
                        )
                    self._not_empty.wait(remaining)
        finally:
            if unregister is not None:
                unregister()

    def is_empty(self) -> bool:
        """Racy snapshot; fine for polling, not for correctness decisions."""
        with self._mutex:
            return not self._items

    def task_done(self) -> None:
        """Mark one previously dequeued order as fully handled."""
        with self._mutex:
            if self._unfinished <= 0:
                raise ValueError("task_done() called more times than orders enqueued")
            self._unfinished -= 1
            if self._unfinished == 0:
                self._all_done.notify_all()

    def wait_drained(self, timeout: float | None = None) -> bool:
        """
        Wait until every enqueued order has been marked done.

        Returns False if the timeout expired first.
        """
        with self._all_done:
            return self._all_done.wait_for(lambda: self._unfinished == 0, timeout)

    def _wake(self) -> None:
        with self._not_empty:
            self._not_empty.notify_all()
