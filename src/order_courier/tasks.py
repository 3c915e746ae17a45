from __future__ import annotations

import enum
import threading
from typing import Callable

import structlog

from .exceptions import OrderWaitCancelled
from .orders import Order
from .signals import StopSignal
from .system import OrderSystem

logger = structlog.get_logger(__name__)

DeliveryCallback = Callable[[Order], None]


class Customer:
    """Places exactly one order for itself, then ends. No retries."""

    def __init__(self, system: OrderSystem, name: str, product: str) -> None:
        self.system = system
        self.name = name
        self.product = product
        self.order: Order | None = None

    @property
    def placed(self) -> bool:
        return self.order is not None

    def run(self) -> None:
        self.order = self.system.place_order(self.name, self.product)


class CourierState(enum.Enum):
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class Courier:
    """
    Single consumer that delivers orders until told to stop.

    Stopping has two parts: the state flag, checked before every dequeue,
    and the stop signal, which wakes a dequeue that is already parked.
    ``stop()`` always sets the flag first. Orders still queued once the
    courier has stopped are abandoned.
    """

    def __init__(
        self,
        system: OrderSystem,
        name: str = "courier",
        on_delivery: DeliveryCallback | None = None,
    ) -> None:
        self.system = system
        self.name = name
        self.on_delivery = on_delivery
        self.stop_signal = StopSignal()
        self.delivered: list[Order] = []
        self._state = CourierState.RUNNING
        self._state_lock = threading.Lock()

    @property
    def state(self) -> CourierState:
        with self._state_lock:
            return self._state

    def stop(self) -> None:
        with self._state_lock:
            if self._state is CourierState.RUNNING:
                self._state = CourierState.STOPPING
        self.stop_signal.cancel()

    def run(self) -> None:
        try:
            while self.state is CourierState.RUNNING:
                try:
                    order = self.system.take_next_order(stop=self.stop_signal)
                except OrderWaitCancelled:
                    logger.info("courier interrupted", courier=self.name)
                    break

                self._deliver(order)
        finally:
            with self._state_lock:
                self._state = CourierState.STOPPED

        logger.info(
            "courier stopped",
            courier=self.name,
            delivered=len(self.delivered),
            abandoned=len(self.system.queue),
        )

    def _deliver(self, order: Order) -> None:
        logger.info(
            "order delivered",
            courier=self.name,
            customer=order.customer,
            product=order.product,
        )
        self.delivered.append(order)
        try:
            if self.on_delivery is not None:
                self.on_delivery(order)
        finally:
            self.system.mark_delivered(order)
