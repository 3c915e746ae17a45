from __future__ import annotations

import threading
from dataclasses import dataclass, field

import structlog

from .backends.striped import StripedLockBackend
from .config import DEFAULT_CONFIG, DispatchConfig
from .inventory import Inventory
from .orders import Order
from .system import OrderSystem
from .tasks import Courier, Customer

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RunReport:
    """Outcome of one run."""

    placed: tuple[Order, ...]
    rejected: tuple[tuple[str, str], ...]
    delivered: tuple[Order, ...]
    final_stock: dict[str, int] = field(default_factory=dict)
    interrupted: bool = False


class Coordinator:
    """
    Main flow: customers first, then the courier, then an orderly shutdown.

    A KeyboardInterrupt that arrives while waiting on a join or on the drain
    only abandons that particular wait. It is remembered in ``interrupted``,
    the remaining steps still run (with joins capped by
    ``interrupted_join_timeout``) and the final message is always logged.
    """

    def __init__(self, config: DispatchConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.inventory = Inventory(
            config.seed_stock,
            backend=StripedLockBackend(config.lock_stripes),
        )
        self.system = OrderSystem(self.inventory)
        self.customers = [
            Customer(self.system, name, product) for name, product in config.customers
        ]
        self.courier = Courier(self.system)
        self.interrupted = False

    def run(self) -> RunReport:
        customer_threads = [
            threading.Thread(target=c.run, name=f"customer-{c.name}")
            for c in self.customers
        ]
        courier_thread = threading.Thread(
            target=self.courier.run, name=f"courier-{self.courier.name}"
        )

        for t in customer_threads:
            t.start()
        for t in customer_threads:
            self._join(t, "customer")

        courier_thread.start()
        self._wait_drained(courier_thread)

        logger.info("stopping courier")
        self.courier.stop()
        self._join(courier_thread, "courier", self.config.courier_join_timeout)

        report = RunReport(
            placed=tuple(c.order for c in self.customers if c.order is not None),
            rejected=tuple((c.name, c.product) for c in self.customers if not c.placed),
            delivered=tuple(self.courier.delivered),
            final_stock=self.inventory.snapshot(),
            interrupted=self.interrupted,
        )
        logger.info(
            "system finished",
            delivered=len(report.delivered),
            stock=report.final_stock,
            interrupted=report.interrupted,
        )
        return report

    def _join(
        self,
        thread: threading.Thread,
        what: str,
        timeout: float | None = None,
    ) -> None:
        if self.interrupted:
            timeout = self._capped(timeout)

        try:
            thread.join(timeout)
        except KeyboardInterrupt:
            logger.warning("interrupted while waiting", waiting_for=what, thread=thread.name)
            self.interrupted = True
            return

        if thread.is_alive():
            logger.warning("gave up waiting", waiting_for=what, thread=thread.name)

    def _wait_drained(self, courier_thread: threading.Thread) -> None:
        if self.interrupted:
            return

        try:
            while not self.system.wait_until_drained(self.config.drain_poll_interval):
                if not courier_thread.is_alive():
                    logger.warning(
                        "courier exited early",
                        thread=courier_thread.name,
                        pending=len(self.system.queue),
                    )
                    return
                logger.debug("waiting for deliveries", pending=len(self.system.queue))
        except KeyboardInterrupt:
            logger.warning("interrupted while waiting", waiting_for="deliveries")
            self.interrupted = True

    def _capped(self, timeout: float | None) -> float:
        cap = self.config.interrupted_join_timeout
        return cap if timeout is None else min(timeout, cap)


def run(config: DispatchConfig = DEFAULT_CONFIG) -> RunReport:
    return Coordinator(config).run()
