from __future__ import annotations

import structlog

from .exceptions import InsufficientStock
from .inventory import Inventory
from .orders import Order, OrderQueue
from .signals import StopSignal

logger = structlog.get_logger(__name__)


class OrderSystem:
    """
    Inventory plus order queue: the seam customers and the courier share.

    Placing an order is decrement-then-enqueue. Only the decrement is atomic;
    the enqueue happens afterwards because nobody but the placing customer
    acts on the outcome.
    """

    def __init__(self, inventory: Inventory, queue: OrderQueue | None = None) -> None:
        self.inventory = inventory
        self.queue = queue or OrderQueue()

    def place_order(self, customer: str, product: str) -> Order | None:
        """
        Reserve one unit of ``product`` for ``customer`` and queue the order.

        Returns the queued Order, or None when the product is out of stock.
        There is no retry.
        """
        try:
            remaining = self.inventory.take(product, 1)
        except InsufficientStock as e:
            logger.warning(
                "insufficient stock",
                customer=customer,
                product=product,
                available=e.available,
            )
            return None

        order = Order(customer=customer, product=product)
        self.queue.enqueue(order)
        logger.info("order placed", customer=customer, product=product, remaining=remaining)
        return order

    def take_next_order(
        self,
        stop: StopSignal | None = None,
        timeout: float | None = None,
    ) -> Order:
        return self.queue.dequeue_blocking(stop=stop, timeout=timeout)

    def is_queue_empty(self) -> bool:
        return self.queue.is_empty()

    def mark_delivered(self, order: Order) -> None:
        self.queue.task_done()
        logger.debug("order finished", customer=order.customer, product=order.product)

    def wait_until_drained(self, timeout: float | None = None) -> bool:
        return self.queue.wait_drained(timeout)
