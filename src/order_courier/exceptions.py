"""
Exception hierarchy for order_courier.

Catch `OrderCourierError` to handle every failure raised by the package, or
one of the subclasses when only a specific outcome matters (for example
`InsufficientStock` when placing orders).
"""


class OrderCourierError(Exception):
    """
    Base exception for all order_courier errors.

    Example
    -------
    >>> try:
    ...     inventory.take("Pizza")
    ... except OrderCourierError:
    ...     handle_failure()
    """

    #: Stable error code for programmatic handling.
    code: str = "order_courier_error"

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = "An unspecified order_courier error occurred."
        super().__init__(message)


class LockAcquireTimeout(OrderCourierError):
    """
    Raised when a lock cannot be acquired within the specified timeout.

    Only reachable when a finite timeout is configured; inventory locks block
    indefinitely by default.
    """

    code: str = "lock_acquire_timeout"


class InsufficientStock(OrderCourierError):
    """
    Raised when a product does not have enough units left.

    This is an expected business outcome, not a fault: the order is simply
    not created and the stock stays untouched.
    """

    code: str = "insufficient_stock"

    def __init__(self, product: str, requested: int, available: int) -> None:
        self.product = product
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product='{product}': "
            f"requested={requested}, available={available}"
        )


class OrderWaitCancelled(OrderCourierError):
    """
    Raised out of a blocking dequeue when the caller's stop signal fires.

    Consumers treat this as a request to exit gracefully.
    """

    code: str = "order_wait_cancelled"


class OrderWaitTimeout(OrderCourierError):
    """Raised when a blocking dequeue with a finite timeout gets nothing."""

    code: str = "order_wait_timeout"
