from .config import DEFAULT_CONFIG, DispatchConfig
from .coordinator import Coordinator, RunReport, run
from .exceptions import (
    InsufficientStock,
    LockAcquireTimeout,
    OrderCourierError,
    OrderWaitCancelled,
    OrderWaitTimeout,
)
from .inventory import Inventory
from .locking import lock
from .orders import Order, OrderQueue
from .signals import StopSignal
from .system import OrderSystem
from .tasks import Courier, CourierState, Customer

__all__ = [
    "DEFAULT_CONFIG",
    "Coordinator",
    "Courier",
    "CourierState",
    "Customer",
    "DispatchConfig",
    "InsufficientStock",
    "Inventory",
    "LockAcquireTimeout",
    "Order",
    "OrderCourierError",
    "OrderQueue",
    "OrderSystem",
    "OrderWaitCancelled",
    "OrderWaitTimeout",
    "RunReport",
    "StopSignal",
    "lock",
    "run",
]
