import threading

import pytest

from order_courier.backends.striped import StripedLockBackend
from order_courier.exceptions import InsufficientStock, LockAcquireTimeout
from order_courier.inventory import Inventory


def test_decrement_reduces_stock():
    inv = Inventory({"Pizza": 10})

    assert inv.decrement_if_available("Pizza") is True
    assert inv.decrement_if_available("Pizza", 3) is True
    assert inv.current_stock("Pizza") == 6


def test_decrement_fails_and_leaves_stock_when_short():
    inv = Inventory({"Pizza": 2})

    assert inv.decrement_if_available("Pizza", 3) is False
    assert inv.current_stock("Pizza") == 2


def test_stock_never_goes_negative():
    inv = Inventory({"Pizza": 3})

    outcomes = [inv.decrement_if_available("Pizza") for _ in range(5)]

    assert outcomes == [True, True, True, False, False]
    assert inv.current_stock("Pizza") == 0


def test_unknown_product_is_zero_stock():
    inv = Inventory({"Pizza": 1})

    assert inv.current_stock("Sushi") == 0
    assert inv.decrement_if_available("Sushi") is False


def test_take_returns_remaining():
    inv = Inventory({"Burger": 15})

    assert inv.take("Burger") == 14
    assert inv.take("Burger", 4) == 10


def test_take_raises_with_details():
    inv = Inventory({"Pizza": 0})

    with pytest.raises(InsufficientStock) as excinfo:
        inv.take("Pizza")

    assert excinfo.value.product == "Pizza"
    assert excinfo.value.requested == 1
    assert excinfo.value.available == 0
    assert excinfo.value.code == "insufficient_stock"
    assert inv.current_stock("Pizza") == 0


@pytest.mark.parametrize("amount", [0, -1])
def test_non_positive_amount_rejected(amount):
    inv = Inventory({"Pizza": 5})

    with pytest.raises(ValueError):
        inv.decrement_if_available("Pizza", amount)


def test_negative_seed_rejected():
    with pytest.raises(ValueError):
        Inventory({"Pizza": -1})


def test_seed_mapping_is_copied():
    seed = {"Pizza": 10, "Burger": 15}
    inv = Inventory(seed)
    seed["Pizza"] = 0

    assert inv.current_stock("Pizza") == 10
    assert inv.products == ("Pizza", "Burger")
    assert inv.snapshot() == {"Pizza": 10, "Burger": 15}


def test_lock_timeout_propagates():
    be = StripedLockBackend()
    inv = Inventory({"Pizza": 1}, backend=be, lock_timeout=0.05)

    be.acquire("stock:Pizza", None)
    try:
        with pytest.raises(LockAcquireTimeout):
            inv.decrement_if_available("Pizza")
    finally:
        be.release("stock:Pizza")

    assert inv.current_stock("Pizza") == 1


def test_concurrent_decrements_never_oversell():
    """K racing customers against S < K units: exactly S succeed."""
    stock, customers = 25, 100
    inv = Inventory({"Pizza": stock})
    barrier = threading.Barrier(customers)
    outcomes: list[bool] = []
    outcomes_lock = threading.Lock()

    def buy() -> None:
        barrier.wait(timeout=5.0)
        ok = inv.decrement_if_available("Pizza")
        with outcomes_lock:
            outcomes.append(ok)

    threads = [threading.Thread(target=buy) for _ in range(customers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5.0)

    assert len(outcomes) == customers
    assert outcomes.count(True) == stock
    assert outcomes.count(False) == customers - stock
    assert inv.current_stock("Pizza") == 0


def test_concurrent_decrements_without_failures_are_all_counted():
    inv = Inventory({"Burger": 1000})

    def buy() -> None:
        for _ in range(50):
            assert inv.decrement_if_available("Burger")

    threads = [threading.Thread(target=buy) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5.0)

    assert inv.current_stock("Burger") == 1000 - 8 * 50
