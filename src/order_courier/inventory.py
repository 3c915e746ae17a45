from __future__ import annotations

from typing import Mapping

from .backends.striped import StripedLockBackend
from .exceptions import InsufficientStock
from .locking import LockBackend, lock


def _stock_key(product: str) -> str:
    return f"stock:{product}"


class Inventory:
    """
    Thread-safe mapping of product name to remaining units.

    Every read and write of a product's count happens while holding that
    product's lock ("stock:<product>"), so a check-then-decrement is one
    atomic step and readers never see a half-applied update. The product set
    is fixed at construction; unknown products simply have zero stock.

    Parameters
    ----------
    stock : Mapping[str, int]
        Seed counts. Copied; later changes to the mapping are not seen.

    backend : LockBackend | None
        Lock backend guarding the entries. Defaults to a private
        StripedLockBackend, so two inventories never contend.

    lock_timeout : float | None, default=None
        Passed to every lock acquisition. None blocks indefinitely.
    """

    def __init__(
        self,
        stock: Mapping[str, int],
        *,
        backend: LockBackend | None = None,
        lock_timeout: float | None = None,
    ) -> None:
        for product, count in stock.items():
            if count < 0:
                raise ValueError(
                    f"stock for product='{product}' must be >= 0, got {count}"
                )

        self._stock: dict[str, int] = dict(stock)
        self._backend = backend or StripedLockBackend()
        self._lock_timeout = lock_timeout

    @property
    def products(self) -> tuple[str, ...]:
        return tuple(self._stock)

    def take(self, product: str, amount: int = 1) -> int:
        """
        Remove ``amount`` units of ``product`` and return what is left.

        Raises
        ------
        InsufficientStock
            If fewer than ``amount`` units remain (unknown products have 0).
            Stock is left unchanged.
        ValueError
            If ``amount`` is not a positive integer.
        """
        if amount < 1:
            raise ValueError(f"amount must be >= 1, got {amount}")

        if product not in self._stock:
            raise InsufficientStock(product, amount, 0)

        with lock(_stock_key(product), self._lock_timeout, backend=self._backend):
            available = self._stock[product]
            if available < amount:
                raise InsufficientStock(product, amount, available)

            self._stock[product] = available - amount
            return available - amount

    def decrement_if_available(self, product: str, amount: int = 1) -> bool:
        """
        Atomically subtract ``amount`` if at least that much is in stock.

        Returns True when the units were taken, False (stock untouched)
        otherwise.
        """
        try:
            self.take(product, amount)
        except InsufficientStock:
            return False
        return True

    def current_stock(self, product: str) -> int:
        if product not in self._stock:
            return 0

        with lock(_stock_key(product), self._lock_timeout, backend=self._backend):
            return self._stock[product]

    def snapshot(self) -> dict[str, int]:
        """
        Copy of every product's count.

        Each entry is read under its own lock; the snapshot as a whole is not
        one atomic read across products.
        """
        return {product: self.current_stock(product) for product in self._stock}
