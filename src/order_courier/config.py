from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class DispatchConfig:
    """
    Fixed parameters of one run.

    - seed_stock: initial units per product
    - customers: (name, product) pairs, one order each
    - drain_poll_interval: seconds between "all delivered?" checks
    - courier_join_timeout: how long to wait for the courier after stopping
      it (None waits until it exits)
    - interrupted_join_timeout: cap on every remaining join once the run has
      been interrupted
    - lock_stripes: size of the inventory's lock array
    """
    seed_stock: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({"Pizza": 10, "Burger": 15})
    )
    customers: tuple[tuple[str, str], ...] = (("Alice", "Pizza"), ("Bob", "Burger"))
    drain_poll_interval: float = 0.1
    courier_join_timeout: float | None = None
    interrupted_join_timeout: float = 1.0
    lock_stripes: int = 16


DEFAULT_CONFIG = DispatchConfig()
