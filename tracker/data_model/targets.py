# data_model/targets.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

DEFAULT_FINANCING_DIVISOR = 10.0

DEFAULT_CARS: Tuple[Tuple[str, float], ...] = (
    ("Audi R8 #1", 160000.0),
    ("Audi R8 #2", 160000.0),
    ("AMG GT R", 170000.0),
)


@dataclass(frozen=True)
class Target:
    label: str
    cost: float
    price: float = 0.0


def financed_targets(
    cars: Iterable[Tuple[str, float]] = DEFAULT_CARS,
    divisor: float = DEFAULT_FINANCING_DIVISOR,
) -> Tuple[Target, ...]:
    """Build the ordered target list; each car needs ``price / divisor`` saved."""
    if divisor <= 0:
        raise ValueError("Financing divisor must be positive.")
    targets: List[Target] = []
    for label, price in cars:
        targets.append(Target(label=label, cost=float(price) / divisor, price=float(price)))
    return tuple(targets)
