"""Fixed-point rounding helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable


def to_fixed(value: float, digits: int) -> float:
    """Round ``value`` to ``digits`` decimals, ties away from zero.

    Rounds the exact binary value of the float (not its shortest repr), which is
    how fixed-point formatting behaves, so ``to_fixed(1.005, 2) == 1.0`` while
    ``to_fixed(0.125, 2) == 0.13``.
    """

    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def running_sum(values: Iterable[float]) -> float:
    """Plain left-to-right float accumulation.

    ``sum()`` uses compensated summation on Python 3.12+, which can shift the
    last bit and therefore a rounded mean.
    """

    total = 0.0
    for value in values:
        total += value
    return total


def mean(values: Iterable[float]) -> float:
    items = list(values)
    if not items:
        raise ValueError("mean of empty sequence")
    return running_sum(items) / len(items)
