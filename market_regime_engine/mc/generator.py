"""Seeded linear congruential draw stream.

The stream is fully determined by the symbol: the seed is the sum of the
character codes, so anagrams ("AB"/"BA") and any other symbols with equal code
sums share a stream. State is an immutable value threaded through every call;
nothing here keeps module-level randomness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


@dataclass(frozen=True, slots=True)
class GeneratorState:
    value: int


def seed_from_symbol(symbol: str) -> int:
    return sum(ord(ch) for ch in symbol)


def init_state(symbol: str) -> GeneratorState:
    return GeneratorState(seed_from_symbol(symbol))


def next_draw(state: GeneratorState) -> Tuple[float, GeneratorState]:
    """Advance the recurrence once and return ``(draw in [0, 1), new_state)``."""

    value = (state.value * MULTIPLIER + INCREMENT) % MODULUS
    return value / MODULUS, GeneratorState(value)


def take(state: GeneratorState, n: int) -> Tuple[Tuple[float, ...], GeneratorState]:
    """Draw ``n`` consecutive values."""

    draws = []
    for _ in range(n):
        draw, state = next_draw(state)
        draws.append(draw)
    return tuple(draws), state


__all__ = ["GeneratorState", "MODULUS", "init_state", "next_draw", "seed_from_symbol", "take"]
