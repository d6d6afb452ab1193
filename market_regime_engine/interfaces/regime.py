"""Market regime variants and the fixed calendar schedule that assigns them.

A regime scales the base drift and volatility of the simulated series. The
schedule is a pure function of a day's fractional position in the requested
range; simulated values never feed back into it.
"""

from __future__ import annotations

from enum import Enum

from market_regime_engine.exceptions import SchemaError


class Regime(Enum):
    """Named regime with its (volatility multiplier, return multiplier)."""

    BULL = ("Bull", 1.0, 1.4)
    VOLATILE = ("Volatile", 2.2, -0.3)
    BEAR = ("Bear", 1.6, -1.2)
    RECOVERY = ("Recovery", 1.2, 0.8)

    def __init__(self, label: str, vol_multiplier: float, return_multiplier: float) -> None:
        self.label = label
        self.vol_multiplier = vol_multiplier
        self.return_multiplier = return_multiplier

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_label(cls, label: str) -> "Regime":
        for regime in cls:
            if regime.label == label:
                return regime
        available = ", ".join(r.label for r in cls)
        raise SchemaError(f"Unknown regime '{label}'. Available: {available}")


# (upper bound on progress, regime); anything at or beyond the last bound is Bull again
SCHEDULE = (
    (0.25, Regime.BULL),
    (0.45, Regime.VOLATILE),
    (0.65, Regime.BEAR),
    (0.80, Regime.RECOVERY),
)
TAIL_REGIME = Regime.BULL


def regime_for(progress: float) -> Regime:
    """Map calendar progress in [0, 1] to a regime."""

    for bound, regime in SCHEDULE:
        if progress < bound:
            return regime
    return TAIL_REGIME


__all__ = ["Regime", "SCHEDULE", "regime_for"]
