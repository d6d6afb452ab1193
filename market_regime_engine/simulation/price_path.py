"""Sequential price path simulator.

Walks calendar days from start to end inclusive, skipping weekends. Each
trading day draws an actual return and a forecast return from the seeded
stream; the actual price compounds across days, so the path is a fold and
cannot be sampled day-by-day out of order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterator, List, Optional

from market_regime_engine.exceptions import DegenerateRangeError
from market_regime_engine.interfaces.regime import regime_for
from market_regime_engine.mc.generator import GeneratorState, init_state, next_draw, take
from market_regime_engine.schema.dataset import DayRecord, ReturnRecord, VolatilityRecord
from market_regime_engine.utils.logging import get_logger
from market_regime_engine.utils.numeric import to_fixed

log = get_logger(__name__, component="price_path")

WEEKEND = {5, 6}  # date.weekday(): Saturday, Sunday

BASE_RETURN = 0.0004
BASE_RETURN_SPREAD = 0.0006
BASE_VOL = 0.012
BASE_VOL_SPREAD = 0.008
BASE_PRICE = 100.0
BASE_PRICE_SPREAD = 200.0

FORECAST_DRIFT_SHRINK = 0.85
FORECAST_NOISE_CENTER = 0.48  # slightly below 0.5: forecasts lean optimistic
FORECAST_NOISE_SCALE = 1.5


@dataclass
class SimulatedPath:
    prices: List[DayRecord] = field(default_factory=list)
    returns: List[ReturnRecord] = field(default_factory=list)
    volatility: List[VolatilityRecord] = field(default_factory=list)
    state: Optional[GeneratorState] = None


def calendar_days(start: date, end: date) -> Iterator[tuple[int, date]]:
    for i in range((end - start).days + 1):
        yield i, start + timedelta(days=i)


def is_trading_day(day: date) -> bool:
    return day.weekday() not in WEEKEND


def trading_days(start: date, end: date) -> List[date]:
    """Weekday dates in ``[start, end]``."""

    return [day for _, day in calendar_days(start, end) if is_trading_day(day)]


def calendar_progress(index: int, total_days: int) -> float:
    if total_days <= 0:
        raise DegenerateRangeError("zero-length range has no calendar progress")
    return index / total_days


def simulate(symbol: str, start: date, end: date, state: GeneratorState | None = None) -> SimulatedPath:
    """Simulate actual and forecast prices for every trading day in the range.

    Raises DegenerateRangeError when ``start == end``; the single-point range
    has no span to place regimes on.
    """

    total_days = (end - start).days
    if total_days <= 0:
        raise DegenerateRangeError(f"{start.isoformat()}..{end.isoformat()} spans zero calendar days")

    if state is None:
        state = init_state(symbol)
    (d_return, d_vol, d_price), state = take(state, 3)
    base_return = BASE_RETURN + (d_return - 0.5) * BASE_RETURN_SPREAD
    base_vol = BASE_VOL + d_vol * BASE_VOL_SPREAD
    price = BASE_PRICE + d_price * BASE_PRICE_SPREAD

    path = SimulatedPath()
    for i, day in calendar_days(start, end):
        if not is_trading_day(day):
            continue
        regime = regime_for(calendar_progress(i, total_days))
        drift = base_return * regime.return_multiplier
        vol = base_vol * regime.vol_multiplier

        draw, state = next_draw(state)
        ret = drift + (draw - 0.5) * vol * 2
        price *= 1 + ret

        draw, state = next_draw(state)
        forecast_ret = drift * FORECAST_DRIFT_SHRINK + (draw - FORECAST_NOISE_CENTER) * vol * FORECAST_NOISE_SCALE
        # forecast price is anchored on the realized price, not a separate path
        forecast_price = price * (1 + forecast_ret - ret)

        path.prices.append(DayRecord(day, to_fixed(price, 2), to_fixed(forecast_price, 2), regime))
        path.returns.append(ReturnRecord(day, to_fixed(ret * 100, 3), to_fixed(forecast_ret * 100, 3), regime))
        path.volatility.append(VolatilityRecord(day, to_fixed(vol * 100, 3), regime))

    path.state = state
    log.debug(
        "Simulated price path",
        extra={"symbol": symbol, "trading_days": len(path.prices)},
    )
    return path


__all__ = ["SimulatedPath", "calendar_progress", "is_trading_day", "simulate", "trading_days"]
