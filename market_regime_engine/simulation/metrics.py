"""Summary metrics over a simulated series.

Metrics that cannot be computed (empty or single-day series, zero volatility)
come back as ``None`` with a reason in ``SummaryMetrics.undefined``; no NaN or
infinity ever reaches the dataset.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Sequence, Tuple

from market_regime_engine.exceptions import MetricUndefinedError
from market_regime_engine.mc.generator import GeneratorState, next_draw
from market_regime_engine.schema.dataset import DayRecord, SummaryMetrics, VolatilityRecord
from market_regime_engine.utils.logging import get_logger
from market_regime_engine.utils.numeric import mean, to_fixed

log = get_logger(__name__, component="metrics")

TRADING_DAYS_PER_YEAR = 252
SIGNAL_ACCURACY_CEILING = 85.0
SIGNAL_ACCURACY_SPAN = 20.0


def total_return(prices: Sequence[DayRecord]) -> float:
    """Percent change from the first to the last actual price."""

    if len(prices) < 2:
        raise MetricUndefinedError("total_return needs at least two trading days")
    first, last = prices[0].actual, prices[-1].actual
    if first == 0:
        raise MetricUndefinedError("total_return undefined for a zero starting price")
    return to_fixed((last / first - 1) * 100, 2)


def average_volatility(volatility: Sequence[VolatilityRecord]) -> float:
    if not volatility:
        raise MetricUndefinedError("avg_vol needs at least one trading day")
    return to_fixed(mean(v.vol for v in volatility), 3)


def sharpe_ratio(total_return_pct: float, avg_vol_pct: float) -> float:
    """Simplified annualized ratio: total return over daily vol scaled by sqrt(252)."""

    if avg_vol_pct == 0:
        raise MetricUndefinedError("sharpe undefined for zero average volatility")
    return to_fixed(total_return_pct / 100 / (avg_vol_pct / 100 * math.sqrt(TRADING_DAYS_PER_YEAR)), 2)


def signal_accuracy(state: GeneratorState) -> Tuple[float, GeneratorState]:
    """Cosmetic accuracy figure in [65, 85] drawn from the seeded stream.

    It is not derived from forecast error and must not be read as a backtest
    hit rate.
    """

    draw, state = next_draw(state)
    return to_fixed(SIGNAL_ACCURACY_CEILING - draw * SIGNAL_ACCURACY_SPAN, 1), state


def summarize(
    prices: Sequence[DayRecord],
    volatility: Sequence[VolatilityRecord],
    state: GeneratorState,
) -> Tuple[SummaryMetrics, GeneratorState]:
    undefined: Dict[str, str] = {}

    total: Optional[float] = None
    try:
        total = total_return(prices)
    except MetricUndefinedError as exc:
        undefined["total_return"] = str(exc)

    avg_vol: Optional[float] = None
    try:
        avg_vol = average_volatility(volatility)
    except MetricUndefinedError as exc:
        undefined["avg_vol"] = str(exc)

    accuracy, state = signal_accuracy(state)

    sharpe: Optional[float] = None
    if total is None or avg_vol is None:
        undefined["sharpe"] = "sharpe needs both total_return and avg_vol"
    else:
        try:
            sharpe = sharpe_ratio(total, avg_vol)
        except MetricUndefinedError as exc:
            undefined["sharpe"] = str(exc)

    if undefined:
        log.warning("Metrics not computable", extra={"trading_days": len(prices)})
    metrics = SummaryMetrics(
        total_return=total,
        avg_vol=avg_vol,
        signal_accuracy=accuracy,
        sharpe=sharpe,
        undefined=undefined,
    )
    return metrics, state


def empty_metrics(reason: str) -> SummaryMetrics:
    """Metrics for a range with no trading days: every figure is undefined."""

    return SummaryMetrics(
        total_return=None,
        avg_vol=None,
        signal_accuracy=None,
        sharpe=None,
        undefined={name: reason for name in ("total_return", "avg_vol", "signal_accuracy", "sharpe")},
    )


__all__ = [
    "average_volatility",
    "empty_metrics",
    "sharpe_ratio",
    "signal_accuracy",
    "summarize",
    "total_return",
]
