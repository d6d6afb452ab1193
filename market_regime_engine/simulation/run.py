"""Analysis orchestration: validate, simulate, aggregate, summarize."""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

from market_regime_engine.exceptions import DegenerateRangeError, InvalidRangeError
from market_regime_engine.mc.generator import init_state
from market_regime_engine.schema.dataset import MarketDataset
from market_regime_engine.simulation.aggregate import aggregate
from market_regime_engine.simulation.metrics import empty_metrics, summarize
from market_regime_engine.simulation.price_path import simulate
from market_regime_engine.utils.logging import get_logger
from market_regime_engine.utils.profiling import track_time

log = get_logger(__name__, component="run_analysis")

DateLike = Union[date, str]


def coerce_date(value: DateLike, name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise InvalidRangeError(f"{name} must be an ISO date (YYYY-MM-DD), got {value!r}") from exc


def validate_request(symbol: str, start: DateLike, end: DateLike) -> tuple[date, date]:
    if not isinstance(symbol, str) or not symbol.strip():
        raise InvalidRangeError("symbol is required")
    start_date = coerce_date(start, "start_date")
    end_date = coerce_date(end, "end_date")
    if start_date > end_date:
        raise InvalidRangeError(
            f"start_date {start_date.isoformat()} is after end_date {end_date.isoformat()}"
        )
    return start_date, end_date


def empty_dataset(symbol: str, start: date, end: date, reason: str) -> MarketDataset:
    return MarketDataset(
        symbol=symbol,
        start_date=start,
        end_date=end,
        prices=[],
        returns=[],
        volatility=[],
        regime_summary=[],
        metrics=empty_metrics(reason),
    )


def run_analysis(symbol: str, start: DateLike, end: DateLike) -> MarketDataset:
    """Build the full dataset for ``symbol`` over ``[start, end]``.

    Invalid input raises InvalidRangeError before any simulation. Ranges with no
    trading days (a single date, or only a weekend) return an empty dataset with
    every metric marked undefined.
    """

    start_date, end_date = validate_request(symbol, start, end)
    state = init_state(symbol)

    with track_time("simulate", symbol=symbol):
        try:
            path = simulate(symbol, start_date, end_date, state=state)
        except DegenerateRangeError as exc:
            log.warning(f"Degenerate range, returning empty dataset: {exc}", extra={"symbol": symbol})
            return empty_dataset(symbol, start_date, end_date, str(exc))

    if not path.prices:
        reason = f"{start_date.isoformat()}..{end_date.isoformat()} contains no trading days"
        log.warning(f"Degenerate range, returning empty dataset: {reason}", extra={"symbol": symbol})
        return empty_dataset(symbol, start_date, end_date, reason)

    regime_summary = aggregate(path.returns)
    metrics, _ = summarize(path.prices, path.volatility, path.state)

    dataset = MarketDataset(
        symbol=symbol,
        start_date=start_date,
        end_date=end_date,
        prices=path.prices,
        returns=path.returns,
        volatility=path.volatility,
        regime_summary=regime_summary,
        metrics=metrics,
    )
    log.info("Analysis complete", extra={"symbol": symbol, "trading_days": dataset.trading_days})
    return dataset


__all__ = ["coerce_date", "empty_dataset", "run_analysis", "validate_request"]
