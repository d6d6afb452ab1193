"""Simulated market dataset schema with JSON and DataFrame views."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

import pandas as pd

from market_regime_engine.exceptions import SchemaError
from market_regime_engine.interfaces.regime import Regime


@dataclass(frozen=True, slots=True)
class DayRecord:
    date: date
    actual: float
    forecast: float
    regime: Regime

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "actual": self.actual, "forecast": self.forecast, "regime": self.regime.label}


@dataclass(frozen=True, slots=True)
class ReturnRecord:
    """Daily actual/forecast return, both in percent."""

    date: date
    actual: float
    forecast: float
    regime: Regime

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "actual": self.actual, "forecast": self.forecast, "regime": self.regime.label}


@dataclass(frozen=True, slots=True)
class VolatilityRecord:
    date: date
    vol: float
    regime: Regime

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "vol": self.vol, "regime": self.regime.label}


@dataclass(frozen=True, slots=True)
class RegimeSummary:
    """Per-regime means over the return series.

    ``avg_vol`` is ten times the mean absolute actual return, a dispersion proxy
    rather than the mean of the volatility series.
    """

    name: str
    actual_return: float
    forecast_return: float
    avg_vol: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "actual_return": self.actual_return,
            "forecast_return": self.forecast_return,
            "avg_vol": self.avg_vol,
            "count": self.count,
        }


@dataclass(frozen=True)
class SummaryMetrics:
    """Scalar metrics; ``None`` marks a metric that could not be computed.

    ``signal_accuracy`` is a synthetic draw from the seeded stream, not a
    comparison of forecasts against outcomes.
    """

    total_return: Optional[float]
    avg_vol: Optional[float]
    signal_accuracy: Optional[float]
    sharpe: Optional[float]
    undefined: Dict[str, str] = field(default_factory=dict)
    signal_accuracy_is_synthetic: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_return": self.total_return,
            "avg_vol": self.avg_vol,
            "signal_accuracy": self.signal_accuracy,
            "sharpe": self.sharpe,
            "signal_accuracy_synthetic": self.signal_accuracy_is_synthetic,
        }


def _parse_date(raw: Any) -> date:
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw))
    except ValueError as exc:
        raise SchemaError(f"Invalid ISO date: {raw!r}") from exc


@dataclass(frozen=True)
class MarketDataset:
    symbol: str
    start_date: date
    end_date: date
    prices: List[DayRecord]
    returns: List[ReturnRecord]
    volatility: List[VolatilityRecord]
    regime_summary: List[RegimeSummary]
    metrics: SummaryMetrics

    @property
    def trading_days(self) -> int:
        return len(self.prices)

    @property
    def is_empty(self) -> bool:
        return not self.prices

    @property
    def total_return(self) -> Optional[float]:
        return self.metrics.total_return

    @property
    def avg_vol(self) -> Optional[float]:
        return self.metrics.avg_vol

    @property
    def signal_accuracy(self) -> Optional[float]:
        return self.metrics.signal_accuracy

    @property
    def sharpe(self) -> Optional[float]:
        return self.metrics.sharpe

    @property
    def undefined_metrics(self) -> Dict[str, str]:
        return dict(self.metrics.undefined)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "trading_days": self.trading_days,
            "prices": [r.to_dict() for r in self.prices],
            "returns": [r.to_dict() for r in self.returns],
            "volatility": [r.to_dict() for r in self.volatility],
            "regime_summary": [s.to_dict() for s in self.regime_summary],
            **self.metrics.to_dict(),
            "undefined_metrics": dict(self.metrics.undefined),
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarketDataset":
        try:
            prices = [
                DayRecord(_parse_date(r["date"]), float(r["actual"]), float(r["forecast"]), Regime.from_label(r["regime"]))
                for r in data["prices"]
            ]
            returns = [
                ReturnRecord(_parse_date(r["date"]), float(r["actual"]), float(r["forecast"]), Regime.from_label(r["regime"]))
                for r in data["returns"]
            ]
            volatility = [
                VolatilityRecord(_parse_date(r["date"]), float(r["vol"]), Regime.from_label(r["regime"]))
                for r in data["volatility"]
            ]
            summary = [
                RegimeSummary(
                    name=s["name"],
                    actual_return=float(s["actual_return"]),
                    forecast_return=float(s["forecast_return"]),
                    avg_vol=float(s["avg_vol"]),
                    count=int(s["count"]),
                )
                for s in data["regime_summary"]
            ]
            metrics = SummaryMetrics(
                total_return=data.get("total_return"),
                avg_vol=data.get("avg_vol"),
                signal_accuracy=data.get("signal_accuracy"),
                sharpe=data.get("sharpe"),
                undefined=dict(data.get("undefined_metrics") or {}),
                signal_accuracy_is_synthetic=bool(data.get("signal_accuracy_synthetic", True)),
            )
            return cls(
                symbol=data["symbol"],
                start_date=_parse_date(data["start_date"]),
                end_date=_parse_date(data["end_date"]),
                prices=prices,
                returns=returns,
                volatility=volatility,
                regime_summary=summary,
                metrics=metrics,
            )
        except KeyError as exc:
            raise SchemaError(f"Dataset payload missing field: {exc.args[0]}") from exc
        except (TypeError, ValueError) as exc:
            raise SchemaError(f"Dataset payload has a malformed value: {exc}") from exc

    @classmethod
    def from_json(cls, raw: str) -> "MarketDataset":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"Dataset payload is not valid JSON: {exc}") from exc
        return cls.from_dict(data)

    def to_frames(self) -> Dict[str, pd.DataFrame]:
        """Return the three daily series plus the regime summary as DataFrames."""

        def _frame(rows: List[Dict[str, Any]], columns: List[str]) -> pd.DataFrame:
            frame = pd.DataFrame(rows, columns=["date", *columns])
            frame["date"] = pd.to_datetime(frame["date"])
            return frame.set_index("date")

        return {
            "prices": _frame([r.to_dict() for r in self.prices], ["actual", "forecast", "regime"]),
            "returns": _frame([r.to_dict() for r in self.returns], ["actual", "forecast", "regime"]),
            "volatility": _frame([r.to_dict() for r in self.volatility], ["vol", "regime"]),
            "regimes": pd.DataFrame(
                [s.to_dict() for s in self.regime_summary],
                columns=["name", "actual_return", "forecast_return", "avg_vol", "count"],
            ),
        }


__all__ = [
    "DayRecord",
    "MarketDataset",
    "RegimeSummary",
    "ReturnRecord",
    "SummaryMetrics",
    "VolatilityRecord",
]
