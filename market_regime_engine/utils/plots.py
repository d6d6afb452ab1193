"""
Chart rendering for a simulated dataset.

Three stacked panels share the date axis:
1. Price: actual vs forecast
2. Daily returns: actual vs forecast around a zero line
3. Volatility exposure bars

Regime segments are shaded behind every panel. Only every ``stride``-th day is
drawn, matching the thinned series shown in the interactive charts.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import matplotlib.dates as mdates
import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from market_regime_engine.exceptions import SchemaError
from market_regime_engine.interfaces.regime import Regime
from market_regime_engine.schema.dataset import DayRecord, MarketDataset
from market_regime_engine.utils.logging import get_logger

log = get_logger(__name__, component="plots")

REGIME_COLORS: Dict[Regime, str] = {
    Regime.BULL: "#00d4aa",
    Regime.VOLATILE: "#f5a623",
    Regime.BEAR: "#ff4d6d",
    Regime.RECOVERY: "#7b8cde",
}


def regime_segments(prices: Sequence[DayRecord]) -> List[Tuple[int, int, Regime]]:
    """Contiguous ``(first_index, last_index, regime)`` runs over the daily series."""

    segments: List[Tuple[int, int, Regime]] = []
    for idx, record in enumerate(prices):
        if segments and segments[-1][2] is record.regime:
            first, _, regime = segments[-1]
            segments[-1] = (first, idx, regime)
        else:
            segments.append((idx, idx, record.regime))
    return segments


def build_figure(dataset: MarketDataset, stride: int = 3) -> Figure:
    if dataset.is_empty:
        raise SchemaError("Cannot plot a dataset with no trading days")
    if stride <= 0:
        raise ValueError("stride must be positive")

    idx = np.arange(0, dataset.trading_days, stride)
    dates = np.asarray(mdates.date2num([r.date for r in dataset.prices]))
    actual_px = np.array([r.actual for r in dataset.prices])
    forecast_px = np.array([r.forecast for r in dataset.prices])
    actual_ret = np.array([r.actual for r in dataset.returns])
    forecast_ret = np.array([r.forecast for r in dataset.returns])
    vol = np.array([r.vol for r in dataset.volatility])

    fig = Figure(figsize=(14, 11))
    FigureCanvasAgg(fig)
    ax_px, ax_ret, ax_vol = fig.subplots(3, 1, sharex=True)
    fig.suptitle(f"{dataset.symbol} · {dataset.trading_days} trading days", fontsize=14, fontweight="bold")

    for first, last, regime in regime_segments(dataset.prices):
        for ax in (ax_px, ax_ret, ax_vol):
            ax.axvspan(dates[first], dates[last], color=REGIME_COLORS[regime], alpha=0.12, linewidth=0)

    ax_px.fill_between(dates[idx], actual_px[idx], actual_px[idx].min(), color="#00d4aa", alpha=0.15)
    ax_px.plot(dates[idx], actual_px[idx], color="#00d4aa", linewidth=1.5, label="Actual")
    ax_px.plot(dates[idx], forecast_px[idx], color="#7b8cde", linewidth=1.0, linestyle="--", label="Forecast")
    ax_px.set_title("Price: actual vs forecasted", loc="left", fontsize=10)
    ax_px.legend(loc="upper left")

    ax_ret.axhline(0.0, color="#30363d", linestyle=":", linewidth=1)
    ax_ret.plot(dates[idx], actual_ret[idx], color="#f5a623", linewidth=1.0, label="Actual %")
    ax_ret.plot(dates[idx], forecast_ret[idx], color="#7b8cde", linewidth=1.0, linestyle="--", label="Forecast %")
    ax_ret.set_title("Daily returns: signal deviation", loc="left", fontsize=10)
    ax_ret.legend(loc="upper left")

    ax_vol.bar(dates[idx], vol[idx], width=2, color="#ff4d6d", alpha=0.7, label="Volatility %")
    ax_vol.set_title("Volatility exposure by date", loc="left", fontsize=10)
    ax_vol.xaxis_date()

    handles = [Rectangle((0, 0), 1, 1, color=c, alpha=0.4) for c in REGIME_COLORS.values()]
    fig.legend(handles, [r.label for r in REGIME_COLORS], loc="lower center", ncol=len(REGIME_COLORS))
    fig.tight_layout(rect=(0, 0.04, 1, 0.97))
    return fig


def plot_dataset(dataset: MarketDataset, output_path: Path, stride: int = 3) -> Path:
    fig = build_figure(dataset, stride=stride)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=120)
    log.info(f"Chart saved to {output_path}", extra={"symbol": dataset.symbol})
    return output_path


__all__ = ["REGIME_COLORS", "build_figure", "plot_dataset", "regime_segments"]
