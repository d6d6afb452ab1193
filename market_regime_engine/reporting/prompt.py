"""Analyst prompt rendering for the external text-generation service."""

from __future__ import annotations

from typing import Optional

from market_regime_engine.reporting.sections import SECTION_HEADERS
from market_regime_engine.schema.dataset import MarketDataset, RegimeSummary

NOT_COMPUTABLE = "n/a"


def format_value(value: Optional[float]) -> str:
    if value is None:
        return NOT_COMPUTABLE
    # integral floats render without a trailing ".0"
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def regime_sentence(summary: RegimeSummary) -> str:
    return (
        f"{summary.name}: avg daily return {format_value(summary.actual_return)}%, "
        f"forecast {format_value(summary.forecast_return)}%, vol {format_value(summary.avg_vol)}%"
    )


def build_prompt(dataset: MarketDataset) -> str:
    """Render the prompt deterministically from a dataset."""

    regime_text = "; ".join(regime_sentence(s) for s in dataset.regime_summary) or NOT_COMPUTABLE
    headers = "\n".join(f"**{h}**" for h in SECTION_HEADERS)
    return (
        f"You are a quantitative financial analyst. Analyze this market data for {dataset.symbol} "
        f"over {dataset.trading_days} trading days.\n"
        "\n"
        "Key metrics:\n"
        f"- Total Return: {format_value(dataset.total_return)}%\n"
        f"- Average Daily Volatility: {format_value(dataset.avg_vol)}%\n"
        f"- Signal Accuracy: {format_value(dataset.signal_accuracy)}%\n"
        f"- Sharpe Ratio: {format_value(dataset.sharpe)}\n"
        "\n"
        f"Regime Performance: {regime_text}\n"
        "\n"
        "Provide a structured analysis with these exact sections (use these headers):\n"
        f"{headers}\n"
        "\n"
        "Each section: 2-3 sentences. Be specific, quantitative, and direct. No fluff. "
        "Write like a Bloomberg terminal analyst note."
    )


__all__ = ["NOT_COMPUTABLE", "build_prompt", "format_value", "regime_sentence"]
