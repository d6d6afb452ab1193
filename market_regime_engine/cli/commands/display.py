"""Rich rendering of datasets and reports for the terminal."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from market_regime_engine.reporting.service import AnalysisReport
from market_regime_engine.schema.dataset import MarketDataset

console = Console()


def _signed(value: Optional[float], suffix: str = "%") -> str:
    if value is None:
        return "n/a"
    sign = "+" if value > 0 else ""
    return f"{sign}{value}{suffix}"


def _tone(value: Optional[float], good: float = 0.0, warn: float | None = None) -> str:
    if value is None:
        return "dim"
    if value > good:
        return "green"
    if warn is not None and value > warn:
        return "yellow"
    return "red"


def render_dataset(dataset: MarketDataset) -> None:
    header = (
        f"[bold cyan]{dataset.symbol}[/bold cyan] · {dataset.trading_days} trading days "
        f"({dataset.start_date.isoformat()} → {dataset.end_date.isoformat()})"
    )
    console.print(header)

    if dataset.is_empty:
        console.print("[yellow]No trading days in range; metrics not computable.[/yellow]")
        for name, reason in dataset.undefined_metrics.items():
            console.print(f"  {name}: {reason}")
        return

    cards = Table(title="Summary", show_header=True)
    for label in ("TOTAL RETURN", "AVG VOLATILITY", "SIGNAL ACCURACY*", "SHARPE RATIO"):
        cards.add_column(label)
    sharpe = dataset.sharpe
    cards.add_row(
        f"[{_tone(dataset.total_return)}]{_signed(dataset.total_return)}[/]",
        f"[yellow]{dataset.avg_vol if dataset.avg_vol is not None else 'n/a'}%[/]",
        f"[blue]{dataset.signal_accuracy if dataset.signal_accuracy is not None else 'n/a'}%[/]",
        f"[{_tone(sharpe, good=1.0, warn=0.0)}]{sharpe if sharpe is not None else 'n/a'}[/]",
    )
    console.print(cards)
    console.print("[dim]* synthetic figure drawn from the seeded stream, not a backtest statistic[/dim]")

    regimes = Table(title="Regime performance breakdown")
    regimes.add_column("Regime")
    regimes.add_column("Days", justify="right")
    regimes.add_column("Actual", justify="right")
    regimes.add_column("Forecast", justify="right")
    regimes.add_column("Avg Vol", justify="right")
    for summary in dataset.regime_summary:
        regimes.add_row(
            summary.name.upper(),
            f"{summary.count}d",
            f"[{_tone(summary.actual_return)}]{_signed(summary.actual_return)}[/]",
            _signed(summary.forecast_return),
            f"{summary.avg_vol}%",
        )
    console.print(regimes)


def render_report(report: AnalysisReport) -> None:
    for section in report.sections:
        console.print(Panel(section.content, title=section.title, title_align="left"))


__all__ = ["console", "render_dataset", "render_report"]
