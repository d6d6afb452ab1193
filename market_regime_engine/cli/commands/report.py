"""Prompt and report CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from market_regime_engine.cli.commands.display import console, render_dataset, render_report
from market_regime_engine.cli.validation import require_positive, resolve_request
from market_regime_engine.reporting.client import DEFAULT_MODEL, ReportingClient, api_key_status
from market_regime_engine.reporting.prompt import build_prompt
from market_regime_engine.reporting.service import generate_report
from market_regime_engine.simulation.run import run_analysis
from market_regime_engine.utils.logging import get_logger
from market_regime_engine.utils.progress import ProgressReporter

log = get_logger(__name__, component="cli_report")


def prompt(
    symbol: Optional[str] = typer.Argument(None, help="Ticker symbol"),
    start: Optional[str] = typer.Option(None, "--start", help="Start date YYYY-MM-DD"),
    end: Optional[str] = typer.Option(None, "--end", help="End date YYYY-MM-DD (inclusive)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
) -> None:
    """Print the analyst prompt that would be sent to the reporting service."""

    cfg = resolve_request(config=config, cli_values={"symbol": symbol, "start": start, "end": end})
    dataset = run_analysis(cfg["symbol"], cfg["start"], cfg["end"])
    typer.echo(build_prompt(dataset))


def report(
    symbol: Optional[str] = typer.Argument(None, help="Ticker symbol"),
    start: Optional[str] = typer.Option(None, "--start", help="Start date YYYY-MM-DD"),
    end: Optional[str] = typer.Option(None, "--end", help="End date YYYY-MM-DD (inclusive)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Service API key (default: ANTHROPIC_API_KEY)"),
    model: Optional[str] = typer.Option(None, "--model", help="Model identifier"),
    max_tokens: Optional[int] = typer.Option(None, "--max-tokens", help="Completion token limit"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print the parsed report as JSON"),
) -> None:
    """Simulate SYMBOL, then request and print a sectioned analyst note."""

    cfg = resolve_request(
        config=config,
        cli_values={"symbol": symbol, "start": start, "end": end, "model": model, "max_tokens": max_tokens, "timeout": timeout},
        extra_defaults={"model": DEFAULT_MODEL, "max_tokens": 1000, "timeout": 60.0},
        casters={"model": str, "max_tokens": int, "timeout": float},
    )
    require_positive("max_tokens", cfg["max_tokens"])
    require_positive("timeout", cfg["timeout"])

    client = ReportingClient(api_key=api_key, model=cfg["model"], max_tokens=cfg["max_tokens"], timeout=cfg["timeout"])
    status = api_key_status(client.api_key)
    if status == "invalid":
        log.warning("API key should start with 'sk-ant-'; check for extra characters")

    progress = ProgressReporter(total=2, log=log, component="report")
    dataset = run_analysis(cfg["symbol"], cfg["start"], cfg["end"])
    progress.tick("Market regime simulation generated")
    analysis = generate_report(dataset, client)
    progress.tick("Signal stability analysis received")

    if as_json:
        typer.echo(json.dumps(analysis.to_dict(), indent=2))
        return
    render_dataset(dataset)
    console.print(f"[bold]{dataset.symbol} · Signal Intelligence Report[/bold]")
    render_report(analysis)


__all__ = ["prompt", "report"]
