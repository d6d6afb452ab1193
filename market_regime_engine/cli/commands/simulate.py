"""Simulate CLI command wiring."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional

import typer

from market_regime_engine.cli.commands.display import console, render_dataset
from market_regime_engine.cli.validation import require_positive, resolve_request
from market_regime_engine.schema.run_meta import write_artifacts
from market_regime_engine.simulation.run import run_analysis
from market_regime_engine.utils.logging import get_logger

log = get_logger(__name__, component="cli_simulate")


def simulate(
    symbol: Optional[str] = typer.Argument(None, help="Ticker symbol (seeds the generator)"),
    start: Optional[str] = typer.Option(None, "--start", help="Start date YYYY-MM-DD"),
    end: Optional[str] = typer.Option(None, "--end", help="End date YYYY-MM-DD (inclusive)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Write dataset.json, CSVs and run_meta.json here"),
    plot: bool = typer.Option(False, "--plot/--no-plot", help="Save chart.png next to the artifacts"),
    stride: Optional[int] = typer.Option(None, "--stride", help="Plot every n-th trading day"),
    as_json: bool = typer.Option(False, "--json", help="Print the dataset as JSON instead of tables"),
) -> None:
    """Generate the synthetic regime dataset for SYMBOL."""

    cfg = resolve_request(
        config=config,
        cli_values={
            "symbol": symbol,
            "start": start,
            "end": end,
            "output_dir": str(output_dir) if output_dir else None,
            "stride": stride,
        },
        extra_defaults={"output_dir": None, "stride": 3},
        casters={"output_dir": str, "stride": int},
    )
    require_positive("stride", cfg["stride"])

    run_id = f"run_{uuid.uuid4().hex[:12]}"
    log.info("Starting simulation", extra={"symbol": cfg["symbol"], "run_id": run_id})
    dataset = run_analysis(cfg["symbol"], cfg["start"], cfg["end"])

    if as_json:
        typer.echo(dataset.to_json())
    else:
        render_dataset(dataset)

    out_dir = Path(cfg["output_dir"]) if cfg.get("output_dir") else None
    if out_dir is not None:
        written = write_artifacts(dataset, out_dir, run_id=run_id, config=cfg)
        if plot and not dataset.is_empty:
            from market_regime_engine.utils.plots import plot_dataset

            written["chart"] = plot_dataset(dataset, out_dir / "chart.png", stride=cfg["stride"])
        if not as_json:
            for name, path in written.items():
                console.print(f"[dim]{name}[/dim] → {path}")
    elif plot:
        log.warning("--plot requires --output-dir; skipping chart")


__all__ = ["simulate"]
