"""Typer CLI entrypoint with structured error handling."""

from __future__ import annotations

import sys

import typer

from market_regime_engine.cli.commands.report import prompt, report
from market_regime_engine.cli.commands.simulate import simulate
from market_regime_engine.exceptions import (
    ConfigValidationError,
    DependencyError,
    ReportingServiceError,
    SchemaError,
)
from market_regime_engine.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Market Regime Engine CLI")


app.command()(simulate)
app.command()(prompt)
app.command()(report)


log = get_logger(__name__, component="cli")


def main() -> None:
    configure_logging(component="cli")
    try:
        app()
    except ConfigValidationError as exc:
        log.error(str(exc))
        raise SystemExit(1)
    except ReportingServiceError as exc:
        log.error(str(exc), extra={"status": exc.status})
        raise SystemExit(2)
    except SchemaError as exc:
        log.error(f"Schema validation failed: {exc}")
        raise SystemExit(3)
    except DependencyError as exc:
        log.error(f"Missing dependency: {exc}")
        raise SystemExit(4)
    except KeyboardInterrupt:
        log.info("Shutdown requested.")
        raise SystemExit(130)
    except Exception:
        log.exception("Unhandled exception")
        raise SystemExit(255)


if __name__ == "__main__":
    # Use sys.exit to ensure proper exit code propagation under raw python invocation
    sys.exit(main())
