"""CLI validation and shared option resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping

from market_regime_engine.config.loader import load_config_with_precedence
from market_regime_engine.exceptions import ConfigValidationError, InvalidRangeError
from market_regime_engine.simulation.run import validate_request

ENV_PREFIX = "MRE_"

REQUEST_DEFAULTS: Dict[str, Any] = {
    "symbol": None,
    "start": "2024-01-01",
    "end": "2024-12-31",
}


def require_positive(name: str, value: int | float) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name} must be > 0")


def normalize_symbol(symbol: str | None) -> str:
    """Ticker as typed into a form: trimmed and upper-cased."""

    if symbol is None or not str(symbol).strip():
        raise InvalidRangeError("symbol is required (CLI > ENV > YAML)")
    return str(symbol).strip().upper()


def resolve_request(
    *,
    config: Path | None,
    cli_values: Mapping[str, Any],
    extra_defaults: Mapping[str, Any] | None = None,
    casters: Mapping[str, Any] | None = None,
) -> Dict[str, Any]:
    """Merge config sources and validate the (symbol, start, end) request."""

    defaults = {**REQUEST_DEFAULTS, **(extra_defaults or {})}
    cfg = load_config_with_precedence(
        config_path=config,
        env_prefix=ENV_PREFIX,
        cli_values=cli_values,
        defaults=defaults,
        casters={"symbol": str, "start": str, "end": str, **(casters or {})},
    )
    cfg["symbol"] = normalize_symbol(cfg.get("symbol"))
    start, end = validate_request(cfg["symbol"], cfg["start"], cfg["end"])
    cfg["start"], cfg["end"] = start.isoformat(), end.isoformat()
    return cfg


__all__ = ["ENV_PREFIX", "normalize_symbol", "require_positive", "resolve_request"]
