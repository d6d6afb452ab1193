"""Configuration loading with CLI > ENV > file > defaults precedence."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

import yaml

from market_regime_engine.exceptions import ConfigValidationError
from market_regime_engine.utils.logging import get_logger

log = get_logger(__name__, component="config")

Caster = Callable[[Any], Any]


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML or JSON mapping from ``path``."""

    if not path.exists():
        raise ConfigValidationError(f"Config file not found: {path}")
    raw = path.read_text()
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigValidationError(f"Failed to parse config {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError(f"Config {path} must contain a mapping at the top level")
    return data


def _env_values(env_prefix: str, keys: Mapping[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key in keys:
        env_key = f"{env_prefix}{key.upper()}"
        if env_key in os.environ:
            values[key] = os.environ[env_key]
    return values


def load_config_with_precedence(
    *,
    config_path: Path | None,
    env_prefix: str,
    cli_values: Mapping[str, Any],
    defaults: Mapping[str, Any],
    casters: Mapping[str, Caster] | None = None,
) -> Dict[str, Any]:
    """Merge configuration sources.

    Keys come from ``defaults``; a ``None`` CLI value means "not given". Values
    from the file and the environment are passed through ``casters`` so env
    strings end up with the same types as CLI options.
    """

    casters = casters or {}
    merged: Dict[str, Any] = dict(defaults)
    sources: Dict[str, str] = {key: "default" for key in defaults}

    layers = [
        ("file", _load_yaml(Path(config_path)) if config_path else {}),
        ("env", _env_values(env_prefix, defaults)),
        ("cli", {k: v for k, v in cli_values.items() if v is not None}),
    ]
    for source, values in layers:
        for key, value in values.items():
            if key not in defaults:
                if source == "file":
                    log.warning(f"Ignoring unknown config key '{key}'")
                continue
            if value is None:
                merged[key] = None
            else:
                caster = casters.get(key)
                try:
                    merged[key] = caster(value) if caster else value
                except (TypeError, ValueError) as exc:
                    raise ConfigValidationError(f"Invalid value for {key} from {source}: {value!r}") from exc
            sources[key] = source

    log.debug("Config resolved", extra={"sources": sources})
    return merged


__all__ = ["load_config_with_precedence"]
