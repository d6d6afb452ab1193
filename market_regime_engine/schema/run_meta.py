"""Run metadata schema and on-disk artifacts for an analysis run."""

from __future__ import annotations

import json
import os
import platform
import subprocess
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from market_regime_engine.mc.generator import seed_from_symbol
from market_regime_engine.schema.dataset import MarketDataset
from market_regime_engine.utils.logging import get_logger

log = get_logger(__name__, component="artifacts")


@dataclass
class ReproducibilityContext:
    seed: int
    library_versions: Dict[str, str]
    system_info: Dict[str, Any]
    git_sha: Optional[str]


@dataclass
class RunMeta:
    run_id: str
    symbol: str
    start_date: str
    end_date: str
    trading_days: int
    config: Dict[str, Any]
    metrics: Dict[str, Any]
    reproducibility: Optional[ReproducibilityContext] = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    def write_atomic(self, path: Path) -> None:
        """Write run_meta to a temporary file then move for atomicity."""
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(self.to_json())
        tmp_path.replace(path)

    @classmethod
    def from_json(cls, raw: str) -> "RunMeta":
        data = json.loads(raw)
        repro = data.get("reproducibility")
        if repro is not None:
            data["reproducibility"] = ReproducibilityContext(**repro)
        return cls(**data)

    @classmethod
    def capture_context(cls, run_id: str, dataset: MarketDataset, config: Dict[str, Any]) -> "RunMeta":
        reproducibility = ReproducibilityContext(
            seed=seed_from_symbol(dataset.symbol),
            library_versions=_capture_lib_versions(),
            system_info={
                "os": platform.platform(),
                "cpu_count": os.cpu_count(),
                "python_version": platform.python_version(),
            },
            git_sha=_capture_git_sha(),
        )
        return cls(
            run_id=run_id,
            symbol=dataset.symbol,
            start_date=dataset.start_date.isoformat(),
            end_date=dataset.end_date.isoformat(),
            trading_days=dataset.trading_days,
            config=config,
            metrics={**dataset.metrics.to_dict(), "undefined_metrics": dataset.undefined_metrics},
            reproducibility=reproducibility,
        )


def _capture_lib_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for lib in ["pandas", "numpy", "matplotlib", "typer", "yaml", "requests"]:
        try:
            module = __import__(lib)
            versions[lib] = getattr(module, "__version__", "unknown")
        except ImportError:
            versions[lib] = "missing"
    return versions


def _capture_git_sha() -> Optional[str]:
    try:
        return subprocess.check_output(["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL).strip()
    except (OSError, subprocess.CalledProcessError):
        return None


def write_artifacts(
    dataset: MarketDataset,
    output_dir: Path,
    run_id: str,
    config: Dict[str, Any] | None = None,
) -> Dict[str, Path]:
    """Persist dataset JSON, per-series CSVs and run_meta.json under ``output_dir``."""

    output_dir.mkdir(parents=True, exist_ok=True)
    written: Dict[str, Path] = {}

    dataset_path = output_dir / "dataset.json"
    dataset_path.write_text(dataset.to_json())
    written["dataset"] = dataset_path

    for name, frame in dataset.to_frames().items():
        csv_path = output_dir / f"{name}.csv"
        frame.to_csv(csv_path, index=name != "regimes")
        written[name] = csv_path

    meta = RunMeta.capture_context(run_id, dataset, config or {})
    meta_path = output_dir / "run_meta.json"
    meta.write_atomic(meta_path)
    written["run_meta"] = meta_path

    log.info(f"Artifacts written to {output_dir}", extra={"run_id": run_id, "symbol": dataset.symbol})
    return written


__all__ = ["ReproducibilityContext", "RunMeta", "write_artifacts"]
