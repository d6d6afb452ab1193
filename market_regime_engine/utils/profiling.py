"""Segment timing for simulation and reporting runs."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator

from market_regime_engine.utils.logging import get_logger

log = get_logger(__name__, component="profiling")


@dataclass
class Timing:
    wall: float
    cpu: float
    duration_ms: float | None = None


def _now() -> Timing:
    return Timing(wall=time.perf_counter(), cpu=time.process_time())


@contextmanager
def track_time(name: str, *, warn_budget: float | None = None, **context: Any) -> Iterator[Timing]:
    """Time a block and log it; ``duration_ms`` is filled in on exit.

    Extra keyword arguments (``symbol=...``) are attached to the log record.
    """

    start = _now()
    try:
        yield start
    finally:
        end = _now()
        wall_elapsed = end.wall - start.wall
        start.duration_ms = round(wall_elapsed * 1000, 3)
        extra: Dict[str, Any] = {
            "segment": name,
            "duration_ms": start.duration_ms,
            "cpu_seconds": round(end.cpu - start.cpu, 4),
            **context,
        }
        if warn_budget is not None and wall_elapsed >= warn_budget:
            log.warning("Performance budget exceeded", extra=extra)
        else:
            log.info("Segment timing", extra=extra)


__all__ = ["Timing", "track_time"]
