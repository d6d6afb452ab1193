"""Step progress reporting through the structured logger."""

from __future__ import annotations

import logging


class ProgressReporter:
    def __init__(self, total: int | None, log: logging.Logger, component: str) -> None:
        self.total = total
        self.log = log
        self.component = component
        self.done = 0

    def tick(self, message: str) -> str:
        self.done += 1
        step = f"{self.done}/{self.total}" if self.total else str(self.done)
        self.log.info(f"[{step}] {message}", extra={"component": self.component})
        return step


__all__ = ["ProgressReporter"]
