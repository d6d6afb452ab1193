"""Report generation: prompt, completion, section parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol

from market_regime_engine.reporting.prompt import build_prompt
from market_regime_engine.reporting.sections import ReportSection, parse_sections
from market_regime_engine.schema.dataset import MarketDataset
from market_regime_engine.utils.logging import get_logger
from market_regime_engine.utils.profiling import track_time

log = get_logger(__name__, component="reporting")


class CompletionClient(Protocol):
    def complete(self, prompt: str) -> str: ...


@dataclass
class AnalysisReport:
    symbol: str
    prompt: str
    raw_text: str
    sections: List[ReportSection] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "sections": [{"title": s.title, "content": s.content} for s in self.sections],
            "raw_text": self.raw_text,
        }


def generate_report(dataset: MarketDataset, client: CompletionClient) -> AnalysisReport:
    """Ask the service for an analyst note on ``dataset``.

    ReportingServiceError from the client propagates unchanged.
    """

    prompt = build_prompt(dataset)
    with track_time("report", symbol=dataset.symbol):
        text = client.complete(prompt)
    sections = parse_sections(text)
    log.info("Report parsed", extra={"symbol": dataset.symbol, "sections": len(sections)})
    return AnalysisReport(symbol=dataset.symbol, prompt=prompt, raw_text=text, sections=sections)


__all__ = ["AnalysisReport", "CompletionClient", "generate_report"]
