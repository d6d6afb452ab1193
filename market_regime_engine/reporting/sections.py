"""Section scanner for free-text analyst reports.

The service is asked to answer under four bold headers (``**SIGNAL QUALITY**``
and so on). Its reply is untrusted text: headers may be missing, repeated or
out of order. The scanner walks the text once:

    SEARCHING --marker--> IN_SECTION --next marker--> IN_SECTION
        |                     |
        +-------end-----------+--end--> DONE

Content of a section runs from the end of its marker to the start of the next
known marker (or end of text). The first occurrence of a header wins. When no
marker is found at all the whole reply becomes a single ``ANALYSIS`` section.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

SECTION_HEADERS = ("SIGNAL QUALITY", "REGIME ANALYSIS", "RISK PROFILE", "KEY INSIGHT")
FALLBACK_TITLE = "ANALYSIS"


@dataclass(frozen=True)
class ReportSection:
    title: str
    content: str


class _ScanState(Enum):
    SEARCHING = auto()
    IN_SECTION = auto()
    DONE = auto()


def _marker(header: str) -> str:
    return f"**{header}**"


def _next_marker(text: str, pos: int) -> Optional[Tuple[int, str]]:
    """Earliest known marker at or after ``pos`` as ``(index, header)``."""

    best: Optional[Tuple[int, str]] = None
    for header in SECTION_HEADERS:
        idx = text.find(_marker(header), pos)
        if idx != -1 and (best is None or idx < best[0]):
            best = (idx, header)
    return best


def parse_sections(text: str) -> List[ReportSection]:
    if not text or not text.strip():
        return []

    found: Dict[str, str] = {}
    state = _ScanState.SEARCHING
    pos = 0
    current: Optional[str] = None

    while state is not _ScanState.DONE:
        hit = _next_marker(text, pos)
        if state is _ScanState.SEARCHING:
            if hit is None:
                state = _ScanState.DONE
                continue
            idx, current = hit
            pos = idx + len(_marker(current))
            state = _ScanState.IN_SECTION
        else:
            end = hit[0] if hit is not None else len(text)
            assert current is not None
            found.setdefault(current, text[pos:end].strip())
            if hit is None:
                state = _ScanState.DONE
                continue
            current = hit[1]
            pos = hit[0] + len(_marker(current))

    if not found:
        return [ReportSection(FALLBACK_TITLE, text.strip())]
    return [ReportSection(h, found[h]) for h in SECTION_HEADERS if h in found]


__all__ = ["FALLBACK_TITLE", "ReportSection", "SECTION_HEADERS", "parse_sections"]
