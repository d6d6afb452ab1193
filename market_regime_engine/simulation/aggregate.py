"""Per-regime aggregation of the daily return series."""

from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from market_regime_engine.schema.dataset import RegimeSummary, ReturnRecord
from market_regime_engine.utils.numeric import mean, to_fixed

VOL_PROXY_SCALE = 10


def aggregate(returns: Sequence[ReturnRecord]) -> List[RegimeSummary]:
    """Group returns by regime in order of first appearance and average them.

    Regimes absent from the series produce no entry. Bull usually appears
    once with days from both ends of the range pooled together.
    """

    groups: Dict[str, List[ReturnRecord]] = {}
    for record in returns:
        groups.setdefault(record.regime.label, []).append(record)

    summaries = []
    for name, records in groups.items():
        actual = [r.actual for r in records]
        summaries.append(
            RegimeSummary(
                name=name,
                actual_return=to_fixed(mean(actual), 3),
                forecast_return=to_fixed(mean(r.forecast for r in records), 3),
                avg_vol=to_fixed(mean(abs(a) for a in actual) * VOL_PROXY_SCALE, 3),
                count=len(records),
            )
        )
    return summaries


def to_frame(summaries: Sequence[RegimeSummary]) -> pd.DataFrame:
    return pd.DataFrame(
        [s.to_dict() for s in summaries],
        columns=["name", "actual_return", "forecast_return", "avg_vol", "count"],
    ).set_index("name")


__all__ = ["aggregate", "to_frame"]
