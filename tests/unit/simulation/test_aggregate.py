from datetime import date

import pytest

from market_regime_engine.interfaces.regime import Regime
from market_regime_engine.schema.dataset import ReturnRecord
from market_regime_engine.simulation.aggregate import aggregate, to_frame


def _r(day: int, actual: float, forecast: float, regime: Regime) -> ReturnRecord:
    return ReturnRecord(date(2024, 1, day), actual, forecast, regime)


def test_groups_in_first_occurrence_order():
    records = [
        _r(1, 0.2, 0.1, Regime.VOLATILE),
        _r(2, 1.0, 0.8, Regime.BULL),
        _r(3, -0.5, 0.1, Regime.BULL),
        _r(4, -0.4, -0.2, Regime.VOLATILE),
    ]
    summaries = aggregate(records)
    assert [s.name for s in summaries] == ["Volatile", "Bull"]


def test_means_and_dispersion_proxy():
    records = [
        _r(1, 1.0, 0.8, Regime.BULL),
        _r(2, -0.5, 0.1, Regime.BULL),
        _r(3, 0.2, 0.3, Regime.BEAR),
    ]
    bull, bear = aggregate(records)
    assert bull.actual_return == pytest.approx(0.25)
    assert bull.forecast_return == pytest.approx(0.45)
    # ten times the mean absolute actual return, not the volatility series
    assert bull.avg_vol == pytest.approx(7.5)
    assert bull.count == 2
    assert bear.avg_vol == pytest.approx(2.0)
    assert bear.count == 1


def test_means_are_rounded_to_three_decimals():
    records = [_r(1, 0.001, 0.0, Regime.BEAR), _r(2, 0.002, 0.0, Regime.BEAR), _r(3, 0.002, 0.0, Regime.BEAR)]
    (bear,) = aggregate(records)
    assert bear.actual_return == 0.002


def test_absent_regimes_produce_no_entry():
    assert aggregate([]) == []
    assert [s.name for s in aggregate([_r(1, 0.1, 0.1, Regime.RECOVERY)])] == ["Recovery"]


def test_to_frame_indexes_by_regime_name():
    frame = to_frame(aggregate([_r(1, 1.0, 0.5, Regime.BULL)]))
    assert list(frame.index) == ["Bull"]
    assert frame.loc["Bull", "count"] == 1
