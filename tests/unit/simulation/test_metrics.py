import math
from datetime import date

import pytest

from market_regime_engine.exceptions import MetricUndefinedError
from market_regime_engine.interfaces.regime import Regime
from market_regime_engine.mc.generator import init_state, next_draw
from market_regime_engine.schema.dataset import DayRecord, VolatilityRecord
from market_regime_engine.simulation.metrics import (
    average_volatility,
    sharpe_ratio,
    signal_accuracy,
    summarize,
    total_return,
)


def _prices(*values: float) -> list[DayRecord]:
    return [DayRecord(date(2024, 1, i + 1), v, v, Regime.BULL) for i, v in enumerate(values)]


def _vols(*values: float) -> list[VolatilityRecord]:
    return [VolatilityRecord(date(2024, 1, i + 1), v, Regime.BULL) for i, v in enumerate(values)]


def test_total_return_from_first_and_last_price():
    assert total_return(_prices(100.0, 90.0, 110.0)) == 10.0
    assert total_return(_prices(200.0, 150.0)) == -25.0


def test_total_return_needs_two_records():
    with pytest.raises(MetricUndefinedError):
        total_return(_prices(100.0))
    with pytest.raises(MetricUndefinedError):
        total_return([])


def test_average_volatility_rounds_to_three_decimals():
    assert average_volatility(_vols(1.2, 1.3, 1.3)) == pytest.approx(1.267)
    with pytest.raises(MetricUndefinedError):
        average_volatility([])


def test_sharpe_formula_and_zero_volatility():
    expected = round(0.10 / (0.02 * math.sqrt(252)), 2)
    assert sharpe_ratio(10.0, 2.0) == pytest.approx(expected)
    with pytest.raises(MetricUndefinedError):
        sharpe_ratio(10.0, 0.0)


def test_signal_accuracy_consumes_one_draw():
    state = init_state("AAA")
    draw, expected_state = next_draw(state)
    value, new_state = signal_accuracy(state)
    assert new_state == expected_state
    assert 65.0 <= value <= 85.0
    assert value == pytest.approx(85 - draw * 20, abs=0.05)


def test_summarize_marks_single_day_metrics_undefined():
    metrics, _ = summarize(_prices(100.0), _vols(1.5), init_state("X"))
    assert metrics.total_return is None
    assert metrics.sharpe is None
    assert metrics.avg_vol == 1.5
    assert metrics.signal_accuracy is not None
    assert set(metrics.undefined) == {"total_return", "sharpe"}


def test_summarize_zero_volatility_leaves_sharpe_undefined():
    metrics, _ = summarize(_prices(100.0, 101.0), _vols(0.0, 0.0), init_state("X"))
    assert metrics.total_return == 1.0
    assert metrics.sharpe is None
    assert "sharpe" in metrics.undefined
    assert metrics.signal_accuracy_is_synthetic is True
