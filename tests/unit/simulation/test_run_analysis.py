import json
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from market_regime_engine.exceptions import InvalidRangeError
from market_regime_engine.simulation.run import run_analysis


def test_runs_are_bit_identical():
    first = run_analysis("NVDA", "2024-01-01", "2024-12-31")
    second = run_analysis("NVDA", date(2024, 1, 1), date(2024, 12, 31))
    assert first.to_json() == second.to_json()


def test_anagram_symbols_produce_identical_series():
    ab = run_analysis("AB", "2024-01-01", "2024-03-31")
    ba = run_analysis("BA", "2024-01-01", "2024-03-31")
    assert ab.prices == ba.prices
    assert ab.metrics == ba.metrics


def test_literal_week_scenario():
    dataset = run_analysis("TEST", "2024-01-01", "2024-01-07")
    assert dataset.trading_days == 5
    dates = [r.date for r in dataset.prices]
    assert dates == sorted(dates)
    assert dates[0] == date(2024, 1, 1) and dates[-1] == date(2024, 1, 5)


def test_total_return_consistent_with_prices():
    dataset = run_analysis("MSFT", "2023-06-01", "2024-05-31")
    recomputed = (dataset.prices[-1].actual / dataset.prices[0].actual - 1) * 100
    assert dataset.total_return == pytest.approx(recomputed, abs=0.01)


def test_regime_summary_counts_cover_every_day():
    dataset = run_analysis("AMZN", "2024-01-01", "2024-12-31")
    assert sum(s.count for s in dataset.regime_summary) == dataset.trading_days
    assert [s.name for s in dataset.regime_summary] == ["Bull", "Volatile", "Bear", "Recovery"]


def test_sharpe_derives_from_rounded_metrics():
    dataset = run_analysis("GOOG", "2024-01-01", "2024-12-31")
    expected = dataset.total_return / 100 / (dataset.avg_vol / 100 * 252 ** 0.5)
    assert dataset.sharpe == pytest.approx(expected, abs=0.005)


@pytest.mark.parametrize("start, end", [("2024-01-03", "2024-01-03"), ("2024-01-06", "2024-01-07")])
def test_degenerate_range_returns_empty_dataset(start, end):
    dataset = run_analysis("TEST", start, end)
    assert dataset.is_empty
    assert dataset.prices == [] and dataset.returns == [] and dataset.volatility == []
    assert dataset.regime_summary == []
    assert dataset.total_return is None and dataset.avg_vol is None
    assert dataset.signal_accuracy is None and dataset.sharpe is None
    assert set(dataset.undefined_metrics) == {"total_return", "avg_vol", "signal_accuracy", "sharpe"}
    payload = dataset.to_json()
    assert "NaN" not in payload
    assert json.loads(payload)["total_return"] is None


@pytest.mark.parametrize(
    "symbol, start, end",
    [
        ("", "2024-01-01", "2024-01-31"),
        ("   ", "2024-01-01", "2024-01-31"),
        ("TEST", "2024-02-01", "2024-01-31"),
        ("TEST", "2024-13-01", "2024-12-31"),
    ],
)
def test_invalid_requests_fail_fast(symbol, start, end):
    with pytest.raises(InvalidRangeError):
        run_analysis(symbol, start, end)


def test_concurrent_runs_do_not_interfere():
    symbols = ["AAPL", "MSFT", "NVDA", "TSLA"] * 3
    serial = {s: run_analysis(s, "2024-01-01", "2024-06-30").to_json() for s in set(symbols)}
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda s: (s, run_analysis(s, "2024-01-01", "2024-06-30").to_json()), symbols))
    for symbol, payload in results:
        assert payload == serial[symbol]


def test_full_year_matches_reference_values():
    dataset = run_analysis("NVDA", "2024-01-01", "2024-12-31")
    assert dataset.trading_days == 262
    assert dataset.total_return == 63.67
    assert dataset.avg_vol == 2.752
    assert dataset.signal_accuracy == 82.2
    assert dataset.sharpe == 1.46
    recovery = next(s for s in dataset.regime_summary if s.name == "Recovery")
    assert recovery.avg_vol == 11.268
