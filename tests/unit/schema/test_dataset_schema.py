import json

import pandas as pd
import pytest

from market_regime_engine.exceptions import SchemaError
from market_regime_engine.interfaces.regime import Regime
from market_regime_engine.schema.dataset import MarketDataset
from market_regime_engine.simulation.run import run_analysis


@pytest.fixture(scope="module")
def dataset() -> MarketDataset:
    return run_analysis("TEST", "2024-01-01", "2024-02-29")


def test_to_dict_uses_flat_metric_fields(dataset):
    payload = json.loads(dataset.to_json())
    for key in ("symbol", "trading_days", "total_return", "avg_vol", "signal_accuracy", "sharpe", "regime_summary"):
        assert key in payload
    assert payload["trading_days"] == len(payload["prices"])
    assert payload["prices"][0]["regime"] == "Bull"
    assert payload["prices"][0]["date"] == "2024-01-01"


def test_json_restores_equal_dataset(dataset):
    restored = MarketDataset.from_json(dataset.to_json())
    assert restored == dataset
    assert restored.prices[0].regime is Regime.BULL


def test_from_dict_reports_missing_field(dataset):
    payload = dataset.to_dict()
    del payload["prices"]
    with pytest.raises(SchemaError):
        MarketDataset.from_dict(payload)


def test_from_json_rejects_garbage():
    with pytest.raises(SchemaError):
        MarketDataset.from_json("{not json")


def test_frames_are_date_indexed(dataset):
    frames = dataset.to_frames()
    assert set(frames) == {"prices", "returns", "volatility", "regimes"}
    prices = frames["prices"]
    assert isinstance(prices.index, pd.DatetimeIndex)
    assert prices.index.is_monotonic_increasing
    assert len(prices) == dataset.trading_days
    assert list(frames["volatility"].columns) == ["vol", "regime"]
    assert frames["regimes"]["count"].sum() == dataset.trading_days


def test_empty_dataset_frames_are_empty():
    empty = run_analysis("TEST", "2024-01-06", "2024-01-07")
    frames = empty.to_frames()
    assert all(frame.empty for frame in frames.values())


def test_payload_flags_signal_accuracy_as_synthetic(dataset):
    payload = json.loads(dataset.to_json())
    assert payload["signal_accuracy_synthetic"] is True
    assert MarketDataset.from_dict(payload).metrics.signal_accuracy_is_synthetic is True


@pytest.mark.parametrize("bad_value", [None, "not-a-number"])
def test_from_dict_rejects_malformed_values(dataset, bad_value):
    payload = dataset.to_dict()
    payload["prices"][0] = {**payload["prices"][0], "actual": bad_value}
    with pytest.raises(SchemaError):
        MarketDataset.from_dict(payload)
