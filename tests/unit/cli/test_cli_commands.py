import json
from pathlib import Path

import pytest

pytest.importorskip("typer")
from typer.testing import CliRunner

from market_regime_engine.cli.main import app
from market_regime_engine.cli.validation import normalize_symbol
from market_regime_engine.exceptions import InvalidRangeError, ReportingServiceError
from market_regime_engine.reporting.client import ReportingClient
from market_regime_engine.simulation.run import run_analysis

runner = CliRunner()

REPLY = "**SIGNAL QUALITY** Solid. **REGIME ANALYSIS** Mixed. **RISK PROFILE** Elevated. **KEY INSIGHT** Watch bears."


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("MRE_SYMBOL", "MRE_START", "MRE_END", "MRE_OUTPUT_DIR", "MRE_STRIDE"):
        monkeypatch.delenv(key, raising=False)


def test_simulate_json_matches_core():
    result = runner.invoke(app, ["simulate", " nvda ", "--start", "2024-01-01", "--end", "2024-03-31", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload == run_analysis("NVDA", "2024-01-01", "2024-03-31").to_dict()


def test_simulate_renders_tables():
    result = runner.invoke(app, ["simulate", "TEST", "--start", "2024-01-01", "--end", "2024-06-30"])
    assert result.exit_code == 0, result.output
    assert "Regime performance breakdown" in result.stdout
    assert "BULL" in result.stdout


def test_simulate_writes_artifacts_and_chart(tmp_path: Path):
    out = tmp_path / "run"
    result = runner.invoke(
        app,
        ["simulate", "TEST", "--start", "2024-01-01", "--end", "2024-06-30", "--output-dir", str(out), "--plot"],
    )
    assert result.exit_code == 0, result.output
    for name in ("dataset.json", "prices.csv", "run_meta.json", "chart.png"):
        assert (out / name).exists()


def test_simulate_reads_config_file(tmp_path: Path):
    cfg = tmp_path / "config.yml"
    cfg.write_text("symbol: aaa\nstart: '2024-01-01'\nend: '2024-01-07'\n")
    result = runner.invoke(app, ["simulate", "--config", str(cfg), "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["symbol"] == "AAA"
    assert payload["trading_days"] == 5


def test_simulate_rejects_reversed_range():
    result = runner.invoke(app, ["simulate", "TEST", "--start", "2024-02-01", "--end", "2024-01-01"])
    assert result.exit_code != 0
    assert isinstance(result.exception, InvalidRangeError)


def test_prompt_command_prints_prompt():
    result = runner.invoke(app, ["prompt", "TEST", "--start", "2024-01-01", "--end", "2024-01-07"])
    assert result.exit_code == 0, result.output
    assert "for TEST over 5 trading days" in result.stdout
    assert "**KEY INSIGHT**" in result.stdout


def test_report_command_prints_sections(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
    monkeypatch.setattr(ReportingClient, "complete", lambda self, prompt: REPLY)
    result = runner.invoke(app, ["report", "TEST", "--start", "2024-01-01", "--end", "2024-03-31", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [s["title"] for s in payload["sections"]] == ["SIGNAL QUALITY", "REGIME ANALYSIS", "RISK PROFILE", "KEY INSIGHT"]


def test_report_command_surfaces_service_error(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")

    def _fail(self, prompt):
        raise ReportingServiceError(401, "invalid x-api-key")

    monkeypatch.setattr(ReportingClient, "complete", _fail)
    result = runner.invoke(app, ["report", "TEST", "--start", "2024-01-01", "--end", "2024-03-31"])
    assert result.exit_code != 0
    assert isinstance(result.exception, ReportingServiceError)
    assert result.exception.status == 401


def test_normalize_symbol():
    assert normalize_symbol("  spy ") == "SPY"
    with pytest.raises(InvalidRangeError):
        normalize_symbol("   ")
    with pytest.raises(InvalidRangeError):
        normalize_symbol(None)
