import json
from pathlib import Path

from typer.testing import CliRunner

from fincast_core.cli import app


runner = CliRunner()
DATA = Path(__file__).parent / "data"


def test_cli_patterns_and_simulate(tmp_path: Path):
    ledger_path = tmp_path / "ledger.csv"
    ledger_path.write_text((DATA / "ledger.csv").read_text())

    patterns_path = tmp_path / "patterns.json"
    sim_path = tmp_path / "sim.json"

    result_patterns = runner.invoke(
        app,
        ["patterns", "--ledger", str(ledger_path), "--out", str(patterns_path)],
    )
    assert result_patterns.exit_code == 0, result_patterns.stdout
    patterns = json.loads(patterns_path.read_text())
    assert patterns["months"] == ["2024-01", "2024-02", "2024-03", "2024-04"]

    result_sim = runner.invoke(
        app,
        [
            "simulate",
            "--ledger",
            str(ledger_path),
            "--iterations",
            "200",
            "--horizon",
            "6",
            "--seed",
            "123",
            "--save",
            "--store",
            str(tmp_path / "store.json"),
            "--out",
            str(sim_path),
        ],
    )
    assert result_sim.exit_code == 0, result_sim.stdout
    payload = json.loads(sim_path.read_text())
    assert payload["iterations"] == 200
    assert set(payload["percentiles"]) == {"p10", "p25", "p75", "p90", "p95", "p99"}
    assert payload["confidence_interval"]["lower"] <= payload["confidence_interval"]["upper"]
    assert payload["forecast_id"]


def test_cli_simulate_rejects_short_history():
    result = runner.invoke(app, ["simulate", "--values", "100"])
    assert result.exit_code == 2


def test_cli_trend_from_values():
    result = runner.invoke(
        app,
        ["trend", "--values", "5,7,9,11", "--start", "2024-01-31", "--months", "1"],
    )
    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert abs(payload["trend"] - 2.0) < 1e-9
    assert payload["predictions"][1]["date"] == "2024-02-29"
    assert len(payload["predictions"]) == 5


def test_cli_scenario_save_list_delete(tmp_path: Path):
    store = tmp_path / "forecasts.json"
    result = runner.invoke(
        app,
        [
            "scenario",
            "--months",
            "6",
            "--income",
            "5000",
            "--expenses",
            "3500",
            "--balance",
            "1000",
            "--growth",
            "0",
            "--inflation",
            "0",
            "--name",
            "Steady State",
            "--settings",
            str(DATA / "settings.json"),
            "--save",
            "--store",
            str(store),
        ],
    )
    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["projected_balance"] == 10000.0
    assert payload["forecast_record"]["currency"] == "USD"
    assert payload["forecast_record"]["scenario"] == "steady_state"
    forecast_id = payload["forecast_record"]["id"]

    listed = runner.invoke(app, ["forecasts", "list", "--store", str(store), "--json"])
    assert listed.exit_code == 0, listed.stdout
    assert [r["id"] for r in json.loads(listed.stdout)] == [forecast_id]

    deleted = runner.invoke(app, ["forecasts", "delete", forecast_id, "--store", str(store)])
    assert deleted.exit_code == 0, deleted.stdout

    missing = runner.invoke(app, ["forecasts", "delete", forecast_id, "--store", str(store)])
    assert missing.exit_code == 1


def test_cli_compare_reports_risk(tmp_path: Path):
    out = tmp_path / "compare.json"
    result = runner.invoke(app, ["compare", "--params", str(DATA / "scenario.json"), "--out", str(out)])
    assert result.exit_code == 0, result.stdout

    payload = json.loads(out.read_text())
    assert payload["optimistic"]["projected_balance"] >= payload["realistic"]["projected_balance"]
    assert payload["realistic"]["projected_balance"] >= payload["pessimistic"]["projected_balance"]
    assert payload["risk_metrics"]["probability_of_loss"] == 0.0
    assert payload["recommendations"] == []


def test_cli_batch_runs_overrides_in_order():
    result = runner.invoke(
        app,
        [
            "batch",
            "--params",
            str(DATA / "scenario.json"),
            "--overrides",
            str(DATA / "overrides.json"),
            "--settings",
            str(DATA / "settings.json"),
        ],
    )
    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert [s["scenario_name"] for s in payload["scenarios"]] == ["Pay Raise", "Job Loss", "High Inflation"]
    assert payload["scenarios"][1]["months_to_project"] == 6
    assert "risk_metrics" in payload
