from __future__ import annotations

import dataclasses
import datetime as dt
import json
import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from fincast_core.domain.errors import ForecastEngineError
from fincast_core.domain.models import (
    EngineSettings,
    ScenarioParameters,
    ScenarioResult,
    SeriesPoint,
    SimulationParameters,
)
from fincast_core.io import config as config_io
from fincast_core.io import ledger as ledger_io
from fincast_core.io.store import JsonForecastStore, record_to_json
from fincast_core.services import forecaster, patterns, records, risk, scenario as scenario_service
from fincast_core.services import simulator, suggestions
from fincast_core.services.random_source import default_source
from fincast_core.services.stats import add_months

app = typer.Typer(help="Forecasting and scenario simulation for personal and business finances.")
forecasts_app = typer.Typer(help="Manage stored forecast records.")
app.add_typer(forecasts_app, name="forecasts")

logger = logging.getLogger(__name__)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _emit(payload, out: Optional[Path], label: str) -> None:
    if out:
        _save_json(out, payload)
        typer.echo(f"{label} written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


def _store_path() -> Path:
    return Path(os.environ.get("FINCAST_STORE", Path.home() / ".fincast_forecasts.json"))


def _load_settings(path: Optional[Path]) -> EngineSettings:
    path = path or (Path(os.environ["FINCAST_SETTINGS"]) if os.environ.get("FINCAST_SETTINGS") else None)
    if path is None:
        return EngineSettings()
    logger.debug("loading engine settings from %s", path)
    return config_io.load_engine_settings(path)


def _parse_values(raw: str) -> List[float]:
    try:
        return [float(v) for v in raw.split(",") if v.strip()]
    except ValueError as exc:
        raise typer.BadParameter(f"Could not parse values: {raw}") from exc


def _net_series(ledger: Optional[Path], values: Optional[str]) -> tuple[List[str], List[float]]:
    if values:
        parsed = _parse_values(values)
        return [], parsed
    if ledger:
        pats = patterns.analyze_transaction_patterns(ledger_io.load_ledger(ledger))
        return list(pats.months), list(pats.net_cash_flow)
    raise typer.BadParameter("Provide either --ledger or --values")


def _scenario_to_json(result: ScenarioResult) -> dict:
    payload = {f.name: getattr(result, f.name) for f in dataclasses.fields(result)}
    payload["forecast_record"] = record_to_json(result.forecast_record)
    return payload


def _scenario_params(
    params: Optional[Path],
    months: Optional[int],
    income: Optional[float],
    expenses: Optional[float],
    balance: Optional[float],
    growth: Optional[float],
    inflation: Optional[float],
) -> ScenarioParameters:
    if params:
        base = config_io.load_scenario_parameters(params)
    else:
        if months is None or income is None or expenses is None or balance is None:
            raise typer.BadParameter("Provide --params or all of --months/--income/--expenses/--balance")
        base = ScenarioParameters(
            months_to_project=months,
            monthly_income=income,
            monthly_expenses=expenses,
            current_balance=balance,
        )
    changes = {}
    if growth is not None:
        changes["growth_rate"] = growth
    if inflation is not None:
        changes["inflation_rate"] = inflation
    return dataclasses.replace(base, **changes)


@app.command("patterns")
def patterns_cmd(
    ledger: Path = typer.Option(..., help="CSV ledger with date,amount,type"),
    out: Optional[Path] = typer.Option(None, help="Output path for the monthly series JSON"),
):
    """Aggregate a transaction ledger into monthly income/expense/net series."""
    result = patterns.analyze_transaction_patterns(ledger_io.load_ledger(ledger))
    payload = {f.name: getattr(result, f.name) for f in dataclasses.fields(result)}
    payload = {k: list(v) if isinstance(v, tuple) else v for k, v in payload.items()}
    _emit(payload, out, "Monthly patterns")


@app.command()
def simulate(
    ledger: Optional[Path] = typer.Option(None, help="Ledger CSV; monthly net cash flow is simulated"),
    values: Optional[str] = typer.Option(None, help="Comma separated historical balances"),
    iterations: int = typer.Option(1000, help="Monte Carlo iterations"),
    horizon: int = typer.Option(12, help="Time horizon in months"),
    volatility: Optional[float] = typer.Option(None, help="Monthly volatility (defaults to historical std)"),
    confidence: float = typer.Option(0.95, help="Confidence level for the interval"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    include_scenarios: bool = typer.Option(False, help="Include every simulated outcome in the output"),
    save: bool = typer.Option(False, help="Store the forecast record"),
    store: Optional[Path] = typer.Option(None, help="Forecast store JSON file (defaults to ~/.fincast_forecasts.json)"),
    settings: Optional[Path] = typer.Option(None, help="Engine settings JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for simulation JSON"),
):
    """Run a Monte Carlo simulation over historical values."""
    _, history = _net_series(ledger, values)
    params = SimulationParameters(
        iterations=iterations,
        time_horizon_months=horizon,
        volatility=volatility,
        confidence_level=confidence,
    )
    try:
        result = simulator.monte_carlo_simulation(history, params, source=default_source(seed))
    except ForecastEngineError as exc:
        raise typer.BadParameter(str(exc)) from exc

    payload = result.snapshot()
    payload["iterations"] = len(result.scenarios)
    if include_scenarios:
        payload["scenarios"] = list(result.scenarios)
    if save:
        record = records.simulation_record(result, params, settings=_load_settings(settings))
        payload["forecast_id"] = JsonForecastStore(store or _store_path()).create_forecast(record).id
    _emit(payload, out, "Simulation")


@app.command()
def trend(
    ledger: Optional[Path] = typer.Option(None, help="Ledger CSV; monthly net cash flow is fitted"),
    values: Optional[str] = typer.Option(None, help="Comma separated monthly values"),
    start: Optional[str] = typer.Option(None, help="Date of the first value (YYYY-MM-DD) when using --values"),
    months: int = typer.Option(6, help="Months to forecast past the history"),
    save: bool = typer.Option(False, help="Store the forecast record"),
    store: Optional[Path] = typer.Option(None, help="Forecast store JSON file (defaults to ~/.fincast_forecasts.json)"),
    settings: Optional[Path] = typer.Option(None, help="Engine settings JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for trend JSON"),
):
    """Fit a linear trend and extend it forward."""
    keys, history = _net_series(ledger, values)
    if keys:
        dates = [dt.date(int(k[:4]), int(k[5:7]), 1) for k in keys]
    else:
        first = dt.date.fromisoformat(start) if start else dt.date.today().replace(day=1)
        dates = [add_months(first, i) for i in range(len(history))]
    series = [SeriesPoint(date=d, value=v) for d, v in zip(dates, history)]
    try:
        result = forecaster.trend_forecast(series, months)
    except ForecastEngineError as exc:
        raise typer.BadParameter(str(exc)) from exc

    payload = {
        "trend": result.trend,
        "r_squared": result.r_squared,
        "predictions": [{"date": d, "value": v} for d, v in result.to_timeseries()],
    }
    if save:
        record = records.trend_record(result, settings=_load_settings(settings))
        payload["forecast_id"] = JsonForecastStore(store or _store_path()).create_forecast(record).id
    _emit(payload, out, "Trend forecast")


@app.command()
def scenario(
    params: Optional[Path] = typer.Option(None, help="Scenario parameters JSON"),
    months: Optional[int] = typer.Option(None, help="Months to project"),
    income: Optional[float] = typer.Option(None, help="Monthly income"),
    expenses: Optional[float] = typer.Option(None, help="Monthly expenses"),
    balance: Optional[float] = typer.Option(None, help="Current balance"),
    growth: Optional[float] = typer.Option(None, help="Annual income growth rate"),
    inflation: Optional[float] = typer.Option(None, help="Annual expense inflation rate"),
    name: str = typer.Option("Base Scenario", help="Scenario name"),
    save: bool = typer.Option(False, help="Store the forecast record"),
    store: Optional[Path] = typer.Option(None, help="Forecast store JSON file (defaults to ~/.fincast_forecasts.json)"),
    settings: Optional[Path] = typer.Option(None, help="Engine settings JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for scenario JSON"),
):
    """Project a single deterministic scenario."""
    scenario_params = _scenario_params(params, months, income, expenses, balance, growth, inflation)
    engine_settings = _load_settings(settings)
    try:
        result = scenario_service.analyze_scenario(scenario_params, name, settings=engine_settings)
    except ForecastEngineError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if save:
        result = dataclasses.replace(
            result,
            forecast_record=records.save_scenario_forecast(JsonForecastStore(store or _store_path()), result.forecast_record),
        )
    _emit(_scenario_to_json(result), out, "Scenario")


def _risk_payload(results: List[ScenarioResult], engine_settings: EngineSettings) -> dict:
    metrics = risk.calculate_risk_metrics(results)
    return {
        "risk_metrics": dataclasses.asdict(metrics),
        "recommendations": suggestions.generate_recommendations(results, engine_settings),
    }


@app.command()
def compare(
    params: Optional[Path] = typer.Option(None, help="Scenario parameters JSON"),
    months: Optional[int] = typer.Option(None, help="Months to project"),
    income: Optional[float] = typer.Option(None, help="Monthly income"),
    expenses: Optional[float] = typer.Option(None, help="Monthly expenses"),
    balance: Optional[float] = typer.Option(None, help="Current balance"),
    growth: Optional[float] = typer.Option(None, help="Annual income growth rate"),
    inflation: Optional[float] = typer.Option(None, help="Annual expense inflation rate"),
    settings: Optional[Path] = typer.Option(None, help="Engine settings JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for comparison JSON"),
):
    """Compare optimistic, realistic and pessimistic variants with risk metrics."""
    scenario_params = _scenario_params(params, months, income, expenses, balance, growth, inflation)
    engine_settings = _load_settings(settings)
    try:
        comparison = scenario_service.compare_scenarios(scenario_params, settings=engine_settings)
    except ForecastEngineError as exc:
        raise typer.BadParameter(str(exc)) from exc

    payload = {
        "optimistic": _scenario_to_json(comparison.optimistic),
        "realistic": _scenario_to_json(comparison.realistic),
        "pessimistic": _scenario_to_json(comparison.pessimistic),
    }
    payload.update(_risk_payload(comparison.as_list(), engine_settings))
    _emit(payload, out, "Scenario comparison")


@app.command()
def batch(
    params: Path = typer.Option(..., help="Base scenario parameters JSON"),
    overrides: Path = typer.Option(..., help="JSON list of {name, parameters} overrides"),
    settings: Optional[Path] = typer.Option(None, help="Engine settings JSON"),
    out: Optional[Path] = typer.Option(None, help="Output path for batch JSON"),
):
    """Run several named variants of a base scenario."""
    base = config_io.load_scenario_parameters(params)
    variants = config_io.load_scenario_overrides(overrides)
    engine_settings = _load_settings(settings)
    try:
        results = scenario_service.run_multiple_scenarios(base, variants, settings=engine_settings)
        payload = {"scenarios": [_scenario_to_json(r) for r in results]}
        if results:
            payload.update(_risk_payload(results, engine_settings))
    except ForecastEngineError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _emit(payload, out, "Scenario batch")


@forecasts_app.command("list")
def list_forecasts(
    store: Optional[Path] = typer.Option(None, help="Forecast store JSON file (defaults to ~/.fincast_forecasts.json)"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table"),
):
    """Show stored forecast records."""
    items = records.get_scenario_forecasts(JsonForecastStore(store or _store_path()))
    if as_json:
        typer.echo(json.dumps([record_to_json(r) for r in items], indent=2))
        return
    if not items:
        typer.echo("No stored forecasts.")
        return
    table = Table(title="Stored forecasts")
    for column in ("id", "type", "title", "target", "predicted", "range"):
        table.add_column(column)
    for r in items:
        bounds = "-" if r.lower_bound is None else f"{r.lower_bound:,.2f} .. {r.upper_bound:,.2f}"
        table.add_row(
            r.id or "",
            r.type,
            r.title,
            r.target_date.isoformat(),
            f"{r.predicted_value:,.2f} {r.currency}",
            bounds,
        )
    Console().print(table)


@forecasts_app.command("delete")
def delete_forecast(
    forecast_id: str = typer.Argument(..., help="Id of the forecast to delete"),
    store: Optional[Path] = typer.Option(None, help="Forecast store JSON file (defaults to ~/.fincast_forecasts.json)"),
):
    """Delete a stored forecast record."""
    try:
        records.delete_scenario_forecast(JsonForecastStore(store or _store_path()), forecast_id)
    except KeyError as exc:
        typer.echo(f"No forecast with id {forecast_id}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Deleted forecast {forecast_id}")


if __name__ == "__main__":
    app()
