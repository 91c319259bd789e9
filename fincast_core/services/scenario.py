from __future__ import annotations

import dataclasses
import datetime as dt
from concurrent.futures import Executor
from typing import List, Optional, Sequence

from fincast_core.domain.errors import InvalidParameterError
from fincast_core.domain.models import (
    EngineSettings,
    ScenarioComparison,
    ScenarioOverride,
    ScenarioParameters,
    ScenarioResult,
)
from fincast_core.services.records import create_forecast_record, scenario_tag
from fincast_core.services.stats import add_months


def analyze_scenario(
    params: ScenarioParameters,
    scenario_name: str = "Base Scenario",
    *,
    settings: Optional[EngineSettings] = None,
    as_of: Optional[dt.date] = None,
) -> ScenarioResult:
    """
    Deterministic month-by-month projection:
    - Income grows by growth_rate / 12 per month, expenses by inflation_rate / 12.
    - The balance accumulates each month's net starting from current_balance.
    - The attached forecast record carries a fixed +/- band, not a statistical interval.
    """
    if params.months_to_project <= 0:
        raise InvalidParameterError("months_to_project must be positive")
    settings = settings or EngineSettings()
    as_of = as_of or dt.date.today()

    monthly_growth = params.growth_rate / 12
    monthly_inflation = params.inflation_rate / 12

    projected_balance = params.current_balance
    total_income = 0.0
    total_expenses = 0.0
    for month in range(1, params.months_to_project + 1):
        adjusted_income = params.monthly_income * (1 + monthly_growth) ** (month - 1)
        adjusted_expenses = params.monthly_expenses * (1 + monthly_inflation) ** (month - 1)
        projected_balance += adjusted_income - adjusted_expenses
        total_income += adjusted_income
        total_expenses += adjusted_expenses

    net_cash_flow = total_income - total_expenses

    record = create_forecast_record(
        title=scenario_name,
        description=f"Scenario analysis: {scenario_name}",
        type="scenario",
        scenario=scenario_tag(scenario_name),
        forecast_date=as_of,
        target_date=add_months(as_of, params.months_to_project),
        predicted_value=projected_balance,
        confidence_interval=settings.scenario_confidence,
        lower_bound=projected_balance * (1 - settings.scenario_band),
        upper_bound=projected_balance * (1 + settings.scenario_band),
        parameters=params,
        settings=settings,
    )

    return ScenarioResult(
        scenario_name=scenario_name,
        projected_balance=projected_balance,
        monthly_cash_flow=net_cash_flow / params.months_to_project,
        total_income=total_income,
        total_expenses=total_expenses,
        net_cash_flow=net_cash_flow,
        growth_rate=params.growth_rate,
        inflation_rate=params.inflation_rate,
        months_to_project=params.months_to_project,
        forecast_record=record,
    )


def get_optimistic_scenario(
    params: ScenarioParameters,
    *,
    settings: Optional[EngineSettings] = None,
    as_of: Optional[dt.date] = None,
) -> ScenarioResult:
    bands = (settings or EngineSettings()).bands
    shifted = dataclasses.replace(
        params,
        growth_rate=params.growth_rate + bands.optimistic_growth,
        inflation_rate=params.inflation_rate + bands.optimistic_inflation,
    )
    return analyze_scenario(shifted, "Optimistic Scenario", settings=settings, as_of=as_of)


def get_pessimistic_scenario(
    params: ScenarioParameters,
    *,
    settings: Optional[EngineSettings] = None,
    as_of: Optional[dt.date] = None,
) -> ScenarioResult:
    bands = (settings or EngineSettings()).bands
    shifted = dataclasses.replace(
        params,
        growth_rate=params.growth_rate + bands.pessimistic_growth,
        inflation_rate=params.inflation_rate + bands.pessimistic_inflation,
    )
    return analyze_scenario(shifted, "Pessimistic Scenario", settings=settings, as_of=as_of)


def get_realistic_scenario(
    params: ScenarioParameters,
    *,
    settings: Optional[EngineSettings] = None,
    as_of: Optional[dt.date] = None,
) -> ScenarioResult:
    return analyze_scenario(params, "Realistic Scenario", settings=settings, as_of=as_of)


def compare_scenarios(
    params: ScenarioParameters,
    *,
    settings: Optional[EngineSettings] = None,
    as_of: Optional[dt.date] = None,
    executor: Optional[Executor] = None,
) -> ScenarioComparison:
    """Optimistic, realistic and pessimistic variants; branches run on executor when given."""
    as_of = as_of or dt.date.today()
    branches = (get_optimistic_scenario, get_realistic_scenario, get_pessimistic_scenario)
    if executor is None:
        optimistic, realistic, pessimistic = (
            fn(params, settings=settings, as_of=as_of) for fn in branches
        )
    else:
        futures = [executor.submit(fn, params, settings=settings, as_of=as_of) for fn in branches]
        optimistic, realistic, pessimistic = (f.result() for f in futures)
    return ScenarioComparison(optimistic=optimistic, realistic=realistic, pessimistic=pessimistic)


def run_multiple_scenarios(
    base: ScenarioParameters,
    overrides: Sequence[ScenarioOverride],
    *,
    settings: Optional[EngineSettings] = None,
    as_of: Optional[dt.date] = None,
) -> List[ScenarioResult]:
    known = {f.name for f in dataclasses.fields(ScenarioParameters)}
    results: List[ScenarioResult] = []
    for override in overrides:
        unknown = set(override.parameters) - known
        if unknown:
            raise InvalidParameterError(f"Unknown scenario parameters in {override.name!r}: {sorted(unknown)}")
        merged = dataclasses.replace(base, **dict(override.parameters))
        results.append(analyze_scenario(merged, override.name, settings=settings, as_of=as_of))
    return results
