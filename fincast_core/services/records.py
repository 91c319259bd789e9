from __future__ import annotations

import dataclasses
import datetime as dt
import json
import re
from typing import Any, List, Optional

from fincast_core.domain.errors import InvalidParameterError
from fincast_core.domain.models import (
    EngineSettings,
    ForecastRecord,
    SimulationParameters,
    SimulationResult,
    TrendForecastResult,
)
from fincast_core.io.store import ForecastStore
from fincast_core.services.stats import add_months

FORECAST_TYPES = ("monte_carlo", "prophet", "scenario", "trend")


def scenario_tag(name: str) -> str:
    return re.sub(r"\s+", "_", name.lower())


def _serialize(parameters: Any) -> Optional[str]:
    if parameters is None:
        return None
    if dataclasses.is_dataclass(parameters) and not isinstance(parameters, type):
        parameters = dataclasses.asdict(parameters)
    return json.dumps(parameters, default=str)


def create_forecast_record(
    title: str,
    type: str,
    scenario: Optional[str],
    forecast_date: dt.date,
    target_date: dt.date,
    predicted_value: float,
    confidence_interval: float,
    lower_bound: Optional[float] = None,
    upper_bound: Optional[float] = None,
    category: Optional[str] = None,
    account_id: Optional[str] = None,
    parameters: Any = None,
    description: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> ForecastRecord:
    if type not in FORECAST_TYPES:
        raise InvalidParameterError(f"Unknown forecast type: {type}")
    settings = settings or EngineSettings()
    return ForecastRecord(
        title=title,
        description=description or f"{type} forecast for {category or 'financial data'}",
        type=type,
        scenario=scenario,
        forecast_date=forecast_date,
        target_date=target_date,
        predicted_value=float(predicted_value),
        confidence_interval=float(confidence_interval),
        lower_bound=lower_bound,
        upper_bound=upper_bound,
        currency=settings.currency,
        category=category or settings.category,
        account_id=account_id,
        parameters=_serialize(parameters),
        is_active=True,
    )


def simulation_record(
    result: SimulationResult,
    params: SimulationParameters,
    title: str = "Monte Carlo forecast",
    as_of: Optional[dt.date] = None,
    category: Optional[str] = None,
    account_id: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> ForecastRecord:
    """Median outcome with the simulated confidence interval as bounds."""
    as_of = as_of or dt.date.today()
    return create_forecast_record(
        title=title,
        type="monte_carlo",
        scenario=None,
        forecast_date=as_of,
        target_date=add_months(as_of, params.time_horizon_months),
        predicted_value=result.median,
        confidence_interval=params.confidence_level * 100,
        lower_bound=result.confidence_interval["lower"],
        upper_bound=result.confidence_interval["upper"],
        category=category,
        account_id=account_id,
        parameters=params,
        settings=settings,
    )


def trend_record(
    result: TrendForecastResult,
    title: str = "Trend forecast",
    as_of: Optional[dt.date] = None,
    category: Optional[str] = None,
    account_id: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> ForecastRecord:
    """Last predicted point; R^2 (as a percentage) stands in for confidence."""
    last = result.predictions[-1]
    return create_forecast_record(
        title=title,
        type="trend",
        scenario=None,
        forecast_date=as_of or dt.date.today(),
        target_date=last.date,
        predicted_value=last.value,
        confidence_interval=result.r_squared * 100,
        category=category,
        account_id=account_id,
        parameters={"trend": result.trend, "r_squared": result.r_squared},
        settings=settings,
    )


def save_scenario_forecast(store: ForecastStore, record: ForecastRecord) -> ForecastRecord:
    return store.create_forecast(record)


def get_scenario_forecasts(store: ForecastStore) -> List[ForecastRecord]:
    return store.get_forecasts()


def delete_scenario_forecast(store: ForecastStore, forecast_id: str) -> None:
    store.delete_forecast(forecast_id)
