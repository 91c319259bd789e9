from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Iterable, Optional

from fincast_core.domain.models import (
    SeriesPoint,
    SimulationParameters,
    SimulationResult,
    Transaction,
    TransactionPatterns,
    TrendForecastResult,
)
from fincast_core.services import forecaster, patterns as patterns_service, simulator
from fincast_core.services.random_source import RandomSource


@dataclasses.dataclass(frozen=True)
class TransactionForecast:
    patterns: TransactionPatterns
    simulation: Optional[SimulationResult]
    trend: Optional[TrendForecastResult]


def _month_start(key: str) -> dt.date:
    year, month = (int(part) for part in key.split("-"))
    return dt.date(year, month, 1)


def forecast_from_transactions(
    transactions: Iterable[Transaction],
    sim_params: SimulationParameters,
    forecast_months: int,
    source: Optional[RandomSource] = None,
) -> TransactionForecast:
    """
    Monthly net cash flow feeds both the Monte Carlo simulator and the trend fit.
    A step is skipped (None) when the history is too short for it.
    """
    pats = patterns_service.analyze_transaction_patterns(transactions)
    net = list(pats.net_cash_flow)

    simulation = None
    if len(net) >= 2:
        simulation = simulator.monte_carlo_simulation(net, sim_params, source=source)

    trend = None
    if len(net) >= 3:
        series = [SeriesPoint(date=_month_start(m), value=v) for m, v in zip(pats.months, net)]
        trend = forecaster.trend_forecast(series, forecast_months)

    return TransactionForecast(patterns=pats, simulation=simulation, trend=trend)
