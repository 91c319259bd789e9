from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from fincast_core.domain.errors import InsufficientDataError, InvalidParameterError
from fincast_core.domain.models import SimulationParameters, SimulationResult
from fincast_core.services.random_source import RandomSource, default_source, generate_normal
from fincast_core.services.stats import percentile, population_std

logger = logging.getLogger(__name__)

PERCENTILE_LEVELS = {
    "p10": 0.10,
    "p25": 0.25,
    "p75": 0.75,
    "p90": 0.90,
    "p95": 0.95,
    "p99": 0.99,
}


def _validate(params: SimulationParameters) -> None:
    if params.iterations <= 0:
        raise InvalidParameterError("iterations must be positive")
    if params.time_horizon_months <= 0:
        raise InvalidParameterError("time_horizon_months must be positive")
    if not 0.0 < params.confidence_level < 1.0:
        raise InvalidParameterError("confidence_level must be in (0, 1)")
    if params.volatility is not None and params.volatility < 0:
        raise InvalidParameterError("volatility cannot be negative")


def monte_carlo_simulation(
    historical_data: Sequence[float],
    params: SimulationParameters,
    source: Optional[RandomSource] = None,
) -> SimulationResult:
    """
    Monte Carlo over historical balances:
    - Every trial starts at the historical mean.
    - Each month compounds a N(0, volatility) return onto the trial value.
    - Volatility defaults to the population std of the history.
    """
    if len(historical_data) < 2:
        raise InsufficientDataError("Insufficient historical data for simulation")
    _validate(params)

    source = source or default_source()
    history = np.asarray(historical_data, dtype=float)
    start = float(history.mean())
    volatility = params.volatility if params.volatility is not None else population_std(history)

    logger.debug(
        "monte carlo: %d iterations x %d months, start=%.2f, volatility=%.4f",
        params.iterations,
        params.time_horizon_months,
        start,
        volatility,
    )

    trials = np.empty(params.iterations, dtype=float)
    for i in range(params.iterations):
        value = start
        for _ in range(params.time_horizon_months):
            value *= 1 + generate_normal(0.0, volatility, source)
        trials[i] = value
    trials.sort()

    cl = params.confidence_level
    return SimulationResult(
        mean=float(trials.mean()),
        median=float(np.median(trials)),
        percentiles={key: percentile(trials, p) for key, p in PERCENTILE_LEVELS.items()},
        confidence_interval={
            "lower": percentile(trials, (1 - cl) / 2),
            "upper": percentile(trials, 1 - (1 - cl) / 2),
        },
        scenarios=tuple(float(v) for v in trials),
    )
