from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from fincast_core.domain.errors import InsufficientDataError, InvalidParameterError
from fincast_core.domain.models import SeriesPoint, TrendForecastResult
from fincast_core.services.stats import add_months, fit_line

logger = logging.getLogger(__name__)


def trend_forecast(series: Sequence[SeriesPoint], forecast_months: int) -> TrendForecastResult:
    """
    Linear trend forecaster:
    - Fits OLS of value on month index over the observed series.
    - Re-predicts the history and extends it by forecast_months.
    - Predicted values are floored at zero.
    """
    if len(series) < 3:
        raise InsufficientDataError("Insufficient data for trend analysis")
    if forecast_months < 0:
        raise InvalidParameterError("forecast_months cannot be negative")

    slope, intercept, r_squared = fit_line([p.value for p in series])
    logger.debug("trend fit: slope=%.4f intercept=%.4f r2=%.4f", slope, intercept, r_squared)

    start_date = series[0].date
    predictions: List[SeriesPoint] = []
    for i in range(len(series) + forecast_months):
        predictions.append(
            SeriesPoint(
                date=add_months(start_date, i),
                value=max(0.0, slope * i + intercept),
            )
        )

    return TrendForecastResult(predictions=tuple(predictions), trend=slope, r_squared=r_squared)


def generate_scenarios(
    current_value: float,
    historical_growth: float,
    volatility: float,
    horizon_months: int = 12,
) -> Dict[str, float]:
    """Compound current_value at growth, growth + volatility and growth - volatility."""
    if horizon_months <= 0:
        raise InvalidParameterError("horizon_months must be positive")
    return {
        "optimistic": current_value * (1 + historical_growth + volatility) ** horizon_months,
        "realistic": current_value * (1 + historical_growth) ** horizon_months,
        "pessimistic": current_value * (1 + historical_growth - volatility) ** horizon_months,
    }
