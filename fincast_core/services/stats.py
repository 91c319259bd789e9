from __future__ import annotations

import datetime as dt
import math
from typing import Sequence, Tuple

import numpy as np
import pandas as pd
import statsmodels.api as sm

from fincast_core.domain.errors import InsufficientDataError, InvalidParameterError


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Interpolated order statistic of an ascending sequence, p in [0, 1].
    percentile(v, 0) is min(v) and percentile(v, 1) is max(v).
    """
    if not 0.0 <= p <= 1.0:
        raise InvalidParameterError(f"Percentile must be between 0 and 1, got {p}")
    n = len(sorted_values)
    if n == 0:
        raise InsufficientDataError("Cannot take a percentile of an empty series")

    index = p * (n - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    weight = index - lower
    if upper >= n:
        return float(sorted_values[n - 1])
    return float(sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight)


def population_std(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float)))


def fit_line(values: Sequence[float]) -> Tuple[float, float, float]:
    """
    Ordinary least squares of values against their ordinal index.
    Returns (slope, intercept, r_squared); a flat series is a perfect fit.
    """
    y = np.asarray(values, dtype=float)
    if len(y) < 2:
        raise InsufficientDataError("A line fit needs at least 2 points")

    x = sm.add_constant(np.arange(len(y), dtype=float))
    res = sm.OLS(y, x).fit()
    intercept, slope = (float(v) for v in res.params)

    if res.centered_tss <= 0:
        r_squared = 1.0
    else:
        r_squared = float(min(max(res.rsquared, 0.0), 1.0))
    return slope, intercept, r_squared


def add_months(date: dt.date, months: int) -> dt.date:
    """Calendar month arithmetic; days past the target month's end clamp to its last day."""
    return (pd.Timestamp(date) + pd.DateOffset(months=months)).date()
