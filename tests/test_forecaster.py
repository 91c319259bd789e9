import datetime as dt

import pytest

from fincast_core.domain.errors import InsufficientDataError, InvalidParameterError
from fincast_core.domain.models import SeriesPoint
from fincast_core.services.forecaster import generate_scenarios, trend_forecast
from fincast_core.services.stats import add_months


def _series(values, start=dt.date(2024, 1, 1)):
    return [SeriesPoint(date=add_months(start, i), value=v) for i, v in enumerate(values)]


def test_perfect_line_gives_slope_and_r_squared():
    result = trend_forecast(_series([2 * x + 5 for x in range(6)]), forecast_months=3)

    assert result.trend == pytest.approx(2.0)
    assert result.r_squared == pytest.approx(1.0)
    assert len(result.predictions) == 9
    assert result.predictions[-1].value == pytest.approx(2 * 8 + 5)


def test_prediction_dates_step_by_calendar_month():
    result = trend_forecast(_series([1.0, 2.0, 3.0], start=dt.date(2024, 1, 31)), forecast_months=2)
    dates = [p.date for p in result.predictions]
    assert dates == [
        dt.date(2024, 1, 31),
        dt.date(2024, 2, 29),
        dt.date(2024, 3, 31),
        dt.date(2024, 4, 30),
        dt.date(2024, 5, 31),
    ]


def test_predictions_are_floored_at_zero():
    result = trend_forecast(_series([10.0, 5.0, 0.0]), forecast_months=2)
    assert result.trend == pytest.approx(-5.0)
    assert all(p.value >= 0 for p in result.predictions)
    assert result.predictions[3].value == 0.0


def test_noisy_series_has_partial_fit():
    result = trend_forecast(_series([10.0, 14.0, 9.0, 15.0, 12.0]), forecast_months=0)
    assert 0.0 <= result.r_squared < 1.0
    assert len(result.predictions) == 5


def test_requires_three_points():
    with pytest.raises(InsufficientDataError):
        trend_forecast(_series([1.0, 2.0]), forecast_months=3)


def test_rejects_negative_horizon():
    with pytest.raises(InvalidParameterError):
        trend_forecast(_series([1.0, 2.0, 3.0]), forecast_months=-1)


def test_generate_scenarios_brackets_realistic():
    out = generate_scenarios(1000.0, 0.01, 0.005)
    assert out["realistic"] == pytest.approx(1000.0 * 1.01 ** 12)
    assert out["pessimistic"] < out["realistic"] < out["optimistic"]
