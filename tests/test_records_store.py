import datetime as dt
import json

import pytest

from fincast_core.domain.errors import InvalidParameterError
from fincast_core.domain.models import ScenarioParameters, SeriesPoint, SimulationParameters
from fincast_core.io.store import JsonForecastStore
from fincast_core.services import records
from fincast_core.services.forecaster import trend_forecast
from fincast_core.services.random_source import NumpyRandomSource
from fincast_core.services.scenario import analyze_scenario
from fincast_core.services.simulator import monte_carlo_simulation

AS_OF = dt.date(2024, 6, 30)


def _scenario_record():
    params = ScenarioParameters(months_to_project=6, monthly_income=4000.0, monthly_expenses=3000.0, current_balance=500.0)
    return analyze_scenario(params, "Rainy Day", as_of=AS_OF).forecast_record


def test_default_description_mentions_type_and_category():
    record = records.create_forecast_record(
        title="x",
        type="trend",
        scenario=None,
        forecast_date=AS_OF,
        target_date=AS_OF,
        predicted_value=1.0,
        confidence_interval=50.0,
    )
    assert record.description == "trend forecast for financial data"
    assert record.category == "balance"
    assert record.parameters is None


def test_unknown_forecast_type_is_rejected():
    with pytest.raises(InvalidParameterError):
        records.create_forecast_record("x", "guess", None, AS_OF, AS_OF, 1.0, 50.0)


def test_simulation_record_uses_interval_as_bounds():
    params = SimulationParameters(iterations=200, time_horizon_months=3)
    result = monte_carlo_simulation([100.0, 120.0, 110.0], params, source=NumpyRandomSource(5))
    record = records.simulation_record(result, params, as_of=AS_OF, account_id="acc-1")

    assert record.type == "monte_carlo"
    assert record.target_date == dt.date(2024, 9, 30)
    assert record.predicted_value == result.median
    assert record.lower_bound == result.confidence_interval["lower"]
    assert record.upper_bound == result.confidence_interval["upper"]
    assert record.confidence_interval == pytest.approx(95.0)
    assert record.account_id == "acc-1"
    assert json.loads(record.parameters)["iterations"] == 200


def test_trend_record_targets_last_prediction():
    series = [SeriesPoint(dt.date(2024, m, 1), float(m)) for m in range(1, 5)]
    result = trend_forecast(series, forecast_months=2)
    record = records.trend_record(result, as_of=AS_OF)

    assert record.target_date == dt.date(2024, 6, 1)
    assert record.predicted_value == pytest.approx(6.0)
    assert record.confidence_interval == pytest.approx(100.0)


def test_store_create_list_delete(tmp_path):
    store = JsonForecastStore(tmp_path / "forecasts.json")
    assert records.get_scenario_forecasts(store) == []

    saved = records.save_scenario_forecast(store, _scenario_record())
    assert saved.id

    listed = records.get_scenario_forecasts(store)
    assert listed == [saved]
    assert listed[0].target_date == dt.date(2024, 12, 30)

    records.delete_scenario_forecast(store, saved.id)
    assert records.get_scenario_forecasts(store) == []


def test_store_delete_unknown_id(tmp_path):
    store = JsonForecastStore(tmp_path / "forecasts.json")
    store.create_forecast(_scenario_record())
    with pytest.raises(KeyError):
        store.delete_forecast("missing")
    assert len(store.get_forecasts()) == 1
