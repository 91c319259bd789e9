import dataclasses
import datetime as dt

import pytest

from fincast_core.domain.errors import InsufficientDataError
from fincast_core.domain.models import EngineSettings, ScenarioParameters
from fincast_core.services import suggestions
from fincast_core.services.risk import calculate_risk_metrics, max_drawdown
from fincast_core.services.scenario import analyze_scenario


def _with_balances(*balances):
    base = analyze_scenario(
        ScenarioParameters(months_to_project=1, monthly_income=0.0, monthly_expenses=0.0, current_balance=0.0),
        as_of=dt.date(2024, 1, 1),
    )
    return [dataclasses.replace(base, projected_balance=b) for b in balances]


def test_risk_metrics_follow_given_order():
    metrics = calculate_risk_metrics(_with_balances(100.0, -50.0, 200.0))

    assert metrics.probability_of_loss == pytest.approx(1 / 3)
    assert metrics.expected_value == pytest.approx(83.3333333)
    # peak 100 -> -50 is a 150% drawdown of the peak
    assert metrics.max_drawdown == pytest.approx(1.5)
    assert metrics.volatility == pytest.approx(102.7402333)


def test_drawdown_depends_on_order():
    assert max_drawdown([100.0, -50.0, 200.0]) == pytest.approx(1.5)
    assert max_drawdown([-50.0, 100.0, 200.0]) == 0.0


def test_drawdown_skips_zero_peak():
    assert max_drawdown([0.0, 0.0, -10.0]) == 0.0


def test_risk_metrics_need_scenarios():
    with pytest.raises(InsufficientDataError):
        calculate_risk_metrics([])


def test_no_recommendations_for_calm_positive_scenarios():
    assert suggestions.generate_recommendations(_with_balances(1000.0, 1100.0, 1200.0)) == []


def test_every_matching_rule_contributes():
    ideas = suggestions.generate_recommendations(_with_balances(20000.0, -30000.0, -40000.0))
    assert ideas == [
        suggestions.HIGH_LOSS_RISK,
        suggestions.HIGH_VOLATILITY,
        suggestions.DEEP_DRAWDOWN,
        suggestions.NEGATIVE_BALANCE,
    ]


def test_thresholds_come_from_settings():
    settings = EngineSettings(volatility_threshold=50.0)
    ideas = suggestions.generate_recommendations(_with_balances(1000.0, 1100.0, 1200.0), settings)
    assert ideas == [suggestions.HIGH_VOLATILITY]
