from fincast_core.services.forecaster import generate_scenarios, trend_forecast  # noqa: F401
from fincast_core.services.patterns import analyze_transaction_patterns  # noqa: F401
from fincast_core.services.pipeline import forecast_from_transactions  # noqa: F401
from fincast_core.services.risk import calculate_risk_metrics  # noqa: F401
from fincast_core.services.scenario import (  # noqa: F401
    analyze_scenario,
    compare_scenarios,
    get_optimistic_scenario,
    get_pessimistic_scenario,
    get_realistic_scenario,
    run_multiple_scenarios,
)
from fincast_core.services.simulator import monte_carlo_simulation  # noqa: F401
from fincast_core.services.stats import percentile  # noqa: F401
from fincast_core.services.suggestions import generate_recommendations  # noqa: F401

__all__ = [
    "analyze_scenario",
    "analyze_transaction_patterns",
    "calculate_risk_metrics",
    "compare_scenarios",
    "forecast_from_transactions",
    "generate_recommendations",
    "generate_scenarios",
    "get_optimistic_scenario",
    "get_pessimistic_scenario",
    "get_realistic_scenario",
    "monte_carlo_simulation",
    "percentile",
    "run_multiple_scenarios",
    "trend_forecast",
]
