from fincast_core.io.ledger import load_ledger  # noqa: F401
from fincast_core.io.config import (  # noqa: F401
    load_engine_settings,
    load_scenario_overrides,
    load_scenario_parameters,
    load_simulation_parameters,
)
from fincast_core.io.store import ForecastStore, JsonForecastStore  # noqa: F401

__all__ = [
    "ForecastStore",
    "JsonForecastStore",
    "load_engine_settings",
    "load_ledger",
    "load_scenario_overrides",
    "load_scenario_parameters",
    "load_simulation_parameters",
]
