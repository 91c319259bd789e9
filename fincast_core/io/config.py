from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from fincast_core.domain.models import (
    EngineSettings,
    ScenarioBands,
    ScenarioOverride,
    ScenarioParameters,
    SimulationParameters,
)


def load_engine_settings(path: str | Path) -> EngineSettings:
    data = _read_json(path)
    bands = data.get("bands", {}) or {}
    return EngineSettings(
        scenario_confidence=float(data.get("scenario_confidence", 85.0)),
        scenario_band=float(data.get("scenario_band", 0.15)),
        currency=str(data.get("currency", "TRY")),
        category=str(data.get("category", "balance")),
        loss_probability_threshold=float(data.get("loss_probability_threshold", 0.3)),
        volatility_threshold=float(data.get("volatility_threshold", 10000.0)),
        drawdown_threshold=float(data.get("drawdown_threshold", 0.2)),
        bands=ScenarioBands(
            optimistic_growth=float(bands.get("optimistic_growth", 0.02)),
            optimistic_inflation=float(bands.get("optimistic_inflation", -0.01)),
            pessimistic_growth=float(bands.get("pessimistic_growth", -0.02)),
            pessimistic_inflation=float(bands.get("pessimistic_inflation", 0.02)),
        ),
    )


def load_simulation_parameters(path: str | Path) -> SimulationParameters:
    data = _read_json(path)
    volatility = data.get("volatility")
    return SimulationParameters(
        iterations=int(data.get("iterations", 1000)),
        time_horizon_months=int(data.get("time_horizon_months", 12)),
        volatility=float(volatility) if volatility is not None else None,
        confidence_level=float(data.get("confidence_level", 0.95)),
    )


def load_scenario_parameters(path: str | Path) -> ScenarioParameters:
    return scenario_parameters_from_dict(_read_json(path))


def scenario_parameters_from_dict(data: Dict[str, Any]) -> ScenarioParameters:
    return ScenarioParameters(
        months_to_project=int(data["months_to_project"]),
        monthly_income=float(data["monthly_income"]),
        monthly_expenses=float(data["monthly_expenses"]),
        current_balance=float(data["current_balance"]),
        growth_rate=float(data.get("growth_rate", 0.02)),
        inflation_rate=float(data.get("inflation_rate", 0.05)),
    )


def load_scenario_overrides(path: str | Path) -> List[ScenarioOverride]:
    data = _read_json(path)
    items = data.get("scenarios", []) if isinstance(data, dict) else data
    return [
        ScenarioOverride(name=str(item["name"]), parameters=item.get("parameters", {}) or {})
        for item in items
    ]


def _read_json(path: str | Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
