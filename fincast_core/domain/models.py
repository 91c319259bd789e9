from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclasses.dataclass(frozen=True)
class Transaction:
    date: dt.date
    amount: float
    type: str  # "income", "transfer_in", "expense", "transfer_out", ...
    category: Optional[str] = None
    account_id: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class SeriesPoint:
    date: dt.date
    value: float


@dataclasses.dataclass(frozen=True)
class SimulationParameters:
    iterations: int = 1000
    time_horizon_months: int = 12
    volatility: Optional[float] = None  # None -> population std of the history
    confidence_level: float = 0.95


@dataclasses.dataclass(frozen=True)
class SimulationResult:
    mean: float
    median: float
    percentiles: Dict[str, float]  # keys "p10","p25","p75","p90","p95","p99"
    confidence_interval: Dict[str, float]  # keys "lower","upper"
    scenarios: Tuple[float, ...]

    def snapshot(self) -> Dict[str, Any]:
        return {
            "mean": self.mean,
            "median": self.median,
            "percentiles": dict(self.percentiles),
            "confidence_interval": dict(self.confidence_interval),
        }


@dataclasses.dataclass(frozen=True)
class TrendForecastResult:
    predictions: Tuple[SeriesPoint, ...]
    trend: float
    r_squared: float

    def to_timeseries(self) -> list[Tuple[str, float]]:
        return [(p.date.isoformat(), p.value) for p in self.predictions]


@dataclasses.dataclass(frozen=True)
class ScenarioParameters:
    months_to_project: int
    monthly_income: float
    monthly_expenses: float
    current_balance: float
    growth_rate: float = 0.02  # annual
    inflation_rate: float = 0.05  # annual


@dataclasses.dataclass(frozen=True)
class ScenarioOverride:
    name: str
    parameters: Mapping[str, Any]


@dataclasses.dataclass(frozen=True)
class ForecastRecord:
    title: str
    description: str
    type: str  # "monte_carlo" | "prophet" | "scenario" | "trend"
    scenario: Optional[str]
    forecast_date: dt.date
    target_date: dt.date
    predicted_value: float
    confidence_interval: float
    lower_bound: Optional[float]
    upper_bound: Optional[float]
    currency: str
    category: str
    account_id: Optional[str] = None
    parameters: Optional[str] = None  # JSON
    is_active: bool = True
    id: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class ScenarioResult:
    scenario_name: str
    projected_balance: float
    monthly_cash_flow: float
    total_income: float
    total_expenses: float
    net_cash_flow: float
    growth_rate: float
    inflation_rate: float
    months_to_project: int
    forecast_record: ForecastRecord


@dataclasses.dataclass(frozen=True)
class ScenarioComparison:
    optimistic: ScenarioResult
    realistic: ScenarioResult
    pessimistic: ScenarioResult

    def as_list(self) -> list[ScenarioResult]:
        return [self.optimistic, self.realistic, self.pessimistic]


@dataclasses.dataclass(frozen=True)
class RiskMetrics:
    volatility: float
    max_drawdown: float
    probability_of_loss: float
    expected_value: float


@dataclasses.dataclass(frozen=True)
class TransactionPatterns:
    months: Tuple[str, ...]  # "YYYY-MM", ascending
    monthly_income: Tuple[float, ...]
    monthly_expenses: Tuple[float, ...]
    net_cash_flow: Tuple[float, ...]
    volatility: float
    trend: float


@dataclasses.dataclass(frozen=True)
class ScenarioBands:
    optimistic_growth: float = 0.02
    optimistic_inflation: float = -0.01
    pessimistic_growth: float = -0.02
    pessimistic_inflation: float = 0.02


@dataclasses.dataclass(frozen=True)
class EngineSettings:
    scenario_confidence: float = 85.0
    scenario_band: float = 0.15  # +/- share of projected balance
    currency: str = "TRY"
    category: str = "balance"
    loss_probability_threshold: float = 0.3
    volatility_threshold: float = 10000.0  # currency units
    drawdown_threshold: float = 0.2
    bands: ScenarioBands = dataclasses.field(default_factory=ScenarioBands)
