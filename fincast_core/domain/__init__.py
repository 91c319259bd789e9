from fincast_core.domain.errors import (  # noqa: F401
    ForecastEngineError,
    InsufficientDataError,
    InvalidParameterError,
)
from fincast_core.domain.models import (  # noqa: F401
    EngineSettings,
    ForecastRecord,
    RiskMetrics,
    ScenarioBands,
    ScenarioComparison,
    ScenarioOverride,
    ScenarioParameters,
    ScenarioResult,
    SeriesPoint,
    SimulationParameters,
    SimulationResult,
    Transaction,
    TransactionPatterns,
    TrendForecastResult,
)

__all__ = [
    "EngineSettings",
    "ForecastEngineError",
    "ForecastRecord",
    "InsufficientDataError",
    "InvalidParameterError",
    "RiskMetrics",
    "ScenarioBands",
    "ScenarioComparison",
    "ScenarioOverride",
    "ScenarioParameters",
    "ScenarioResult",
    "SeriesPoint",
    "SimulationParameters",
    "SimulationResult",
    "Transaction",
    "TransactionPatterns",
    "TrendForecastResult",
]
