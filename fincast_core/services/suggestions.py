from __future__ import annotations

from typing import List, Optional, Sequence

from fincast_core.domain.models import EngineSettings, ScenarioResult
from fincast_core.services.risk import calculate_risk_metrics

HIGH_LOSS_RISK = "High risk of loss across scenarios. Consider a more conservative approach."
HIGH_VOLATILITY = "Scenario outcomes are highly volatile. Diversify your portfolio."
DEEP_DRAWDOWN = "Maximum drawdown exceeds the tolerated level. Apply risk management strategies."
NEGATIVE_BALANCE = "Average projected balance is negative. Review your expenses."


def generate_recommendations(
    scenarios: Sequence[ScenarioResult],
    settings: Optional[EngineSettings] = None,
) -> List[str]:
    """Rule-based advice; every rule is checked, so several messages can apply at once."""
    settings = settings or EngineSettings()
    metrics = calculate_risk_metrics(scenarios)

    ideas: List[str] = []
    if metrics.probability_of_loss > settings.loss_probability_threshold:
        ideas.append(HIGH_LOSS_RISK)
    if metrics.volatility > settings.volatility_threshold:
        ideas.append(HIGH_VOLATILITY)
    if metrics.max_drawdown > settings.drawdown_threshold:
        ideas.append(DEEP_DRAWDOWN)
    if metrics.expected_value < 0:
        ideas.append(NEGATIVE_BALANCE)
    return ideas
