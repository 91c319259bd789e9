from __future__ import annotations

from typing import Sequence

import numpy as np

from fincast_core.domain.errors import InsufficientDataError
from fincast_core.domain.models import RiskMetrics, ScenarioResult


def max_drawdown(balances: Sequence[float]) -> float:
    """
    Largest (peak - value) / peak seen while walking balances in the order given.
    The order is the caller's, not a time axis. Steps with a zero peak are skipped.
    """
    worst = 0.0
    peak = balances[0]
    for balance in balances:
        if balance > peak:
            peak = balance
        if peak == 0:
            continue
        drawdown = (peak - balance) / peak
        if drawdown > worst:
            worst = drawdown
    return float(worst)


def calculate_risk_metrics(scenarios: Sequence[ScenarioResult]) -> RiskMetrics:
    if not scenarios:
        raise InsufficientDataError("Risk metrics need at least one scenario")

    balances = np.array([s.projected_balance for s in scenarios], dtype=float)
    return RiskMetrics(
        volatility=float(balances.std()),
        max_drawdown=max_drawdown(balances.tolist()),
        probability_of_loss=float(np.count_nonzero(balances < 0) / len(balances)),
        expected_value=float(balances.mean()),
    )
