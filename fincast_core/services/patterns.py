from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from fincast_core.domain.models import Transaction, TransactionPatterns
from fincast_core.services.stats import fit_line, population_std

INCOME_TYPES = frozenset({"income", "transfer_in"})


def analyze_transaction_patterns(transactions: Iterable[Transaction]) -> TransactionPatterns:
    """
    Buckets transactions by calendar month into income / expense / net series.
    income and transfer_in count as income; every other type is an expense.
    """
    rows = [
        {"date": t.date, "amount": float(t.amount), "type": str(t.type).lower()}
        for t in transactions
    ]
    if not rows:
        return TransactionPatterns((), (), (), (), 0.0, 0.0)

    df = pd.DataFrame(rows)
    df["month"] = pd.to_datetime(df["date"]).dt.to_period("M")
    df["flow"] = np.where(df["type"].isin(INCOME_TYPES), "income", "expense")
    monthly = (
        df.groupby(["month", "flow"])["amount"]
        .sum()
        .unstack(fill_value=0.0)
        .reindex(columns=["income", "expense"], fill_value=0.0)
        .sort_index()
    )

    income = [float(v) for v in monthly["income"]]
    expense = [float(v) for v in monthly["expense"]]
    net = [i - e for i, e in zip(income, expense)]

    volatility = population_std(net) if len(net) > 1 else 0.0
    trend = fit_line(net)[0] if len(net) > 1 else 0.0

    return TransactionPatterns(
        months=tuple(str(p) for p in monthly.index),
        monthly_income=tuple(income),
        monthly_expenses=tuple(expense),
        net_cash_flow=tuple(net),
        volatility=volatility,
        trend=trend,
    )
