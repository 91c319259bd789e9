from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from fincast_core.domain.models import Transaction


REQUIRED_COLUMNS = {"date", "amount", "type"}


def load_ledger(csv_path: str | Path) -> List[Transaction]:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path)
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in ledger CSV: {missing}")

    df["date"] = pd.to_datetime(df["date"]).dt.date
    entries: List[Transaction] = []
    for _, row in df.iterrows():
        entries.append(
            Transaction(
                date=row["date"],
                amount=float(row["amount"]),
                type=str(row["type"]).lower(),
                category=_optional_str(row.get("category")),
                account_id=_optional_str(row.get("account_id")),
            )
        )
    return entries


def _optional_str(value) -> str | None:
    if value is None or pd.isna(value):
        return None
    return str(value)
