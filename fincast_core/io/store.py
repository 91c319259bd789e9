from __future__ import annotations

import dataclasses
import datetime as dt
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Protocol

from fincast_core.domain.models import ForecastRecord

logger = logging.getLogger(__name__)


class ForecastStore(Protocol):
    def create_forecast(self, record: ForecastRecord) -> ForecastRecord:
        ...

    def get_forecasts(self) -> List[ForecastRecord]:
        ...

    def delete_forecast(self, forecast_id: str) -> None:
        ...


def record_to_json(record: ForecastRecord) -> Dict[str, Any]:
    data = dataclasses.asdict(record)
    data["forecast_date"] = record.forecast_date.isoformat()
    data["target_date"] = record.target_date.isoformat()
    return data


def record_from_json(data: Dict[str, Any]) -> ForecastRecord:
    payload = dict(data)
    payload["forecast_date"] = dt.date.fromisoformat(payload["forecast_date"])
    payload["target_date"] = dt.date.fromisoformat(payload["target_date"])
    return ForecastRecord(**payload)


class JsonForecastStore:
    """
    Keeps forecast records in a single JSON file.
    Ids are assigned on create; the file is rewritten on every change.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, rows: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)

    def create_forecast(self, record: ForecastRecord) -> ForecastRecord:
        stored = dataclasses.replace(record, id=str(uuid.uuid4()))
        rows = self._read()
        rows.append(record_to_json(stored))
        self._write(rows)
        logger.info("stored forecast %s (%s) in %s", stored.id, stored.type, self.path)
        return stored

    def get_forecasts(self) -> List[ForecastRecord]:
        return [record_from_json(row) for row in self._read()]

    def delete_forecast(self, forecast_id: str) -> None:
        rows = self._read()
        kept = [row for row in rows if row.get("id") != forecast_id]
        if len(kept) == len(rows):
            raise KeyError(forecast_id)
        self._write(kept)
        logger.info("deleted forecast %s from %s", forecast_id, self.path)
