"""Offline forecast source: daily forecasts from a JSON file."""

import json
import logging
from datetime import date
from pathlib import Path

from surfcheck.config.schema import SpotConfig
from surfcheck.models.forecast import ForecastDay, Wind

logger = logging.getLogger(__name__)


class ForecastFileError(Exception):
    pass


class FileForecastSource:
    """Reads ``{"<spotId>": [{"date", "waveMin", "waveMax", "rating", "wind"?}]}``."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict[str, list] | None = None

    def fetch(self, spot: SpotConfig) -> list[ForecastDay]:
        records = self._load().get(spot.id, [])
        days: list[ForecastDay] = []
        for record in records:
            try:
                days.append(_parse_record(spot.id, record))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed forecast for %s: %s", spot.id, e)
        days.sort(key=lambda d: d.date)
        return days

    def _load(self) -> dict[str, list]:
        if self._data is None:
            try:
                with open(self.path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                raise ForecastFileError(f"Cannot read {self.path}: {e}") from e
            if not isinstance(data, dict):
                raise ForecastFileError(f"{self.path}: expected an object keyed by spot id")
            self._data = data
        return self._data


def _parse_record(spot_id: str, record: dict) -> ForecastDay:
    wind = record.get("wind")
    return ForecastDay(
        spot_id=spot_id,
        date=date.fromisoformat(record["date"]),
        wave_min=float(record["waveMin"]),
        wave_max=float(record["waveMax"]),
        rating=str(record.get("rating", "")),
        wind=(
            Wind(
                speed=float(wind["speed"]),
                direction=float(wind["direction"]),
                direction_type=wind.get("directionType", ""),
            )
            if wind
            else None
        ),
        human_relation=record.get("humanRelation", ""),
    )
