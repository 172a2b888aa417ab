"""Buoy fetcher: parses NDBC realtime2 text into BuoyReadings."""

import logging
from datetime import UTC, datetime

from surfcheck.ingest.ndbc_client import NdbcClient
from surfcheck.models.buoy import BuoyReading

logger = logging.getLogger(__name__)

MISSING = "MM"

# Column positions in the standard meteorological file
# YY MM DD hh mm WDIR WSPD GST WVHT DPD APD MWD PRES ATMP WTMP ...
_WVHT, _DPD, _APD, _MWD, _WTMP = 8, 9, 10, 11, 14
_MIN_COLUMNS = 13


class BuoyFetcher:
    def __init__(self, client: NdbcClient):
        self.client = client

    def fetch(self, station_id: str) -> list[BuoyReading]:
        """All parsed readings for a station, newest first."""
        text = self.client.get_realtime(station_id)
        readings = parse_realtime(station_id, text)
        logger.debug("Parsed %d buoy reading(s) for %s", len(readings), station_id)
        return readings

    def latest(self, station_id: str) -> BuoyReading | None:
        readings = self.fetch(station_id)
        return readings[0] if readings else None


def parse_realtime(station_id: str, text: str) -> list[BuoyReading]:
    """Parse realtime2 rows, skipping headers and short or malformed lines.

    Row order is kept; NDBC lists the newest observation first.
    """
    readings: list[BuoyReading] = []
    for line in text.strip().splitlines():
        if line.startswith("#"):
            continue
        parts = line.split()
        if len(parts) < _MIN_COLUMNS:
            continue
        try:
            readings.append(_parse_row(station_id, parts))
        except ValueError as e:
            logger.warning("Skipping malformed buoy row for %s: %s", station_id, e)
    return readings


def _parse_row(station_id: str, parts: list[str]) -> BuoyReading:
    year, month, day, hour, minute = (int(p) for p in parts[:5])
    return BuoyReading(
        station_id=station_id,
        timestamp=datetime(year, month, day, hour, minute, tzinfo=UTC),
        wave_height_m=_value(parts, _WVHT),
        dominant_period=_value(parts, _DPD),
        average_period=_value(parts, _APD),
        mean_direction=_value(parts, _MWD),
        water_temp_c=_value(parts, _WTMP),
    )


def _value(parts: list[str], index: int) -> float | None:
    if index >= len(parts) or parts[index] == MISSING:
        return None
    return float(parts[index])
