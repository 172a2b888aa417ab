"""NDBC buoy observation models."""

from dataclasses import dataclass
from datetime import datetime

METERS_TO_FEET = 3.28084

# Tolerance around the forecast range for a buoy height to count as a match
HEIGHT_MATCH_TOLERANCE_FT = 1.0


@dataclass(frozen=True)
class BuoyReading:
    """One row of an NDBC realtime2 standard meteorological file.

    Missing values (``MM`` in the feed) are None. Timestamps are UTC.
    """

    station_id: str
    timestamp: datetime
    wave_height_m: float | None = None
    dominant_period: float | None = None
    average_period: float | None = None
    mean_direction: float | None = None
    water_temp_c: float | None = None

    @property
    def wave_height_ft(self) -> float | None:
        if self.wave_height_m is None:
            return None
        return self.wave_height_m * METERS_TO_FEET

    @property
    def water_temp_f(self) -> float | None:
        if self.water_temp_c is None:
            return None
        return self.water_temp_c * 9 / 5 + 32


@dataclass(frozen=True)
class BuoyComparison:
    reading: BuoyReading
    forecast_wave_min: float
    forecast_wave_max: float
    height_match: bool
    height_delta_ft: float | None
