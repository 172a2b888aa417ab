"""Pydantic v2 configuration schema with strict validation."""

import re
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator

SURFLINE_BASE_URL = "https://services.surfline.com"
SURFLINE_REPORT_URL = "https://www.surfline.com/surf-report"
NDBC_BASE_URL = "https://www.ndbc.noaa.gov/data/realtime2"


class SpotConfig(BaseModel):
    model_config = {"extra": "forbid"}

    id: str
    name: str
    slug: str = ""
    url: str = ""
    enabled: bool = True

    @model_validator(mode="after")
    def _fill_slug_and_url(self) -> "SpotConfig":
        if not self.slug:
            self.slug = re.sub(r"[^a-z0-9]+", "-", self.name.lower()).strip("-")
        if not self.url:
            self.url = f"{SURFLINE_REPORT_URL}/{self.slug}/{self.id}"
        return self


class QuietHoursConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    start: int = Field(default=22, ge=0, le=23)
    end: int = Field(default=6, ge=0, le=23)


class AlertConfig(BaseModel):
    """Alert thresholds. wave_min <= wave_max is the caller's responsibility."""

    model_config = {"extra": "forbid"}

    wave_min: float = Field(default=2.0, ge=0.0)
    wave_max: float = Field(default=6.0, ge=0.0)
    forecast_days: int = Field(default=7, ge=0)
    quiet_hours: QuietHoursConfig = QuietHoursConfig()


class StateConfig(BaseModel):
    model_config = {"extra": "forbid"}

    path: str = "data/state.json"
    retention_days: int = Field(default=7, ge=0)


class SurflineConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = SURFLINE_BASE_URL
    timeout: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=2.0, ge=0.0)
    days: int = Field(default=6, ge=1, le=17)


class BuoyConfig(BaseModel):
    """NDBC station used to cross-check forecasts. 44091 is Barnegat, NJ."""

    model_config = {"extra": "forbid"}

    station_id: str = "44091"
    name: str = "Barnegat, NJ"
    base_url: str = NDBC_BASE_URL
    timeout: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=2.0, ge=0.0)


class SurfCheckConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timezone: str = "America/New_York"
    alerts: AlertConfig = AlertConfig()
    state: StateConfig = StateConfig()
    surfline: SurflineConfig = SurflineConfig()
    buoy: BuoyConfig = BuoyConfig()
    spots: list[SpotConfig] = []

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {value!r}") from e
        return value
