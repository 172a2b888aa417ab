"""Alert decision models."""

from dataclasses import dataclass
from datetime import datetime

from surfcheck.config.schema import SpotConfig
from surfcheck.models.forecast import ForecastDay


@dataclass(frozen=True)
class AlertDecision:
    forecast: ForecastDay
    should_alert: bool
    reason: str


@dataclass(frozen=True)
class Alert:
    spot: SpotConfig
    forecasts: list[ForecastDay]
    generated_at: datetime


@dataclass(frozen=True)
class Suppression:
    suppress: bool
    reason: str = ""
