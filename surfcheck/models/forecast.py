"""Forecast data models and the surf rating scale."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from surfcheck.models.common import SpotId


class RatingKey(StrEnum):
    FLAT = "FLAT"
    VERY_POOR = "VERY_POOR"
    POOR = "POOR"
    POOR_TO_FAIR = "POOR_TO_FAIR"
    FAIR = "FAIR"
    FAIR_TO_GOOD = "FAIR_TO_GOOD"
    GOOD = "GOOD"
    GOOD_TO_EPIC = "GOOD_TO_EPIC"
    EPIC = "EPIC"


# Ranks tie on purpose: the provider scale is coarser than its labels.
RATING_VALUES: dict[RatingKey, int] = {
    RatingKey.FLAT: 0,
    RatingKey.VERY_POOR: 0,
    RatingKey.POOR: 1,
    RatingKey.POOR_TO_FAIR: 1,
    RatingKey.FAIR: 2,
    RatingKey.FAIR_TO_GOOD: 3,
    RatingKey.GOOD: 4,
    RatingKey.GOOD_TO_EPIC: 5,
    RatingKey.EPIC: 5,
}

RATING_DISPLAY: dict[RatingKey, str] = {
    RatingKey.FLAT: "Flat",
    RatingKey.VERY_POOR: "Very Poor",
    RatingKey.POOR: "Poor",
    RatingKey.POOR_TO_FAIR: "Poor-Fair",
    RatingKey.FAIR: "Fair",
    RatingKey.FAIR_TO_GOOD: "Fair-Good",
    RatingKey.GOOD: "Good",
    RatingKey.GOOD_TO_EPIC: "Good-Epic",
    RatingKey.EPIC: "Epic",
}

WEEKEND_DAYS = (4, 5, 6)  # Fri, Sat, Sun


def rating_value(key: str) -> int:
    """Rank of a rating key. Unknown keys rank 0 so they never alert."""
    return RATING_VALUES.get(key, 0)


def rating_display(key: str) -> str:
    return RATING_DISPLAY.get(key, key)


@dataclass(frozen=True)
class Wind:
    speed: float  # mph
    direction: float  # degrees true
    direction_type: str = ""


@dataclass(frozen=True)
class ForecastDay:
    spot_id: SpotId
    date: date
    wave_min: float  # ft
    wave_max: float  # ft
    rating: str  # RatingKey value, kept raw so unknown provider keys survive
    wind: Wind | None = None
    human_relation: str = ""

    @property
    def rating_display(self) -> str:
        return rating_display(self.rating)

    @property
    def is_weekend(self) -> bool:
        return self.date.weekday() in WEEKEND_DAYS

    @property
    def day_of_week(self) -> str:
        return self.date.strftime("%A")

    @property
    def date_string(self) -> str:
        return f"{self.date:%A, %b} {self.date.day}"
