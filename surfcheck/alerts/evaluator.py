"""Per-day alert decision with confidence tiers by forecast horizon.

Tiers tighten toward the present:
- 4+ days out: Fair-Good or better (forecasts are fuzzy)
- 1-3 days out: Fair or better
- Day of: Good or better, and only before the dawn patrol cutoff
"""

import math
from datetime import datetime

from surfcheck.config.schema import AlertConfig
from surfcheck.models.alert import AlertDecision
from surfcheck.models.forecast import (
    ForecastDay,
    RatingKey,
    rating_display,
    rating_value,
)

DAWN_PATROL_CUTOFF_HOUR = 8


def days_out(forecast: ForecastDay, now: datetime) -> int:
    """Calendar days from today to the forecast date (0 = today)."""
    return (forecast.date - now.date()).days


def min_rating_for_days_out(n_days: int) -> RatingKey:
    if n_days >= 4:
        return RatingKey.FAIR_TO_GOOD
    if n_days >= 1:
        return RatingKey.FAIR
    return RatingKey.GOOD


def is_past_dawn_patrol(now: datetime) -> bool:
    return now.hour >= DAWN_PATROL_CUTOFF_HOUR


def days_out_label(n_days: int) -> str:
    if n_days == 0:
        return "today"
    if n_days == 1:
        return "tomorrow"
    return f"{n_days} days out"


def round_ft(value: float) -> int:
    """Round half up, as wave heights are shown to surfers."""
    return math.floor(value + 0.5)


def evaluate(forecast: ForecastDay, config: AlertConfig, now: datetime) -> AlertDecision:
    """Decide whether one forecast day is worth an alert. Never raises."""
    n_days = days_out(forecast, now)

    if n_days < 0:
        return AlertDecision(forecast, False, "Date is in the past")

    if n_days == 0 and is_past_dawn_patrol(now):
        return AlertDecision(
            forecast,
            False,
            f"Too late for same-day alert (past {DAWN_PATROL_CUTOFF_HOUR}am)",
        )

    # Overlap test: any part of the forecast range inside the window passes.
    if forecast.wave_max < config.wave_min:
        return AlertDecision(
            forecast,
            False,
            f"Wave height too small ({round_ft(forecast.wave_max)}ft "
            f"< {config.wave_min:g}ft)",
        )
    if forecast.wave_min > config.wave_max:
        return AlertDecision(
            forecast,
            False,
            f"Wave height too big ({round_ft(forecast.wave_min)}ft "
            f"> {config.wave_max:g}ft)",
        )

    min_rating = min_rating_for_days_out(n_days)
    if rating_value(forecast.rating) < rating_value(min_rating):
        return AlertDecision(
            forecast,
            False,
            f"Rating {forecast.rating_display} below "
            f"{rating_display(min_rating).lower()} ({n_days} days out)",
        )

    weekend_note = " (weekend!)" if forecast.is_weekend else ""
    return AlertDecision(
        forecast,
        True,
        f"{forecast.rating_display} conditions{weekend_note} - {days_out_label(n_days)}",
    )
