"""Quiet-hours gate: withholds delivery, never evaluation."""

from datetime import datetime

from surfcheck.config.schema import AlertConfig, QuietHoursConfig
from surfcheck.models.alert import Suppression


def is_suppressed(quiet_hours: QuietHoursConfig, now: datetime) -> bool:
    """True if the current hour falls in [start, end).

    start > end wraps past midnight (22 -> 6). start == end is a zero-width
    same-day window and never suppresses.
    """
    if not quiet_hours.enabled:
        return False

    hour = now.hour
    start, end = quiet_hours.start, quiet_hours.end
    if start > end:
        return hour >= start or hour < end
    return start <= hour < end


def format_hour(hour: int) -> str:
    """22 -> '10pm', 6 -> '6am', 0 -> '12am'."""
    ampm = "pm" if hour >= 12 else "am"
    return f"{hour % 12 or 12}{ampm}"


def should_suppress(config: AlertConfig, now: datetime) -> Suppression:
    qh = config.quiet_hours
    if not is_suppressed(qh, now):
        return Suppression(suppress=False)
    return Suppression(
        suppress=True,
        reason=(
            f"Quiet hours active ({format_hour(now.hour)} is between "
            f"{format_hour(qh.start)} and {format_hour(qh.end)})"
        ),
    )
