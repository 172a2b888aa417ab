"""Batch evaluation across a forecast window."""

import logging
from datetime import datetime, timedelta

from surfcheck.alerts.evaluator import evaluate
from surfcheck.config.schema import AlertConfig, SpotConfig
from surfcheck.models.alert import Alert, AlertDecision
from surfcheck.models.forecast import ForecastDay

logger = logging.getLogger(__name__)


def within_window(forecast: ForecastDay, config: AlertConfig, now: datetime) -> bool:
    last_day = (now + timedelta(days=config.forecast_days)).date()
    return forecast.date <= last_day


def evaluate_all(
    forecasts: list[ForecastDay], config: AlertConfig, now: datetime
) -> list[AlertDecision]:
    """Evaluate every forecast inside the look-ahead window, keeping input order."""
    return [
        evaluate(f, config, now) for f in forecasts if within_window(f, config, now)
    ]


def generate_alert(
    spot: SpotConfig,
    forecasts: list[ForecastDay],
    config: AlertConfig,
    now: datetime,
    decisions: list[AlertDecision] | None = None,
) -> Alert | None:
    """Bundle the alerting days for a spot, or None if nothing qualifies.

    Pass precomputed ``decisions`` to avoid evaluating twice.
    """
    if decisions is None:
        decisions = evaluate_all(forecasts, config, now)
    alert_days = [d.forecast for d in decisions if d.should_alert]
    if not alert_days:
        return None
    logger.debug("%s: %d alerting day(s)", spot.id, len(alert_days))
    return Alert(spot=spot, forecasts=alert_days, generated_at=now)
