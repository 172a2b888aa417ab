"""Output formatters for check cycles (cron, debug, json) and buoy readings."""

import json
from datetime import datetime

from surfcheck.alerts.evaluator import days_out, round_ft
from surfcheck.models.alert import Alert, AlertDecision
from surfcheck.models.buoy import BuoyComparison, BuoyReading
from surfcheck.models.forecast import ForecastDay
from surfcheck.models.reporting import CheckSummary

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

NO_ALERTS_MESSAGE = (
    "No surf alerts for the upcoming week. Conditions not meeting criteria."
)


def wind_direction(degrees: float) -> str:
    """Degrees true to a 16-point compass direction."""
    return COMPASS_POINTS[round_ft(degrees / 22.5) % 16]


def wave_range(forecast: ForecastDay) -> str:
    return f"{round_ft(forecast.wave_min)}-{round_ft(forecast.wave_max)}ft"


def day_label(forecast: ForecastDay, now: datetime, long: bool = True) -> str:
    n = days_out(forecast, now)
    if n == 0:
        return "Today"
    if n == 1:
        return "Tomorrow"
    return forecast.date_string if long else forecast.day_of_week


def format_alert_message(alert: Alert) -> str:
    """Single-spot alert message for delivery."""
    lines = [f"**Surf Alert: {alert.spot.name}**", ""]
    for f in alert.forecasts:
        lines.append(f"**{day_label(f, alert.generated_at)}**")
        lines.append(f"{wave_range(f)} | {f.rating_display}")
        if f.wind is not None:
            lines.append(
                f"Wind: {wind_direction(f.wind.direction)} "
                f"{round_ft(f.wind.speed)}mph"
            )
        lines.append("")
    lines.append(f"[View Forecast]({alert.spot.url})")
    return "\n".join(lines)


def format_multi_spot_summary(alerts: list[Alert]) -> str:
    if not alerts:
        return NO_ALERTS_MESSAGE

    lines = ["**Surf Forecast Summary**", ""]
    for alert in alerts:
        lines.append(f"**{alert.spot.name}**")
        for f in alert.forecasts:
            label = day_label(f, alert.generated_at, long=False)
            lines.append(f"- {label}: {wave_range(f)} ({f.rating_display})")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def format_cron(summary: CheckSummary) -> str:
    """Nothing unless there is something to deliver."""
    delivered = summary.delivered_alerts
    if not delivered:
        return ""
    return "\n\n".join(format_alert_message(a) for a in delivered)


def format_decision(decision: AlertDecision, now: datetime) -> str:
    f = decision.forecast
    status = "ALERT" if decision.should_alert else "skip"
    return (
        f"[{status}] {f.day_of_week} ({days_out(f, now)}d): "
        f"{f.rating_display} - {decision.reason}"
    )


def format_debug(summary: CheckSummary, spot_names: dict[str, str] | None = None) -> str:
    """Every evaluated day with its reason, the new alerts, then the cycle summary."""
    spot_names = spot_names or {}
    lines = [f"=== Surf check {summary.checked_at:%Y-%m-%d %H:%M} ==="]
    for spot_id, decisions in summary.decisions.items():
        lines.append(f"{spot_names.get(spot_id, spot_id)}:")
        if not decisions:
            lines.append("  (no forecast days in window)")
        for d in decisions:
            lines.append(f"  {format_decision(d, summary.checked_at)}")
    lines.append("")
    lines.append(format_multi_spot_summary(summary.new_alerts))
    lines.append("")
    lines.append(format_summary_text(summary))
    return "\n".join(lines)


def format_summary_text(s: CheckSummary) -> str:
    """Plain text summary for logging."""
    lines = [
        f"Spots: {s.spots_checked} checked | New alerts: {len(s.new_alerts)} "
        f"({s.alert_days} days)",
    ]
    if s.suppressed:
        lines.append(f"Suppressed: {s.suppression_reason}")
    lines.append(f"State: {'saved' if s.persisted else 'not saved'}")
    if s.errors:
        lines.append(f"Errors: {len(s.errors)}")
    return "\n".join(lines)


def _forecast_dict(f: ForecastDay) -> dict:
    return {
        "spotId": f.spot_id,
        "date": f.date.isoformat(),
        "waveMin": f.wave_min,
        "waveMax": f.wave_max,
        "rating": f.rating,
        "ratingDisplay": f.rating_display,
        "isWeekend": f.is_weekend,
        "wind": (
            {
                "speed": f.wind.speed,
                "direction": f.wind.direction,
                "directionType": f.wind.direction_type,
            }
            if f.wind is not None
            else None
        ),
    }


def _alert_dict(a: Alert) -> dict:
    return {
        "spot": {"id": a.spot.id, "name": a.spot.name, "url": a.spot.url},
        "generatedAt": a.generated_at.isoformat(),
        "forecasts": [_forecast_dict(f) for f in a.forecasts],
    }


def format_summary_json(s: CheckSummary) -> str:
    """JSON document of decisions and alerts for programmatic consumption."""
    data = {
        "checkedAt": s.checked_at.isoformat(),
        "configHash": s.config_hash,
        "spotsChecked": s.spots_checked,
        "decisions": {
            spot_id: [
                {
                    "forecast": _forecast_dict(d.forecast),
                    "shouldAlert": d.should_alert,
                    "reason": d.reason,
                }
                for d in decisions
            ]
            for spot_id, decisions in s.decisions.items()
        },
        "newAlerts": [_alert_dict(a) for a in s.new_alerts],
        "suppressed": s.suppressed,
        "suppressionReason": s.suppression_reason,
        "persisted": s.persisted,
        "errors": s.errors,
    }
    return json.dumps(data, indent=2)


def format_forecast_day(f: ForecastDay) -> str:
    """One line per day for the forecast listing."""
    line = f"{f.date_string}: {wave_range(f)} {f.rating_display}"
    if f.human_relation:
        line += f" ({f.human_relation})"
    if f.wind is not None:
        line += f" | wind {wind_direction(f.wind.direction)} {round_ft(f.wind.speed)}mph"
    return line


def format_buoy_reading(reading: BuoyReading, name: str = "") -> str:
    """Latest buoy observation, skipping fields the station did not report."""
    title = f"Buoy {reading.station_id}" + (f" ({name})" if name else "")
    lines = [f"{title} at {reading.timestamp:%Y-%m-%d %H:%M} UTC"]
    if reading.wave_height_m is not None:
        lines.append(
            f"Wave height: {reading.wave_height_ft:.1f}ft ({reading.wave_height_m:.1f}m)"
        )
    if reading.dominant_period is not None:
        lines.append(f"Period: {reading.dominant_period:g}s")
    if reading.mean_direction is not None:
        lines.append(
            f"Direction: {wind_direction(reading.mean_direction)} "
            f"({reading.mean_direction:g}°)"
        )
    if reading.water_temp_c is not None:
        lines.append(
            f"Water temp: {reading.water_temp_f:.1f}°F ({reading.water_temp_c:g}°C)"
        )
    return "\n".join(lines)


def format_buoy_comparison(spot_name: str, c: BuoyComparison) -> str:
    forecast = f"{round_ft(c.forecast_wave_min)}-{round_ft(c.forecast_wave_max)}ft"
    if c.height_delta_ft is None:
        return f"{spot_name}: forecast {forecast}, buoy has no wave height"
    verdict = "matches" if c.height_match else "off"
    return (
        f"{spot_name}: forecast {forecast}, buoy {c.reading.wave_height_ft:.1f}ft "
        f"({c.height_delta_ft:+.1f}ft, {verdict})"
    )
