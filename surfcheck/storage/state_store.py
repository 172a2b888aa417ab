"""Persisted alert state: which (spot, forecast date) pairs were already sent.

On-disk shape::

    {"lastCheck": "<ISO-8601>", "alertsSent": {"<spotId>:<YYYY-MM-DD>": "<ISO-8601>"}}

All writes go through ``commit_cycle``.
"""

import json
import logging
import os
from datetime import date, datetime, timedelta
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from surfcheck.models.alert import Alert
from surfcheck.models.common import utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 7


class AlertState(BaseModel):
    model_config = {"populate_by_name": True}

    last_check: str = Field(default_factory=utc_now_iso, alias="lastCheck")
    alerts_sent: dict[str, str] = Field(default_factory=dict, alias="alertsSent")


def load_state(path: str | Path) -> AlertState:
    """Load state from disk. Missing or corrupt files yield a fresh state."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        return AlertState.model_validate(raw)
    except FileNotFoundError:
        logger.info("No alert state at %s, starting fresh", path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Alert state at %s unreadable, starting fresh: %s", path, e)
    return AlertState()


def save_state(state: AlertState, path: str | Path) -> None:
    """Write state atomically: temp file in the same directory, then rename."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(state.model_dump_json(by_alias=True, indent=2))
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)


def alert_key(spot_id: str, forecast_date: date) -> str:
    return f"{spot_id}:{forecast_date.isoformat()}"


def was_recorded(state: AlertState, spot_id: str, forecast_date: date) -> bool:
    return alert_key(spot_id, forecast_date) in state.alerts_sent


def record_sent(
    state: AlertState, spot_id: str, forecast_date: date, at: datetime
) -> None:
    state.alerts_sent[alert_key(spot_id, forecast_date)] = at.isoformat()


def filter_unseen(alert: Alert, state: AlertState) -> Alert | None:
    """Drop forecast days already alerted for this spot; None if nothing is left."""
    unseen = [
        f for f in alert.forecasts if not was_recorded(state, alert.spot.id, f.date)
    ]
    if not unseen:
        return None
    return Alert(spot=alert.spot, forecasts=unseen, generated_at=alert.generated_at)


def prune_older_than(
    state: AlertState, now: datetime, retention_days: int = DEFAULT_RETENTION_DAYS
) -> int:
    """Remove records whose forecast date is before now - retention_days.

    Compares the date part of the key, not the recorded timestamp.
    Returns the number of records removed.
    """
    cutoff = (now - timedelta(days=retention_days)).date().isoformat()
    stale = []
    for key in state.alerts_sent:
        _, sep, date_str = key.rpartition(":")
        if sep and date_str < cutoff:
            stale.append(key)
    for key in stale:
        del state.alerts_sent[key]
    return len(stale)


def commit_cycle(
    state: AlertState,
    sent_alerts: list[Alert],
    now: datetime,
    path: str | Path,
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> None:
    """Record sent alerts, prune old records and persist."""
    state.last_check = now.isoformat()
    recorded = 0
    for alert in sent_alerts:
        for forecast in alert.forecasts:
            record_sent(state, alert.spot.id, forecast.date, now)
            recorded += 1
    pruned = prune_older_than(state, now, retention_days)
    save_state(state, path)
    logger.info(
        "Alert state saved: %d recorded, %d pruned, %d total",
        recorded, pruned, len(state.alerts_sent),
    )
