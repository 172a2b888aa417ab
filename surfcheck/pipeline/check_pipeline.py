"""Check pipeline: one full alert cycle.

load state -> fetch + evaluate per spot -> dedup -> quiet-hours gate -> persist
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from surfcheck.alerts.batch import evaluate_all, generate_alert
from surfcheck.alerts.quiet_hours import should_suppress
from surfcheck.config.loader import config_hash
from surfcheck.config.schema import SpotConfig, SurfCheckConfig
from surfcheck.models.common import local_now
from surfcheck.models.forecast import ForecastDay
from surfcheck.models.reporting import CheckSummary
from surfcheck.storage.lock import StateLock, StateLockedError
from surfcheck.storage.state_store import commit_cycle, filter_unseen, load_state

logger = logging.getLogger(__name__)


class ForecastSource(Protocol):
    def fetch(self, spot: SpotConfig) -> list[ForecastDay]: ...


class CheckPipeline:
    def __init__(
        self,
        config: SurfCheckConfig,
        source: ForecastSource,
        state_path: str | Path | None = None,
    ):
        self.config = config
        self.source = source
        self.state_path = Path(state_path or config.state.path)

    def run(self, now: datetime | None = None, persist: bool = True) -> CheckSummary:
        """Execute one check cycle.

        With ``persist`` false the cycle evaluates and dedups against the
        stored state but writes nothing back.
        """
        if now is None:
            now = local_now(self.config.timezone)
        summary = CheckSummary(checked_at=now, config_hash=config_hash(self.config))

        try:
            with StateLock(self.state_path):
                self._run_locked(summary, now, persist)
        except StateLockedError as e:
            logger.error("Check aborted: %s", e)
            summary.errors.append(str(e))
        return summary

    def _run_locked(self, summary: CheckSummary, now: datetime, persist: bool) -> None:
        alert_config = self.config.alerts
        state = load_state(self.state_path)

        for spot in self.config.spots:
            if not spot.enabled:
                continue
            summary.spots_checked += 1
            try:
                forecasts = self.source.fetch(spot)
            except Exception as e:
                logger.exception("Failed to fetch forecast for %s", spot.name)
                summary.errors.append(f"{spot.id}: {e}")
                continue

            decisions = evaluate_all(forecasts, alert_config, now)
            summary.decisions[spot.id] = decisions
            alert = generate_alert(spot, forecasts, alert_config, now, decisions)
            if alert is None:
                continue
            new_alert = filter_unseen(alert, state)
            if new_alert is None:
                logger.info("%s: %d alert day(s) already sent", spot.name, len(alert.forecasts))
                continue
            summary.new_alerts.append(new_alert)

        suppression = should_suppress(alert_config, now)
        summary.suppressed = suppression.suppress
        summary.suppression_reason = suppression.reason
        if suppression.suppress and summary.new_alerts:
            logger.info(
                "%s, withholding %d alert(s) until the next check",
                suppression.reason, len(summary.new_alerts),
            )

        logger.info(
            "Checked %d spot(s): %d new alert(s), %d day(s)",
            summary.spots_checked, len(summary.new_alerts), summary.alert_days,
        )

        if persist:
            commit_cycle(
                state,
                summary.delivered_alerts,
                now,
                self.state_path,
                self.config.state.retention_days,
            )
            summary.persisted = True
