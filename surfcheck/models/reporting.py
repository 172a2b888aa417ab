"""Check-cycle reporting models."""

from dataclasses import dataclass, field
from datetime import datetime

from surfcheck.models.alert import Alert, AlertDecision


@dataclass
class CheckSummary:
    checked_at: datetime
    config_hash: str = ""
    spots_checked: int = 0
    decisions: dict[str, list[AlertDecision]] = field(default_factory=dict)
    new_alerts: list[Alert] = field(default_factory=list)
    suppressed: bool = False
    suppression_reason: str = ""
    persisted: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def delivered_alerts(self) -> list[Alert]:
        """Alerts to hand to delivery; quiet hours withhold all of them."""
        if self.suppressed:
            return []
        return self.new_alerts

    @property
    def alert_days(self) -> int:
        return sum(len(a.forecasts) for a in self.new_alerts)
