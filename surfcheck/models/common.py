"""Common types and clock helpers shared across models."""

from datetime import UTC, datetime
from typing import TypeAlias
from zoneinfo import ZoneInfo

SpotId: TypeAlias = str


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def local_now(timezone: str) -> datetime:
    """Current wall-clock time at the surf spots."""
    return datetime.now(ZoneInfo(timezone))
