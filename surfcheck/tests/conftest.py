"""Shared test fixtures."""

from datetime import date, datetime
from pathlib import Path

import pytest
import yaml

from surfcheck.config.defaults import DEFAULT_SPOTS
from surfcheck.config.schema import AlertConfig, SpotConfig, SurfCheckConfig
from surfcheck.models.forecast import ForecastDay, RatingKey, Wind

# Tuesday
TODAY = date(2026, 2, 10)


@pytest.fixture
def default_config() -> SurfCheckConfig:
    """Return default SurfCheckConfig with default spots."""
    return SurfCheckConfig(spots=DEFAULT_SPOTS)


@pytest.fixture
def alert_config() -> AlertConfig:
    return AlertConfig(wave_min=2.0, wave_max=6.0, forecast_days=7)


@pytest.fixture
def spot() -> SpotConfig:
    return SpotConfig(id="spot1", name="Test Break")


@pytest.fixture
def morning() -> datetime:
    """Tuesday 06:00, before dawn patrol cutoff."""
    return datetime(2026, 2, 10, 6, 0)


@pytest.fixture
def midday() -> datetime:
    """Tuesday 10:00, after dawn patrol cutoff."""
    return datetime(2026, 2, 10, 10, 0)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "alerts": {"wave_min": 3, "wave_max": 8, "forecast_days": 5},
        "state": {"path": str(tmp_path / "state.json")},
    }
    path = tmp_path / "surf-check.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "state.json"


def _make_day(
    offset: int = 2,
    rating: str = RatingKey.FAIR,
    wave_min: float = 2.0,
    wave_max: float = 4.0,
    spot_id: str = "spot1",
    wind: Wind | None = None,
) -> ForecastDay:
    """ForecastDay ``offset`` days after TODAY."""
    return ForecastDay(
        spot_id=spot_id,
        date=date.fromordinal(TODAY.toordinal() + offset),
        wave_min=wave_min,
        wave_max=wave_max,
        rating=str(rating),
        wind=wind,
    )


@pytest.fixture
def make_day():
    """Factory for ForecastDay records relative to TODAY."""
    return _make_day

