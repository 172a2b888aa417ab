"""Forecast fetcher: aggregates Surfline series into daily forecasts."""

import logging
from datetime import UTC, date, datetime, timedelta

from surfcheck.config.schema import SpotConfig
from surfcheck.ingest.surfline_client import SurflineClient
from surfcheck.models.forecast import ForecastDay, RatingKey, Wind

logger = logging.getLogger(__name__)


class SurflineForecastFetcher:
    def __init__(self, client: SurflineClient, days: int = 6):
        self.client = client
        self.days = days

    def fetch(self, spot: SpotConfig) -> list[ForecastDay]:
        """Fetch daily forecasts for a spot, date ascending."""
        wave = self.client.get_wave(spot.id, self.days, interval_hours=24)
        rating = self.client.get_rating(spot.id, self.days, interval_hours=24)
        wind = self.client.get_wind(spot.id, self.days, interval_hours=12)
        logger.debug("Fetched Surfline series for %s", spot.id)
        return build_daily_forecasts(spot.id, wave, rating, wind)


def build_daily_forecasts(
    spot_id: str, wave: dict, rating: dict, wind: dict
) -> list[ForecastDay]:
    """Merge wave, rating and wind series into one ForecastDay per local date.

    The first wave, rating and wind item of each day wins. Days with wave data
    but no rating keep a FAIR placeholder.
    """
    waves: dict[date, dict] = {}
    for item in _items(wave, "wave"):
        waves.setdefault(_local_date(item), item)

    ratings: dict[date, str] = {}
    for item in _items(rating, "rating"):
        key = (item.get("rating") or {}).get("key")
        if key:
            ratings.setdefault(_local_date(item), str(key))

    winds: dict[date, Wind] = {}
    for item in _items(wind, "wind"):
        winds.setdefault(
            _local_date(item),
            Wind(
                speed=float(item.get("speed", 0.0)),
                direction=float(item.get("direction", 0.0)),
                direction_type=item.get("directionType", ""),
            ),
        )

    days: list[ForecastDay] = []
    for day in sorted(waves):
        surf = waves[day].get("surf", {})
        days.append(
            ForecastDay(
                spot_id=spot_id,
                date=day,
                wave_min=float(surf.get("min", 0.0)),
                wave_max=float(surf.get("max", 0.0)),
                rating=ratings.get(day, RatingKey.FAIR.value),
                wind=winds.get(day),
                human_relation=surf.get("humanRelation", ""),
            )
        )
    return days


def _items(payload: dict, series: str) -> list[dict]:
    return payload.get("data", {}).get(series, [])


def _local_date(item: dict) -> date:
    """Calendar date at the spot: unix timestamp shifted by utcOffset hours."""
    ts = datetime.fromtimestamp(int(item["timestamp"]), UTC)
    return (ts + timedelta(hours=float(item.get("utcOffset", 0)))).date()
