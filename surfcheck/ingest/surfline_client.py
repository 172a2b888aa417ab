"""Surfline KBYG forecast API client with retry and rate limit handling."""

import logging
import time

import httpx

from surfcheck.config.schema import SURFLINE_BASE_URL

logger = logging.getLogger(__name__)

FORECAST_PATH = "/kbyg/spots/forecasts"
DEFAULT_USER_AGENT = "surfcheck/0.1.0"


class SurflineClient:
    def __init__(
        self,
        base_url: str = SURFLINE_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 2.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def get_wave(self, spot_id: str, days: int = 6, interval_hours: int = 24) -> dict:
        return self._get("wave", spot_id, days, interval_hours)

    def get_rating(self, spot_id: str, days: int = 6, interval_hours: int = 24) -> dict:
        return self._get("rating", spot_id, days, interval_hours)

    def get_wind(self, spot_id: str, days: int = 6, interval_hours: int = 12) -> dict:
        return self._get("wind", spot_id, days, interval_hours)

    def _get(self, kind: str, spot_id: str, days: int, interval_hours: int) -> dict:
        """Fetch one forecast series. Retries on 503/429 with exponential backoff."""
        url = f"{self.base_url}{FORECAST_PATH}/{kind}"
        params = {"spotId": spot_id, "days": days, "intervalHours": interval_hours}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        last_error: Exception | None = None
        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(
                    url, params=params, headers=headers, timeout=self.timeout
                )
                if resp.status_code in (503, 429) and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Surfline %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        kind, resp.status_code, delay, attempt + 1, self.max_retries,
                    )
                    time.sleep(delay)
                    continue
                resp.raise_for_status()
                return resp.json()
            except httpx.RequestError as e:
                last_error = e
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Surfline request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise

        assert last_error is not None
        raise last_error
