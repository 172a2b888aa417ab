"""NOAA NDBC realtime buoy data client with retry and rate limit handling."""

import logging
import time

import httpx

from surfcheck.config.schema import NDBC_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "surfcheck/0.1.0"


class NdbcClient:
    def __init__(
        self,
        base_url: str = NDBC_BASE_URL,
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

    def get_realtime(self, station_id: str) -> str:
        """Fetch the realtime2 text file for a station, newest rows first.

        Retries on 503/429 with exponential backoff.
        """
        url = f"{self.base_url}/{station_id}.txt"
        headers = {"User-Agent": self.user_agent, "Accept": "text/plain"}

        last_error: Exception | None = None
        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(url, headers=headers, timeout=self.timeout)
                if resp.status_code in (503, 429) and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "NDBC %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        station_id, resp.status_code, delay, attempt + 1,
                        self.max_retries,
                    )
                    time.sleep(delay)
                    continue
                resp.raise_for_status()
                return resp.text
            except httpx.RequestError as e:
                last_error = e
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "NDBC request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise

        assert last_error is not None
        raise last_error
