"""Tests for the Surfline API client with mocked httpx."""

from unittest.mock import patch

import httpx
import pytest
import respx

from surfcheck.ingest.surfline_client import SurflineClient

BASE = "https://test-surfline.example.com"
WAVE_URL = f"{BASE}/kbyg/spots/forecasts/wave"


@pytest.fixture
def surfline() -> SurflineClient:
    return SurflineClient(base_url=BASE, max_retries=1, retry_base_delay=0.01)


WAVE_PAYLOAD = {
    "data": {
        "wave": [
            {
                "timestamp": 1770724800,
                "utcOffset": -5,
                "surf": {"min": 2, "max": 3, "humanRelation": "Thigh to waist"},
            }
        ]
    }
}


class TestGetSeries:
    @respx.mock
    def test_success(self, surfline: SurflineClient):
        respx.get(WAVE_URL).mock(return_value=httpx.Response(200, json=WAVE_PAYLOAD))
        result = surfline.get_wave("spot1", days=5)
        assert result["data"]["wave"][0]["surf"]["max"] == 3

    @respx.mock
    def test_query_params_and_user_agent(self, surfline: SurflineClient):
        route = respx.get(WAVE_URL).mock(
            return_value=httpx.Response(200, json=WAVE_PAYLOAD)
        )
        surfline.get_wave("spot1", days=5, interval_hours=24)
        request = route.calls[0].request
        assert request.url.params["spotId"] == "spot1"
        assert request.url.params["days"] == "5"
        assert request.url.params["intervalHours"] == "24"
        assert "surfcheck" in request.headers["user-agent"]

    @respx.mock
    def test_rating_and_wind_paths(self, surfline: SurflineClient):
        rating = respx.get(f"{BASE}/kbyg/spots/forecasts/rating").mock(
            return_value=httpx.Response(200, json={"data": {"rating": []}})
        )
        wind = respx.get(f"{BASE}/kbyg/spots/forecasts/wind").mock(
            return_value=httpx.Response(200, json={"data": {"wind": []}})
        )
        surfline.get_rating("spot1")
        surfline.get_wind("spot1")
        assert rating.called
        assert wind.calls[0].request.url.params["intervalHours"] == "12"

    @respx.mock
    def test_retry_on_429(self, surfline: SurflineClient):
        route = respx.get(WAVE_URL).mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(200, json=WAVE_PAYLOAD),
            ]
        )
        with patch("surfcheck.ingest.surfline_client.time.sleep"):
            result = surfline.get_wave("spot1")
        assert "data" in result
        assert route.call_count == 2

    @respx.mock
    def test_exhausted_retries(self, surfline: SurflineClient):
        respx.get(WAVE_URL).mock(return_value=httpx.Response(503))
        with patch("surfcheck.ingest.surfline_client.time.sleep"), pytest.raises(
            httpx.HTTPStatusError
        ):
            surfline.get_wave("spot1")

    @respx.mock
    def test_no_retry_on_404(self, surfline: SurflineClient):
        route = respx.get(WAVE_URL).mock(return_value=httpx.Response(404))
        with pytest.raises(httpx.HTTPStatusError):
            surfline.get_wave("spot1")
        assert route.call_count == 1

    @respx.mock
    def test_transport_error_retried_then_raised(self, surfline: SurflineClient):
        route = respx.get(WAVE_URL).mock(side_effect=httpx.ConnectError)
        with patch("surfcheck.ingest.surfline_client.time.sleep"), pytest.raises(
            httpx.ConnectError
        ):
            surfline.get_wave("spot1")
        assert route.call_count == 2
