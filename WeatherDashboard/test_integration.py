"""Integration tests - can optionally hit real API (disabled by default)."""
import os
import pytest
from openweather_client import WeatherClient
from dashboard import Dashboard


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_openweather_integration():
    """
    Integration test that hits the real OpenWeather API.

    Set OPENWEATHER_API_KEY environment variable to run this test.
    """
    client = WeatherClient(api_key=os.environ["OPENWEATHER_API_KEY"])

    current = client.get_current_conditions("Prague", "metric")
    assert current.city
    assert current.sunrise > 0

    uvi = client.get_uv_index(current.lat, current.lon)
    assert uvi >= 0

    points = client.get_forecast("Prague", "metric", 8)
    assert 0 < len(points) <= 8
    timestamps = [p.timestamp for p in points]
    assert timestamps == sorted(timestamps)


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_dashboard_integration():
    """Integration test for Dashboard with real API."""
    client = WeatherClient(api_key=os.environ["OPENWEATHER_API_KEY"])

    with Dashboard(client) as dashboard:
        first = dashboard.refresh("Prague")
        # Second refresh is served from the cache
        second = dashboard.refresh("Prague")

    assert first.current == second.current
    assert len(first.daily) <= 3
