"""Tests for dashboard text layout."""
import pytest
from datetime import datetime
from weather_data import CurrentConditions, ForecastPoint
from layout import (
    unit_symbols,
    format_temperature,
    format_wind,
    format_clock,
    get_condition_text,
    format_current_lines,
    format_forecast_lines,
)


def make_current(condition_main="Clouds", description="broken clouds"):
    return CurrentConditions(
        temp=20.0,
        feels_like=19.04,
        humidity=60,
        pressure=1012,
        wind_speed=5.0,
        condition_main=condition_main,
        condition_description=description,
        icon="04d",
        sunrise=1609480800,
        sunset=1609513200,
        lat=50.09,
        lon=14.42,
        city="Prague",
    )


@pytest.fixture
def sample_current():
    return make_current()


def test_unit_symbols():
    assert unit_symbols("metric") == ("°C", "m/s")
    assert unit_symbols("imperial") == ("°F", "mph")


def test_format_temperature():
    assert format_temperature(20.0, "metric") == "20.0°C"
    assert format_temperature(-3.26, "imperial") == "-3.3°F"


def test_format_wind():
    assert format_wind(5.0, "metric") == "5.0 m/s"
    assert format_wind(11.18, "imperial") == "11.2 mph"


def test_format_clock_uses_local_time():
    expected = datetime.fromtimestamp(1609480800).strftime("%H:%M")
    assert format_clock(1609480800) == expected


def test_get_condition_text_clouds(sample_current):
    """Test condition text for cloudy weather."""
    assert get_condition_text(sample_current) == "Cloudy"


def test_get_condition_text_rain():
    assert get_condition_text(make_current("Rain", "light rain")) == "Rain"


def test_get_condition_text_unknown():
    """Unknown conditions are capitalized as-is."""
    assert get_condition_text(make_current("tornado", "tornado")) == "Tornado"


def test_format_current_lines(sample_current):
    lines = format_current_lines(sample_current, "metric", uv_index=4.3)

    assert lines[0] == "Prague: Cloudy (broken clouds)"
    assert "20.0°C" in lines[1]
    assert "19.0°C" in lines[2]
    assert "5.0 m/s" in lines[3]
    assert "60%" in lines[4]
    assert "1012 hPa" in lines[5]
    assert "4.3" in lines[6]
    sun = f"{format_clock(1609480800)} / {format_clock(1609513200)}"
    assert sun in lines[7]


def test_format_current_lines_imperial_without_uv(sample_current):
    lines = format_current_lines(sample_current, "imperial")

    assert "20.0°F" in lines[1]
    assert "mph" in lines[3]
    assert "n/a" in lines[6]


def test_format_forecast_lines_keeps_order():
    points = [ForecastPoint(timestamp=1609459200 + i * 86400, temp=float(i)) for i in range(3)]

    lines = format_forecast_lines(points, "metric")

    assert len(lines) == 3
    for point, line in zip(points, lines):
        stamp = datetime.fromtimestamp(point.timestamp).strftime("%Y-%m-%d %H:%M")
        assert line == f"{stamp}: {point.temp:.1f}°C"


def test_format_forecast_lines_empty():
    assert format_forecast_lines([], "metric") == []
