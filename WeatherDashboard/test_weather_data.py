"""Tests for weather_data module."""
import dataclasses
import pytest
from weather_data import CurrentConditions, ForecastPoint, daily_samples, icon_url


@pytest.fixture
def sample_current():
    return CurrentConditions(
        temp=20.5,
        feels_like=19.8,
        humidity=65,
        pressure=1014,
        wind_speed=5.2,
        condition_main="Clouds",
        condition_description="broken clouds",
        icon="04d",
        sunrise=1684899600,
        sunset=1684953600,
        lat=50.08,
        lon=14.42,
        city="Prague",
    )


def test_current_conditions_creation(sample_current):
    """Test creating CurrentConditions with all fields."""
    assert sample_current.temp == 20.5
    assert sample_current.feels_like == 19.8
    assert sample_current.humidity == 65
    assert sample_current.pressure == 1014
    assert sample_current.condition_main == "Clouds"
    assert sample_current.city == "Prague"


def test_current_conditions_is_immutable(sample_current):
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample_current.temp = 30.0


def test_icon_url(sample_current):
    assert sample_current.icon_url == "https://openweathermap.org/img/wn/04d@2x.png"
    assert icon_url("10n") == "https://openweathermap.org/img/wn/10n@2x.png"


def test_daily_samples_every_eighth_point():
    """24 three-hour points give 3 samples roughly a day apart."""
    start = 1700000000
    points = [ForecastPoint(timestamp=start + i * 3 * 3600, temp=float(i)) for i in range(24)]

    samples = daily_samples(points)

    assert [p.temp for p in samples] == [0.0, 8.0, 16.0]
    assert samples[1].timestamp - samples[0].timestamp == 24 * 3600
    assert samples[2].timestamp - samples[1].timestamp == 24 * 3600


def test_daily_samples_short_forecast():
    points = [ForecastPoint(timestamp=1700000000 + i, temp=1.0) for i in range(5)]
    assert daily_samples(points) == [points[0]]
    assert daily_samples([]) == []


def test_daily_samples_rejects_bad_step():
    with pytest.raises(ValueError):
        daily_samples([], step=0)
