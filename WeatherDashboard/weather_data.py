"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass
from typing import List, Sequence

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"

# Forecast API returns 3-hour steps, 8 of them per day
POINTS_PER_DAY = 8


@dataclass(frozen=True)
class CurrentConditions:
    """Current weather for a city, independent of any specific API."""
    temp: float
    feels_like: float
    humidity: int  # percentage 0-100
    pressure: int  # hPa
    wind_speed: float  # m/s for metric, mph for imperial
    condition_main: str  # e.g., "Clouds", "Rain", "Clear"
    condition_description: str  # e.g., "broken clouds", "light rain"
    icon: str  # e.g., "04d"
    sunrise: int  # UNIX timestamp (UTC)
    sunset: int  # UNIX timestamp (UTC)
    lat: float
    lon: float
    city: str

    @property
    def icon_url(self) -> str:
        """CDN URL of the condition icon."""
        return icon_url(self.icon)


@dataclass(frozen=True)
class ForecastPoint:
    """A single forecast data point."""
    timestamp: int  # UNIX timestamp (UTC)
    temp: float


def icon_url(icon: str) -> str:
    return ICON_URL_TEMPLATE.format(icon=icon)


def daily_samples(points: Sequence[ForecastPoint], step: int = POINTS_PER_DAY) -> List[ForecastPoint]:
    """
    Pick one forecast point per day out of a 3-hour forecast.

    Takes indices 0, step, 2*step, ... so 24 points yield 3 daily samples.

    Args:
        points: Forecast in chronological order
        step: Stride between samples

    Returns:
        List of sampled points, order preserved
    """
    if step < 1:
        raise ValueError(f"step must be positive, got {step}")
    return list(points[::step])
