"""Weather client abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import List, Optional
from weather_data import CurrentConditions, ForecastPoint


class WeatherClientBase(ABC):
    """Abstract base class for weather data clients."""

    @abstractmethod
    def get_current_conditions(self, city: str, units: str) -> CurrentConditions:
        """
        Fetch current weather for a city.

        Args:
            city: City name, already trimmed and non-empty
            units: "metric" or "imperial"

        Returns:
            CurrentConditions: Current weather information

        Raises:
            WeatherProviderError: If the client fails to fetch data
        """
        pass

    @abstractmethod
    def get_uv_index(self, lat: float, lon: float) -> float:
        """Fetch the UV index at the given coordinates."""
        pass

    @abstractmethod
    def get_forecast(self, city: str, units: str, count: int) -> List[ForecastPoint]:
        """
        Fetch up to `count` forecast points in chronological order.

        The provider may return fewer points than requested.
        """
        pass

    @abstractmethod
    def clear_cache(self) -> None:
        """Drop every cached response."""
        pass


class WeatherProviderError(Exception):
    """Base exception raised when a weather client fails."""
    pass


class RemoteServiceError(WeatherProviderError):
    """The weather service answered with a non-200 HTTP status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        text = f"API error {status_code}"
        if message:
            text += f": {message}"
        super().__init__(text)


class ParseError(WeatherProviderError):
    """The response was not JSON or lacked an expected field."""
    pass


class TransportError(WeatherProviderError):
    """Network failure, DNS failure or timeout."""
    pass
