"""OpenWeather API client with response caching."""
import logging
import requests
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote_plus
from weather_provider import (
    WeatherClientBase,
    RemoteServiceError,
    ParseError,
    TransportError,
)
from weather_data import CurrentConditions, ForecastPoint
from response_cache import ResponseCache, DEFAULT_TTL_SECONDS

VALID_UNITS = ("metric", "imperial")


class WeatherClient(WeatherClientBase):
    """
    Weather client using the OpenWeather 2.5 API.

    Uses three endpoints: current weather by city name, UV index by
    coordinates and the 5 day / 3 hour forecast by city name.
    Parsed responses are cached per request path and query for
    `cache_ttl_seconds`. The API key is attached only when a request is
    sent, so it never takes part in a cache key or a log message.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/"

    def __init__(
        self,
        api_key: str,
        timeout: int = 10,
        cache_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        cache: Optional[ResponseCache] = None
    ):
        """
        Initialize OpenWeather client.

        Args:
            api_key: OpenWeather API key
            timeout: HTTP request timeout in seconds
            cache_ttl_seconds: How long responses are reused before fetching again
            cache: Cache to use instead of a fresh ResponseCache
        """
        if not api_key:
            raise ValueError("api_key must not be empty")
        self.api_key = api_key
        self.timeout = timeout
        self.cache = cache if cache is not None else ResponseCache(ttl_seconds=cache_ttl_seconds)

    def get_current_conditions(self, city: str, units: str = "metric") -> CurrentConditions:
        """
        Fetch current weather for a city.

        Returns:
            CurrentConditions: Current weather information

        Raises:
            RemoteServiceError: If the API answers with a non-200 status
            ParseError: If the response lacks an expected field
            TransportError: If the request fails on the network
        """
        self._check_city(city)
        self._check_units(units)
        path = f"weather?q={quote_plus(city)}&units={units}"
        return self._fetch(path, _parse_current)

    def get_uv_index(self, lat: float, lon: float) -> float:
        """Fetch the UV index; coordinates are sent with 6 decimal places."""
        path = f"uvi?lat={lat:.6f}&lon={lon:.6f}"
        return self._fetch(path, _parse_uv_index)

    def get_forecast(self, city: str, units: str = "metric", count: int = 24) -> List[ForecastPoint]:
        """
        Fetch forecast points for a city in the order the API returns them.

        Args:
            city: City name
            units: "metric" or "imperial"
            count: Number of 3-hour points to request (the API may return fewer)

        Returns:
            List of ForecastPoint in chronological order
        """
        self._check_city(city)
        self._check_units(units)
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        path = f"forecast?q={quote_plus(city)}&units={units}&cnt={count}"
        return self._fetch(path, _parse_forecast)

    def clear_cache(self) -> None:
        self.cache.clear()

    def _fetch(self, path_and_query: str, parse: Callable[[Dict[str, Any]], Any]) -> Any:
        """
        Return `parse(body)` for a request, using the cache when possible.

        The body is cached only after a 200 response that `parse` accepts.
        """
        cached = self.cache.get(path_and_query)
        if cached is not None:
            logging.debug(f"Using cached response for {path_and_query}")
            return parse(cached)

        url = self.BASE_URL + path_and_query
        try:
            logging.info(f"Making OpenWeather API request: {path_and_query}")
            response = requests.get(url, params={"appid": self.api_key}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            message = self._redact(str(e))
            logging.error(f"Network error during API request {path_and_query}: {message}")
            raise TransportError(f"Network error: {message}") from None

        logging.info(f"API response status: {response.status_code}")
        if response.status_code != 200:
            logging.error(f"API request {path_and_query} failed with status {response.status_code}")
            self._handle_error_response(response)

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Invalid JSON in response to {path_and_query}: {e}")
            raise ParseError(f"Invalid JSON response: {e}") from e
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")
        logging.debug(f"API response data keys: {list(data.keys())}")

        result = parse(data)
        self.cache.put(path_and_query, data)
        return result

    def _handle_error_response(self, response: requests.Response) -> None:
        """Raise RemoteServiceError, using OpenWeather's error message when present."""
        message = None
        try:
            error_data = response.json()
            if isinstance(error_data, dict):
                message = error_data.get("message")
        except ValueError:
            logging.debug("Non-JSON error response: HTTP %s", response.status_code)
        raise RemoteServiceError(response.status_code, self._redact(message) if message else None)

    def _redact(self, text: str) -> str:
        return text.replace(self.api_key, "***")

    @staticmethod
    def _check_city(city: str) -> None:
        if not city or not city.strip():
            raise ValueError("city must not be empty")

    @staticmethod
    def _check_units(units: str) -> None:
        if units not in VALID_UNITS:
            raise ValueError(f"units must be one of {VALID_UNITS}, got {units!r}")


def _parse_current(data: Dict[str, Any]) -> CurrentConditions:
    # Current Weather API returns data directly (not nested in "current")
    weather_array = data.get("weather")
    if not weather_array:
        logging.error("Response missing 'weather' array")
        raise ParseError("Response missing 'weather' array")
    main_data = data.get("main")
    if not main_data:
        raise ParseError("Response missing 'main' block")

    try:
        weather = weather_array[0]
        return CurrentConditions(
            temp=float(main_data["temp"]),
            feels_like=float(main_data["feels_like"]),
            humidity=int(main_data["humidity"]),
            pressure=int(main_data["pressure"]),
            wind_speed=float(data["wind"]["speed"]),
            condition_main=str(weather["main"]),
            condition_description=str(weather["description"]),
            icon=str(weather["icon"]),
            sunrise=int(data["sys"]["sunrise"]),
            sunset=int(data["sys"]["sunset"]),
            lat=float(data["coord"]["lat"]),
            lon=float(data["coord"]["lon"]),
            city=str(data["name"]),
        )
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logging.error(f"Failed to parse current weather: {e!r}")
        raise ParseError(f"Failed to parse current weather: missing or invalid field {e}") from e


def _parse_uv_index(data: Dict[str, Any]) -> float:
    try:
        return float(data["value"])
    except (KeyError, TypeError, ValueError) as e:
        logging.error(f"Failed to parse UV index: {e!r}")
        raise ParseError(f"Failed to parse UV index: missing or invalid field {e}") from e


def _parse_forecast(data: Dict[str, Any]) -> List[ForecastPoint]:
    items = data.get("list")
    if not isinstance(items, list):
        raise ParseError("Response missing 'list' array")
    try:
        return [
            ForecastPoint(timestamp=int(item["dt"]), temp=float(item["main"]["temp"]))
            for item in items
        ]
    except (KeyError, TypeError, ValueError) as e:
        logging.error(f"Failed to parse forecast: {e!r}")
        raise ParseError(f"Failed to parse forecast: missing or invalid field {e}") from e
