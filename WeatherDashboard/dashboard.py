"""Dashboard state and background fetching on top of a weather client."""
import logging
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Iterator, List, Tuple
from weather_provider import WeatherClientBase
from weather_data import CurrentConditions, ForecastPoint, daily_samples

DEFAULT_CITY = "Prague"
DAILY_FORECAST_POINTS = 24  # 3 days of 3-hour steps
HOURLY_FORECAST_POINTS = 4


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard shows for one refresh."""
    city: str
    units: str
    current: CurrentConditions
    uv_index: float
    daily: List[ForecastPoint]
    hourly: List[ForecastPoint]
    fetched_at: float


class CityHistory:
    """Ordered list of searched cities, without duplicates."""

    def __init__(self, default_city: str = DEFAULT_CITY):
        self.default_city = default_city
        self._cities: List[str] = [default_city]

    def add(self, city: str) -> None:
        if city not in self._cities:
            self._cities.append(city)

    def reset(self) -> None:
        self._cities = [self.default_city]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._cities))

    def __len__(self) -> int:
        return len(self._cities)

    def __contains__(self, city: str) -> bool:
        return city in self._cities


class Dashboard:
    """
    Presentation-side state for the weather dashboard.

    Holds the selected unit system and the city history, and runs the
    blocking client calls for a refresh on worker threads so the current
    conditions and the forecasts are fetched concurrently. The client cache
    and the city history are cleared independently.
    """

    def __init__(self, client: WeatherClientBase, units: str = "metric", max_workers: int = 3):
        self.client = client
        self.units = units
        self.history = CityHistory()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="weather-fetch")

    def toggle_units(self) -> str:
        """Switch between metric and imperial; returns the new unit system."""
        self.units = "imperial" if self.units == "metric" else "metric"
        logging.info(f"Units switched to {self.units}")
        return self.units

    def clear_cache(self) -> None:
        self.client.clear_cache()

    def reset_history(self) -> None:
        self.history.reset()

    def refresh(self, city: str) -> DashboardSnapshot:
        """
        Fetch current conditions, UV index and forecasts for a city.

        Args:
            city: City name as typed by the user; surrounding whitespace is ignored

        Returns:
            DashboardSnapshot with all data for the city

        Raises:
            ValueError: If the city is empty
            WeatherProviderError: If any of the fetches fails
        """
        city = city.strip()
        if not city:
            raise ValueError("Please enter a city name")
        self.history.add(city)
        units = self.units

        logging.info(f"Refreshing weather for {city} ({units})")
        current_future = self._executor.submit(self._current_with_uv, city, units)
        daily_future = self._executor.submit(self.client.get_forecast, city, units, DAILY_FORECAST_POINTS)
        hourly_future = self._executor.submit(self.client.get_forecast, city, units, HOURLY_FORECAST_POINTS)

        futures = [current_future, daily_future, hourly_future]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        failed = [future for future in futures if future in done and future.exception() is not None]
        if failed:
            for future in pending:
                future.cancel()
            for future in failed[1:]:
                logging.warning(f"Additional fetch failure for {city}: {future.exception()}")
            raise failed[0].exception()

        current, uv_index = current_future.result()
        daily = daily_samples(daily_future.result())
        hourly = hourly_future.result()
        return DashboardSnapshot(
            city=city,
            units=units,
            current=current,
            uv_index=uv_index,
            daily=daily,
            hourly=hourly,
            fetched_at=time.time(),
        )

    def _current_with_uv(self, city: str, units: str) -> Tuple[CurrentConditions, float]:
        current = self.client.get_current_conditions(city, units)
        return current, self.client.get_uv_index(current.lat, current.lon)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "Dashboard":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
