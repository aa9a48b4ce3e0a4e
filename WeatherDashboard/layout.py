"""Text layout for the weather dashboard - pure functions for testability."""
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from weather_data import CurrentConditions, ForecastPoint

CLOCK_FORMAT = "%H:%M"
DAY_FORMAT = "%Y-%m-%d %H:%M"
STAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def unit_symbols(units: str) -> Tuple[str, str]:
    """
    Get display symbols for a unit system.

    Args:
        units: "metric" or "imperial"

    Returns:
        Tuple of (temperature symbol, wind speed symbol)
    """
    if units == "metric":
        return ("°C", "m/s")
    return ("°F", "mph")


def format_temperature(temp: float, units: str) -> str:
    return f"{temp:.1f}{unit_symbols(units)[0]}"


def format_wind(speed: float, units: str) -> str:
    return f"{speed:.1f} {unit_symbols(units)[1]}"


def format_clock(timestamp: float, fmt: str = CLOCK_FORMAT) -> str:
    """Format a UNIX timestamp in the local timezone."""
    return datetime.fromtimestamp(timestamp).strftime(fmt)


def get_condition_text(current: CurrentConditions) -> str:
    """
    Get short text representation of weather condition.

    Args:
        current: Current conditions

    Returns:
        Short condition string (e.g., "Cloudy", "Rain", "Clear")
    """
    main = current.condition_main.lower()

    # Map common conditions to short display strings
    condition_map = {
        "clear": "Clear",
        "clouds": "Cloudy",
        "rain": "Rain",
        "drizzle": "Drizzle",
        "thunderstorm": "Storm",
        "snow": "Snow",
        "mist": "Mist",
        "fog": "Fog",
        "haze": "Haze",
    }

    return condition_map.get(main, current.condition_main.capitalize())


def format_current_lines(
    current: CurrentConditions,
    units: str,
    uv_index: Optional[float] = None
) -> List[str]:
    """
    Lay out the current conditions card as lines of text.

    Args:
        current: Current conditions to display
        units: Unit system the conditions were fetched in
        uv_index: UV index, shown as "n/a" when unknown

    Returns:
        Lines of text, city header first
    """
    uv_text = f"{uv_index:.1f}" if uv_index is not None else "n/a"
    return [
        f"{current.city}: {get_condition_text(current)} ({current.condition_description})",
        f"Temperature  {format_temperature(current.temp, units)}",
        f"Feels like   {format_temperature(current.feels_like, units)}",
        f"Wind         {format_wind(current.wind_speed, units)}",
        f"Humidity     {current.humidity}%",
        f"Pressure     {current.pressure} hPa",
        f"UV index     {uv_text}",
        f"Sun          {format_clock(current.sunrise)} / {format_clock(current.sunset)}",
    ]


def format_forecast_lines(
    points: Sequence[ForecastPoint],
    units: str,
    fmt: str = DAY_FORMAT
) -> List[str]:
    """One "<time>: <temperature>" line per forecast point, order preserved."""
    return [
        f"{format_clock(point.timestamp, fmt)}: {format_temperature(point.temp, units)}"
        for point in points
    ]
