"""Terminal weather dashboard."""
import argparse
import logging
import os
import signal
import sys
import time
from typing import Optional, Tuple

from dotenv import load_dotenv

from dashboard import Dashboard, DashboardSnapshot, DEFAULT_CITY
from icons import IconCache
from layout import format_current_lines, format_forecast_lines, format_clock, STAMP_FORMAT, CLOCK_FORMAT
from openweather_client import WeatherClient
from weather_provider import WeatherProviderError

DEFAULT_REFRESH_SECONDS = 15 * 60
PROMPT = "City, or [u]nits [c]lear cache [r]eset history [q]uit: "


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Terminal weather dashboard")
    parser.add_argument("--city", default=None, help="City to show (default: $WEATHER_CITY or Prague)")
    parser.add_argument("--units", choices=["metric", "imperial"], default="metric")
    parser.add_argument("--refresh", type=float, default=DEFAULT_REFRESH_SECONDS, help="Seconds between refreshes")
    parser.add_argument("--once", action="store_true", help="Show one snapshot and exit")
    parser.add_argument("--interactive", action="store_true", help="Prompt for a city or command after each refresh")
    parser.add_argument("--cache-ttl", type=int, default=600)
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--icon-dir", default=None, help="Download condition icons into this directory")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True
    )
    # urllib3 logs full request URLs at DEBUG, including the appid parameter
    logging.getLogger("urllib3").setLevel(logging.INFO)


def load_config(city_arg: Optional[str]) -> Tuple[str, str]:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    city = city_arg or os.getenv("WEATHER_CITY", DEFAULT_CITY)

    if not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")
    if not city.strip():
        raise SystemExit("City name must not be empty")

    logging.info("Configuration loaded: city=%s", city)
    return api_key, city.strip()


def render_snapshot(snapshot: DashboardSnapshot) -> str:
    lines = format_current_lines(snapshot.current, snapshot.units, snapshot.uv_index)
    lines.append("")
    lines.append("Next hours:")
    lines.extend("  " + line for line in format_forecast_lines(snapshot.hourly, snapshot.units, CLOCK_FORMAT))
    lines.append("Next days:")
    lines.extend("  " + line for line in format_forecast_lines(snapshot.daily, snapshot.units))
    lines.append("")
    lines.append(f"Updated {format_clock(snapshot.fetched_at, STAMP_FORMAT)}")
    return "\n".join(lines)


def save_icon(icons: Optional[IconCache], snapshot: DashboardSnapshot) -> None:
    if icons is None:
        return
    try:
        path = icons.fetch(snapshot.current.icon)
        logging.info("Icon for %s: %s", snapshot.current.condition_main, path)
    except (WeatherProviderError, OSError) as err:
        logging.warning("Icon download failed: %s", err)


def show_once(dashboard: Dashboard, city: str, icons: Optional[IconCache] = None) -> bool:
    """Fetch and print one snapshot; returns False if the refresh failed."""
    try:
        snapshot = dashboard.refresh(city)
    except WeatherProviderError as err:
        logging.error("Weather fetch failed: %s", err)
        print(f"Error: {err}")
        return False
    print(render_snapshot(snapshot))
    save_icon(icons, snapshot)
    return True


def dashboard_loop(dashboard: Dashboard, city: str, args: argparse.Namespace, icons: Optional[IconCache] = None) -> None:
    frame = 0
    while True:
        frame += 1
        logging.info("Frame %s: fetching weather", frame)
        show_once(dashboard, city, icons)
        time.sleep(max(args.refresh, 1.0))


def format_history(dashboard: Dashboard) -> str:
    return "Cities: " + ", ".join(dashboard.history)


def handle_command(dashboard: Dashboard, command: str, city: str) -> Optional[str]:
    """
    Apply one prompt command to the dashboard.

    Commands:
        u: toggle metric/imperial units
        c: clear the response cache
        r: reset the city history
        q: quit
        empty input: refresh the current city
        anything else: switch to that city

    Returns:
        City to show next, or None to quit
    """
    command = command.strip()
    if command == "q":
        return None
    if command == "u":
        print(f"Units: {dashboard.toggle_units()}")
    elif command == "c":
        dashboard.clear_cache()
        print("Cache cleared")
    elif command == "r":
        dashboard.reset_history()
        print("City history reset")
    elif command:
        return command
    return city


def interactive_loop(dashboard: Dashboard, city: str, icons: Optional[IconCache] = None, read=input) -> None:
    while True:
        show_once(dashboard, city, icons)
        print(format_history(dashboard))
        try:
            command = read(PROMPT)
        except EOFError:
            break
        next_city = handle_command(dashboard, command, city)
        if next_city is None:
            break
        city = next_city


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_key, city = load_config(args.city)

    client = WeatherClient(api_key=api_key, timeout=args.timeout, cache_ttl_seconds=args.cache_ttl)
    icons = IconCache(args.icon_dir, timeout=args.timeout) if args.icon_dir else None

    with Dashboard(client, units=args.units) as dashboard:
        if args.once:
            return 0 if show_once(dashboard, city, icons) else 1
        if args.interactive:
            try:
                interactive_loop(dashboard, city, icons)
            except KeyboardInterrupt:
                logging.info("Stopping dashboard")
            return 0

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)
        try:
            dashboard_loop(dashboard, city, args, icons)
        except KeyboardInterrupt:
            logging.info("Stopping dashboard")
    return 0


if __name__ == "__main__":
    sys.exit(main())
