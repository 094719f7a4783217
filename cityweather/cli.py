from __future__ import annotations

import argparse
import sys

import uvicorn

from cityweather.core.config import Settings, load_settings
from cityweather.core.log import configure_logging
from cityweather.factory import create_weather_client
from cityweather.models.weather import FetchSuccess
from cityweather.services.display import build_display, failure_message, render_text
from cityweather.services.weather import WeatherFetcher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cityweather", description="Show the current weather for a city."
    )
    parser.add_argument("city", nargs="?", help="city name (defaults to APP_DEFAULT_CITY)")
    parser.add_argument("--serve", action="store_true", help="run the HTTP API instead")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    return parser


def show_weather(city: str, settings: Settings) -> int:
    client = create_weather_client(settings)
    try:
        fetcher = WeatherFetcher(client=client)
        fetcher.request(city)
        # Bounded by the client's connect/read timeouts.
        fetcher.wait()
        result = fetcher.poll()
    finally:
        client.close()

    if result is None:
        print(f"No weather result for {city}", file=sys.stderr)
        return 1
    if not isinstance(result, FetchSuccess):
        print(failure_message(result), file=sys.stderr)
        return 1
    print(render_text(build_display(result.snapshot, settings.assets_dir)))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level)

    if args.serve:
        uvicorn.run(
            "cityweather.main:app",
            host=args.host,
            port=args.port,
            reload=not settings.is_production,
        )
        return 0

    return show_weather(args.city or settings.default_city, settings)
