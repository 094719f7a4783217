from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cityweather.models.weather import FailureKind, FetchFailure, WeatherSnapshot
from cityweather.services.assets import resolve_assets

MAX_PLACE_LENGTH = 99
MAX_TEXT_LENGTH = 255

RETRY_HINT = "Retry to fetch again."


@dataclass(frozen=True)
class WeatherDisplay:
    headline: str
    description: str
    location: str
    temperature: str
    humidity: str | None
    wind: str | None
    feels_like: str | None
    banner_path: Path
    icon_path: Path


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit]


def build_display(snapshot: WeatherSnapshot, assets_dir: Path | str) -> WeatherDisplay:
    """Turn a snapshot into the strings and asset paths the weather panel draws.

    Length caps live here rather than in the parser: long provider text is cut
    for display but the snapshot keeps it whole.
    """
    city = truncate(snapshot.city, MAX_PLACE_LENGTH)
    country = truncate(snapshot.country, MAX_PLACE_LENGTH)
    location = ", ".join(part for part in (city, country) if part)

    description = truncate(snapshot.description, MAX_TEXT_LENGTH)
    headline = truncate(snapshot.summary, MAX_TEXT_LENGTH) or description

    assets = resolve_assets(snapshot.condition_category, assets_dir)
    return WeatherDisplay(
        headline=headline,
        description=description,
        location=location,
        temperature=f"{snapshot.temperature_c}C",
        humidity=(
            f"{snapshot.humidity_percent}%"
            if snapshot.humidity_percent is not None
            else None
        ),
        wind=f"{snapshot.wind_speed_kmh} km/h" if snapshot.wind_speed_kmh is not None else None,
        feels_like=(
            f"Feels like {snapshot.feels_like_c}C"
            if snapshot.feels_like_c is not None
            else None
        ),
        banner_path=assets.banner,
        icon_path=assets.icon,
    )


_FAILURE_TITLES: dict[FailureKind, str] = {
    FailureKind.MISSING_CREDENTIAL: "Missing API key",
    FailureKind.TRANSPORT: "Network error",
    FailureKind.MALFORMED_RESPONSE: "Unexpected response",
    FailureKind.CITY_NOT_FOUND: "Unknown city",
}


def failure_message(failure: FetchFailure) -> str:
    title = _FAILURE_TITLES[failure.kind]
    message = truncate(failure.message, MAX_TEXT_LENGTH)
    if failure.kind is FailureKind.MISSING_CREDENTIAL:
        return f"{title}: {message}."
    return f"{title}: {message}. {RETRY_HINT}"


def render_text(display: WeatherDisplay) -> str:
    lines = [display.headline, display.location, display.temperature]
    if display.feels_like:
        lines.append(display.feels_like)
    details = [v for v in (display.humidity, display.wind) if v]
    if details:
        lines.append(" | ".join(details))
    if display.description and display.description != display.headline:
        lines.append(display.description)
    return "\n".join(line for line in lines if line)
