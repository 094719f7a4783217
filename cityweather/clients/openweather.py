from __future__ import annotations

import logging
import math
from typing import Any
from urllib.parse import quote

import httpx

from cityweather.core.config import OPENWEATHER_API_KEY_ENV
from cityweather.models.conditions import classify_condition
from cityweather.models.weather import (
    FailureKind,
    FetchFailure,
    FetchResult,
    FetchSuccess,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)

OPENWEATHER_CURRENT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"

KELVIN_OFFSET = 273.15
MS_TO_KMH = 3.6

PARSE_FAILURE_MESSAGE = "Failed to parse API response"
CITY_NOT_FOUND_MESSAGE = "City not found"


class MalformedPayload(ValueError):
    pass


def build_weather_url(
    city: str, api_key: str, endpoint: str = OPENWEATHER_CURRENT_WEATHER_URL
) -> str:
    separator = "&" if "?" in endpoint else "?"
    try:
        # Undecodable argv bytes arrive as lone surrogates; send the original bytes.
        encoded = quote(city, safe="", errors="surrogateescape")
    except UnicodeEncodeError:
        encoded = quote(city, safe="", errors="replace")
    return f"{endpoint}{separator}q={encoded}&appid={api_key}"


class OpenWeatherClient:
    """Fetches current conditions for a city from OpenWeatherMap.

    ``fetch`` never raises: every outcome, including network and parsing
    problems, comes back as a ``FetchResult``. The client keeps no state
    between calls, so one instance may serve several threads at once.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        user_agent: str = "cityweather",
        base_url: str = OPENWEATHER_CURRENT_WEATHER_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def fetch(self, city: str, api_key: str | None = None) -> FetchResult:
        key = self._api_key if api_key is None else api_key
        if not key:
            logger.warning("No API key configured, skipping fetch for %r", city)
            return FetchFailure(
                FailureKind.MISSING_CREDENTIAL, f"Set {OPENWEATHER_API_KEY_ENV}"
            )

        url = build_weather_url(city, key, self._base_url)
        try:
            resp = self._client.get(url)
            body = resp.read()
        except httpx.HTTPError as e:
            logger.warning("Weather request for %r failed: %s", city, e)
            return FetchFailure(FailureKind.TRANSPORT, str(e) or type(e).__name__)

        try:
            payload = resp.json()
        except ValueError:
            logger.warning(
                "Weather response for %r is not JSON (%d bytes)", city, len(body)
            )
            return FetchFailure(FailureKind.MALFORMED_RESPONSE, PARSE_FAILURE_MESSAGE)

        return parse_weather_payload(payload, city=city)


def parse_weather_payload(payload: Any, *, city: str = "") -> FetchResult:
    if not isinstance(payload, dict):
        logger.warning("Weather response for %r is not a JSON object", city)
        return FetchFailure(FailureKind.MALFORMED_RESPONSE, PARSE_FAILURE_MESSAGE)

    cod = _status_code(payload.get("cod"))
    if cod == 404:
        logger.info("Provider does not know city %r", city)
        return FetchFailure(FailureKind.CITY_NOT_FOUND, CITY_NOT_FOUND_MESSAGE)
    if cod is not None and cod != 200:
        message = _str_or_none(payload.get("message"))
        if message:
            logger.warning("Provider error %d for %r: %s", cod, city, message)
            return FetchFailure(
                FailureKind.MALFORMED_RESPONSE, f"{PARSE_FAILURE_MESSAGE}: {message}"
            )

    try:
        snapshot = _snapshot_from_payload(payload)
    except MalformedPayload as e:
        logger.warning("Weather response for %r is incomplete: %s", city, e)
        return FetchFailure(FailureKind.MALFORMED_RESPONSE, PARSE_FAILURE_MESSAGE)

    logger.debug(
        "Fetched weather for %r: %s %dC",
        snapshot.city,
        snapshot.condition_category.value,
        snapshot.temperature_c,
    )
    return FetchSuccess(snapshot)


def _snapshot_from_payload(payload: dict[str, Any]) -> WeatherSnapshot:
    sys_block = _dict_or_empty(payload.get("sys"))
    main = _dict_or_empty(payload.get("main"))
    wind = _dict_or_empty(payload.get("wind"))

    weather = payload.get("weather")
    first: dict[str, Any] = {}
    if isinstance(weather, list) and weather:
        first = _dict_or_empty(weather[0])

    condition_id = _number_or_none(first.get("id"))
    if condition_id is None:
        raise MalformedPayload("weather[0].id missing")
    kelvin = _number_or_none(main.get("temp"))
    if kelvin is None:
        raise MalformedPayload("main.temp missing")

    summary = _str_or_none(first.get("main")) or ""
    description = _str_or_none(first.get("description"))
    if description is None:
        description = summary

    feels_like = _number_or_none(main.get("feels_like"))
    humidity = _number_or_none(main.get("humidity"))
    wind_speed = _number_or_none(wind.get("speed"))

    code = int(condition_id)
    temperature = kelvin_to_celsius(kelvin)
    if temperature is None:
        raise MalformedPayload("main.temp out of range")
    return WeatherSnapshot(
        city=_str_or_none(payload.get("name")) or "",
        country=_str_or_none(sys_block.get("country")) or "",
        summary=summary,
        description=_capitalize_first(description),
        condition_code=code,
        condition_category=classify_condition(code),
        temperature_c=temperature,
        feels_like_c=kelvin_to_celsius(feels_like) if feels_like is not None else None,
        humidity_percent=_truncate(humidity) if humidity is not None else None,
        # Finite m/s values can still overflow to inf after scaling.
        wind_speed_kmh=_truncate(wind_speed * MS_TO_KMH) if wind_speed is not None else None,
    )


def kelvin_to_celsius(value: float) -> int | None:
    # int() truncates toward zero: -3.15 becomes -3.
    return _truncate(value - KELVIN_OFFSET)


def _truncate(value: float) -> int | None:
    if not math.isfinite(value):
        return None
    return int(value)


def _status_code(v: Any) -> int | None:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            pass
        try:
            v = float(v)
        except ValueError:
            return None
    if isinstance(v, float) and math.isfinite(v) and v.is_integer():
        return int(v)
    return None


def _number_or_none(v: Any) -> float | None:
    # JSON true/false decode to bool, which is an int subclass.
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    try:
        value = float(v)
    except OverflowError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _str_or_none(v: Any) -> str | None:
    if isinstance(v, str):
        return v
    return None


def _dict_or_empty(v: Any) -> dict[str, Any]:
    return v if isinstance(v, dict) else {}


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]
