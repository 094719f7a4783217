from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from cityweather.api.deps import get_settings, get_weather_client, get_weather_fetcher
from cityweather.clients.base import WeatherClient
from cityweather.core.config import Settings
from cityweather.models.weather import FailureKind, FetchFailure, WeatherSnapshot
from cityweather.schemas.weather import (
    WeatherCurrent,
    WeatherDisplayOut,
    WeatherFailureDetail,
    WeatherLatest,
    WeatherRefreshResponse,
)
from cityweather.services.display import build_display
from cityweather.services.weather import WeatherFetcher

router = APIRouter(prefix="/weather")

CityQuery = Annotated[str | None, Query(min_length=1, max_length=200)]

FAILURE_STATUS: dict[FailureKind, int] = {
    FailureKind.MISSING_CREDENTIAL: status.HTTP_503_SERVICE_UNAVAILABLE,
    FailureKind.TRANSPORT: status.HTTP_502_BAD_GATEWAY,
    FailureKind.MALFORMED_RESPONSE: status.HTTP_502_BAD_GATEWAY,
    FailureKind.CITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def _to_schema(snapshot: WeatherSnapshot, assets_dir: Path) -> WeatherCurrent:
    display = build_display(snapshot, assets_dir)
    return WeatherCurrent(
        **asdict(snapshot),
        display=WeatherDisplayOut(
            headline=display.headline,
            description=display.description,
            location=display.location,
            temperature=display.temperature,
            humidity=display.humidity,
            wind=display.wind,
            feels_like=display.feels_like,
            banner_path=str(display.banner_path),
            icon_path=str(display.icon_path),
        ),
    )


def _failure_detail(failure: FetchFailure) -> WeatherFailureDetail:
    return WeatherFailureDetail(kind=failure.kind, message=failure.message)


@router.get("/current", response_model=WeatherCurrent)
def current_weather(
    client: Annotated[WeatherClient, Depends(get_weather_client)],
    settings: Annotated[Settings, Depends(get_settings)],
    city: CityQuery = None,
) -> WeatherCurrent:
    result = client.fetch(city or settings.default_city)
    if isinstance(result, FetchFailure):
        raise HTTPException(
            status_code=FAILURE_STATUS[result.kind],
            detail=_failure_detail(result).model_dump(mode="json"),
        )
    return _to_schema(result.snapshot, settings.assets_dir)


@router.post(
    "/refresh",
    response_model=WeatherRefreshResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def refresh_weather(
    fetcher: Annotated[WeatherFetcher, Depends(get_weather_fetcher)],
    settings: Annotated[Settings, Depends(get_settings)],
    city: CityQuery = None,
) -> WeatherRefreshResponse:
    target = city or settings.default_city
    if not fetcher.request(target):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A weather fetch is already in progress",
        )
    return WeatherRefreshResponse(city=target)


@router.get("/latest", response_model=WeatherLatest)
def latest_weather(
    fetcher: Annotated[WeatherFetcher, Depends(get_weather_fetcher)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> WeatherLatest:
    result = fetcher.last_result
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No weather fetched yet",
        )
    if isinstance(result, FetchFailure):
        return WeatherLatest(
            city=fetcher.last_city, ok=False, failure=_failure_detail(result)
        )
    return WeatherLatest(
        city=fetcher.last_city,
        ok=True,
        weather=_to_schema(result.snapshot, settings.assets_dir),
    )
