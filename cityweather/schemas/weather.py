from __future__ import annotations

from pydantic import BaseModel, Field

from cityweather.models.conditions import ConditionCategory
from cityweather.models.weather import FailureKind


class WeatherDisplayOut(BaseModel):
    headline: str
    description: str
    location: str
    temperature: str
    humidity: str | None = None
    wind: str | None = None
    feels_like: str | None = None
    banner_path: str
    icon_path: str


class WeatherCurrent(BaseModel):
    city: str
    country: str
    summary: str
    description: str
    condition_code: int
    condition_category: ConditionCategory
    temperature_c: int

    feels_like_c: int | None = None
    humidity_percent: int | None = None
    wind_speed_kmh: int | None = None

    display: WeatherDisplayOut


class WeatherFailureDetail(BaseModel):
    kind: FailureKind
    message: str


class WeatherLatest(BaseModel):
    city: str | None = None
    ok: bool
    weather: WeatherCurrent | None = None
    failure: WeatherFailureDetail | None = None


class WeatherRefreshResponse(BaseModel):
    city: str = Field(min_length=1)
    accepted: bool = True
