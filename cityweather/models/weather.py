from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cityweather.models.conditions import ConditionCategory


@dataclass(frozen=True)
class WeatherSnapshot:
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


class FailureKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    CITY_NOT_FOUND = "city_not_found"


@dataclass(frozen=True)
class FetchSuccess:
    snapshot: WeatherSnapshot

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure:
    kind: FailureKind
    message: str

    @property
    def ok(self) -> bool:
        return False


FetchResult = FetchSuccess | FetchFailure
