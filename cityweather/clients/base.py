from __future__ import annotations

from typing import Protocol

from cityweather.models.weather import FetchResult


class WeatherClient(Protocol):
    def close(self) -> None: ...

    def fetch(self, city: str, api_key: str | None = None) -> FetchResult: ...
