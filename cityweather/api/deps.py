from __future__ import annotations

from fastapi import Request

from cityweather.clients.base import WeatherClient
from cityweather.core.config import Settings
from cityweather.services.weather import WeatherFetcher


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_weather_client(request: Request) -> WeatherClient:
    return request.app.state.weather_client


def get_weather_fetcher(request: Request) -> WeatherFetcher:
    return request.app.state.weather_fetcher
