from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from cityweather.api import deps
from cityweather.core.config import Settings
from cityweather.factory import create_app
from cityweather.services.weather import WeatherFetcher
from tests.fakes import FakeWeatherClient


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        OPENWEATHER_API_KEY="test-key",
        env="test",
        debug=True,
        docs_enabled=False,
        cors_origins=["http://localhost"],
        trusted_hosts=["testserver", "localhost"],
        weather_timeout_seconds=1.0,
        weather_user_agent="test-agent",
        default_city="Lahore",
        assets_dir=Path("/opt/cityweather"),
    )


@pytest.fixture()
def fake_client() -> FakeWeatherClient:
    return FakeWeatherClient()


@pytest.fixture()
def fetcher(fake_client: FakeWeatherClient) -> WeatherFetcher:
    return WeatherFetcher(client=fake_client)


@pytest.fixture()
def client(
    settings: Settings, fake_client: FakeWeatherClient, fetcher: WeatherFetcher
) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[deps.get_weather_client] = lambda: fake_client
    app.dependency_overrides[deps.get_weather_fetcher] = lambda: fetcher
    with TestClient(app) as client:
        yield client
    fetcher.wait(timeout=5.0)
