from __future__ import annotations

import pytest

from cityweather.core.config import Settings


def test_api_key_read_from_unprefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENWEATHER_API_KEY", "env-key")
    monkeypatch.setenv("APP_DEFAULT_CITY", "Karachi")

    settings = Settings(_env_file=None)

    assert settings.openweather_api_key == "env-key"
    assert settings.default_city == "Karachi"


def test_missing_api_key_is_empty_not_an_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)

    settings = Settings(_env_file=None)

    assert settings.openweather_api_key == ""
    assert settings.weather_endpoint == "https://api.openweathermap.org/data/2.5/weather"


def test_timeout_is_bounded() -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, weather_timeout_seconds=0)
