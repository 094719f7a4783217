from __future__ import annotations

import threading

import pytest
from fastapi.testclient import TestClient

from cityweather.models.weather import FailureKind, FetchFailure
from cityweather.services.weather import WeatherFetcher
from tests.fakes import FakeWeatherClient


def test_root(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"name": "cityweather", "status": "ok"}
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_current_weather(client: TestClient, fake_client: FakeWeatherClient) -> None:
    resp = client.get("/api/v1/weather/current", params={"city": "Paris"})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["city"] == "Paris"
    assert body["condition_category"] == "clear"
    assert body["temperature_c"] == 27
    assert body["display"]["temperature"] == "27C"
    assert body["display"]["banner_path"].endswith("clear.jpg")
    assert fake_client.calls == ["Paris"]


def test_current_weather_uses_default_city(
    client: TestClient, fake_client: FakeWeatherClient
) -> None:
    resp = client.get("/api/v1/weather/current")
    assert resp.status_code == 200, resp.text
    assert fake_client.calls == ["Lahore"]


@pytest.mark.parametrize(
    ("kind", "status_code"),
    [
        (FailureKind.MISSING_CREDENTIAL, 503),
        (FailureKind.TRANSPORT, 502),
        (FailureKind.MALFORMED_RESPONSE, 502),
        (FailureKind.CITY_NOT_FOUND, 404),
    ],
)
def test_current_weather_failures(
    client: TestClient,
    fake_client: FakeWeatherClient,
    kind: FailureKind,
    status_code: int,
) -> None:
    fake_client.results["Nowhere"] = FetchFailure(kind, "boom")
    resp = client.get("/api/v1/weather/current", params={"city": "Nowhere"})
    assert resp.status_code == status_code
    assert resp.json()["detail"] == {"kind": kind.value, "message": "boom"}


def test_latest_before_any_fetch(client: TestClient) -> None:
    resp = client.get("/api/v1/weather/latest")
    assert resp.status_code == 404


def test_refresh_then_latest(client: TestClient, fetcher: WeatherFetcher) -> None:
    refresh = client.post("/api/v1/weather/refresh", params={"city": "Bergen"})
    assert refresh.status_code == 202, refresh.text
    assert refresh.json() == {"city": "Bergen", "accepted": True}

    assert fetcher.wait(timeout=5.0)
    latest = client.get("/api/v1/weather/latest")
    assert latest.status_code == 200, latest.text
    body = latest.json()
    assert body["ok"] is True
    assert body["city"] == "Bergen"
    assert body["weather"]["city"] == "Bergen"
    assert body["failure"] is None


def test_latest_reports_failure(
    client: TestClient, fake_client: FakeWeatherClient, fetcher: WeatherFetcher
) -> None:
    fake_client.results["Atlantis"] = FetchFailure(
        FailureKind.CITY_NOT_FOUND, "City not found"
    )
    client.post("/api/v1/weather/refresh", params={"city": "Atlantis"})
    assert fetcher.wait(timeout=5.0)

    body = client.get("/api/v1/weather/latest").json()
    assert body["ok"] is False
    assert body["weather"] is None
    assert body["failure"] == {"kind": "city_not_found", "message": "City not found"}


def test_refresh_conflict_while_in_flight(
    client: TestClient, fake_client: FakeWeatherClient, fetcher: WeatherFetcher
) -> None:
    gate = threading.Event()
    fake_client.gate = gate
    try:
        first = client.post("/api/v1/weather/refresh")
        second = client.post("/api/v1/weather/refresh")
    finally:
        gate.set()

    assert first.status_code == 202
    assert first.json()["city"] == "Lahore"
    assert second.status_code == 409
    assert fetcher.wait(timeout=5.0)
