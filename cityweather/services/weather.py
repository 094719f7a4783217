from __future__ import annotations

import logging
import threading
from typing import Callable

from cityweather.clients.base import WeatherClient
from cityweather.models.weather import (
    FailureKind,
    FetchFailure,
    FetchResult,
    FetchSuccess,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[FetchResult], None]


class WeatherFetcher:
    """Runs fetches on a worker thread so the caller's loop never blocks.

    Only one fetch is in flight at a time: ``request`` returns ``False`` and
    does nothing while the previous fetch is still running. Finished results
    land in a single slot read with ``poll``; a newer result replaces an unread
    older one.
    """

    def __init__(
        self,
        *,
        client: WeatherClient,
        on_complete: CompletionCallback | None = None,
    ) -> None:
        self._client = client
        self._on_complete = on_complete
        self._lock = threading.Lock()
        self._idle = threading.Event()
        self._idle.set()
        self._mailbox: FetchResult | None = None
        self._last_result: FetchResult | None = None
        self._current: WeatherSnapshot | None = None
        self._last_city: str | None = None

    @property
    def in_flight(self) -> bool:
        return not self._idle.is_set()

    @property
    def current(self) -> WeatherSnapshot | None:
        with self._lock:
            return self._current

    @property
    def last_result(self) -> FetchResult | None:
        with self._lock:
            return self._last_result

    @property
    def last_city(self) -> str | None:
        with self._lock:
            return self._last_city

    def request(self, city: str) -> bool:
        with self._lock:
            if not self._idle.is_set():
                logger.debug("Fetch for %r rejected, another fetch is in flight", city)
                return False
            self._idle.clear()
            self._last_city = city
            worker = threading.Thread(
                target=self._run, args=(city,), name="weather-fetch", daemon=True
            )
            worker.start()
        return True

    def poll(self) -> FetchResult | None:
        with self._lock:
            result, self._mailbox = self._mailbox, None
            return result

    def wait(self, timeout: float | None = None) -> bool:
        return self._idle.wait(timeout)

    def _run(self, city: str) -> None:
        try:
            result = self._client.fetch(city)
        except Exception as e:  # noqa: BLE001 - the slot must always receive a result
            logger.exception("Weather client raised while fetching %r", city)
            result = FetchFailure(FailureKind.TRANSPORT, f"Weather fetch failed: {e}")

        with self._lock:
            self._mailbox = result
            self._last_result = result
            if isinstance(result, FetchSuccess):
                self._current = result.snapshot
        self._idle.set()

        if isinstance(result, FetchFailure):
            logger.info("Fetch for %r finished with %s", city, result.kind.value)
        if self._on_complete is not None:
            try:
                self._on_complete(result)
            except Exception:  # noqa: BLE001 - keep the worker from dying silently
                logger.exception("Weather completion callback failed for %r", city)
