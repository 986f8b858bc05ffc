"""Weather repository: remote forecast with fake fallback plus local history."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

from tempodica._logging import get_logger, log_api_call
from tempodica.exceptions import StorageError, TempodicaError
from tempodica.history import HistoryStore, LiveQuery
from tempodica.models.current_weather import CurrentWeather
from tempodica.models.hourly import HourlyForecast
from tempodica.models.response import WeatherResponse

DEFAULT_KEEP = 5

FAKE_CURRENT_TEMPERATURE = 25.0
FAKE_WIND_SPEED = 5.0
FAKE_HOURS = 12
FAKE_FIRST_HOUR_TEMPERATURE = 20.0


class ForecastSource(Protocol):
    """Anything that can fetch a forecast, e.g. ``AsyncWeatherClient``."""

    async def forecast(self, latitude: float, longitude: float) -> WeatherResponse: ...

    async def close(self) -> None: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fake_weather_response(now: datetime) -> WeatherResponse:
    """Synthesize an offline response: clear sky, 12 hours of rising temperatures."""
    start = now.replace(minute=0, second=0, microsecond=0)
    times = [
        (start + timedelta(hours=hour)).strftime("%Y-%m-%dT%H:%M")
        for hour in range(FAKE_HOURS)
    ]
    return WeatherResponse(
        current_weather=CurrentWeather(
            temperature=FAKE_CURRENT_TEMPERATURE,
            wind_speed=FAKE_WIND_SPEED,
            weather_code=0,
        ),
        hourly=HourlyForecast(
            time=times,
            temperatures=[FAKE_FIRST_HOUR_TEMPERATURE + hour for hour in range(FAKE_HOURS)],
            weather_codes=[0] * FAKE_HOURS,
        ),
    )


class WeatherRepository:
    """Composes the forecast client and the optional history store.

    Fallback policy, in order of precedence:

    * ``use_fake``: always answer with ``fake_weather_response``; the client is
      never called.
    * ``use_fake_fallback``: call the client and answer with the fake response
      if it fails.
    * neither: client errors propagate unchanged.
    """

    def __init__(
        self,
        client: ForecastSource,
        store: HistoryStore | None = None,
        *,
        use_fake: bool = False,
        use_fake_fallback: bool = True,
        keep: int = DEFAULT_KEEP,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._client = client
        self._store = store
        self._use_fake = use_fake
        self._use_fake_fallback = use_fake_fallback
        self._keep = keep
        self._clock = clock or _utc_now

    @property
    def store(self) -> HistoryStore | None:
        return self._store

    async def close(self) -> None:
        """Close the underlying client."""
        await self._client.close()

    @log_api_call
    async def get_weather_forecast(self, latitude: float, longitude: float) -> WeatherResponse:
        if self._use_fake:
            return fake_weather_response(self._clock())
        try:
            return await self._client.forecast(latitude, longitude)
        except TempodicaError as exc:
            if not self._use_fake_fallback:
                raise
            get_logger().warning(
                "FALLBACK: forecast(%r, %r) failed with %s: %s; using fake response",
                latitude, longitude, type(exc).__name__, exc,
            )
            return fake_weather_response(self._clock())

    async def save_measurement(self, temperature: float, description: str) -> None:
        """Insert a reading and trim the history; both steps are best-effort.

        Store calls run in a worker thread so the event loop never waits on disk I/O.
        """
        if self._store is None:
            return
        logger = get_logger()
        try:
            await asyncio.to_thread(self._store.insert, temperature, description)
        except StorageError as exc:
            logger.warning("STORAGE: insert failed: %s", exc)
        try:
            await asyncio.to_thread(self._store.trim_to_keep, self._keep)
        except StorageError as exc:
            logger.warning("STORAGE: trim to %d failed: %s", self._keep, exc)

    def last_measurements(self, limit: int = DEFAULT_KEEP) -> LiveQuery | None:
        """Live view of the newest measurements, or None without a store."""
        if self._store is None:
            return None
        return self._store.recent_measurements(limit)
