"""Shared test fixtures and sample API responses."""

from __future__ import annotations

import asyncio
import logging

import pytest

import tempodica._logging as api_logging
from tempodica.history import HistoryStore, create_history_engine
from tempodica.models.response import WeatherResponse

BASE_URL = "https://api.open-meteo.com/v1"


SAMPLE_CURRENT_WEATHER = {
    "temperature": 22.4,
    "windspeed": 11.2,
    "winddirection": 130.0,
    "weathercode": 2,
    "is_day": 1,
    "time": "2024-03-05T15:00",
}

SAMPLE_HOURLY = {
    "time": [
        "2024-03-05T14:00",
        "2024-03-05T15:00",
        "2024-03-05T16:00",
        "2024-03-05T17:00",
    ],
    "temperature_2m": [21.6, 22.4, 23.1, 22.0],
    "weathercode": [1, 2, 61, 95],
}

SAMPLE_FORECAST = {
    "latitude": -23.5,
    "longitude": -46.625,
    "generationtime_ms": 0.07,
    "utc_offset_seconds": 0,
    "timezone": "GMT",
    "timezone_abbreviation": "GMT",
    "elevation": 760.0,
    "current_weather": SAMPLE_CURRENT_WEATHER,
    "hourly_units": {"time": "iso8601", "temperature_2m": "°C", "weathercode": "wmo code"},
    "hourly": SAMPLE_HOURLY,
}


class FakeForecastSource:
    """In-memory stand-in for ``AsyncWeatherClient``."""

    def __init__(
        self,
        response: WeatherResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[float, float]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def forecast(self, latitude: float, longitude: float) -> WeatherResponse:
        self.calls.append((latitude, longitude))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response

    async def close(self) -> None:
        self.closed = True


def make_response(temperature: float = 22.4, code: int = 2) -> WeatherResponse:
    return WeatherResponse.model_validate(
        {
            "current_weather": {**SAMPLE_CURRENT_WEATHER, "temperature": temperature, "weathercode": code},
            "hourly": SAMPLE_HOURLY,
        }
    )


class StepClock:
    """Millisecond clock that advances by one on every call."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def store() -> HistoryStore:
    return HistoryStore(create_history_engine(), clock=StepClock())


@pytest.fixture(autouse=True)
def api_log(tmp_path):
    """Redirect the API log into tmp_path and reset the cached logger."""
    old_logger = api_logging._logger
    old_dir = api_logging._LOG_DIR
    old_file = api_logging._LOG_FILE

    named_logger = logging.getLogger(api_logging.LOGGER_NAME)
    named_logger.handlers.clear()

    api_logging._logger = None
    api_logging._LOG_DIR = str(tmp_path)
    api_logging._LOG_FILE = str(tmp_path / "api_calls.log")

    yield tmp_path / "api_calls.log"

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
    api_logging._logger = old_logger
    api_logging._LOG_DIR = old_dir
    api_logging._LOG_FILE = old_file
