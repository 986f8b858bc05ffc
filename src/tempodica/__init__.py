"""Tempodica — weather fetch-and-classify pipeline for the Open-Meteo API."""

from __future__ import annotations

from sqlalchemy import Engine

from tempodica._logging import configure_logging
from tempodica.client import AsyncWeatherClient, WeatherClient
from tempodica.config import WeatherSettings
from tempodica.controller import ShowToast, WeatherStateController, WeatherUiState
from tempodica.details import DetailsController, DetailsUiState
from tempodica.exceptions import (
    DecodeError,
    NetworkError,
    NetworkTimeoutError,
    ServerError,
    StorageError,
    TempodicaError,
)
from tempodica.history import HistoryStore, LiveQuery, Subscription, create_history_engine
from tempodica.repository import WeatherRepository, fake_weather_response


def build_repository(
    settings: WeatherSettings,
    engine: Engine | None = None,
    *,
    persist: bool = True,
) -> WeatherRepository:
    """Wire client, history store and repository from ``settings``.

    Close the returned repository to release its HTTP connection.
    """
    configure_logging(settings.log_dir)
    client = AsyncWeatherClient(base_url=settings.base_url, timeout=settings.timeout)
    store = None
    if persist:
        store = HistoryStore(engine or create_history_engine(settings.database_url))
    return WeatherRepository(
        client,
        store,
        use_fake=settings.use_fake,
        use_fake_fallback=settings.use_fake_fallback,
        keep=settings.history_keep,
    )


__all__ = [
    "AsyncWeatherClient",
    "DecodeError",
    "DetailsController",
    "DetailsUiState",
    "HistoryStore",
    "LiveQuery",
    "NetworkError",
    "NetworkTimeoutError",
    "ServerError",
    "ShowToast",
    "StorageError",
    "Subscription",
    "TempodicaError",
    "WeatherClient",
    "WeatherRepository",
    "WeatherSettings",
    "WeatherStateController",
    "WeatherUiState",
    "build_repository",
    "create_history_engine",
    "fake_weather_response",
]

__version__ = "0.1.0"
