"""Public client classes for the Open-Meteo forecast API."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from tempodica._http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, AsyncTransport, SyncTransport
from tempodica._logging import log_api_call
from tempodica._query import DEFAULT_HOURLY_FIELDS, ForecastQuery
from tempodica.exceptions import DecodeError
from tempodica.models.response import WeatherResponse

FORECAST_ENDPOINT = "/forecast"


def _build_query(latitude: float, longitude: float, hourly: bool) -> ForecastQuery:
    return ForecastQuery(
        latitude=latitude,
        longitude=longitude,
        hourly=DEFAULT_HOURLY_FIELDS if hourly else (),
    )


def _validate_response(data: dict[str, Any]) -> WeatherResponse:
    """Validate a forecast payload against the response model."""
    try:
        return WeatherResponse.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"Failed to validate forecast response: {exc}") from exc


class WeatherClient:
    """Synchronous client for the Open-Meteo forecast API.

    Usage:
        client = WeatherClient()
        response = client.forecast(-23.5505, -46.6333)
        client.close()

        # Or as a context manager:
        with WeatherClient() as client:
            response = client.forecast(-8.69, -35.59, hourly=False)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = SyncTransport(base_url=base_url, timeout=timeout)

    def __enter__(self) -> WeatherClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._transport.close()

    @log_api_call
    def forecast(
        self,
        latitude: float,
        longitude: float,
        *,
        hourly: bool = True,
    ) -> WeatherResponse:
        """Get current weather and, unless disabled, the hourly forecast."""
        params = _build_query(latitude, longitude, hourly).to_params()
        data = self._transport.get(FORECAST_ENDPOINT, params)
        return _validate_response(data)


class AsyncWeatherClient:
    """Asynchronous client for the Open-Meteo forecast API.

    Usage:
        async with AsyncWeatherClient() as client:
            response = await client.forecast(-23.5505, -46.6333)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> AsyncWeatherClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    @log_api_call
    async def forecast(
        self,
        latitude: float,
        longitude: float,
        *,
        hourly: bool = True,
    ) -> WeatherResponse:
        """Get current weather and, unless disabled, the hourly forecast."""
        params = _build_query(latitude, longitude, hourly).to_params()
        data = await self._transport.get(FORECAST_ENDPOINT, params)
        return _validate_response(data)
