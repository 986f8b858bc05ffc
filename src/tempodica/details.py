"""Details screen pipeline: full forecast plus the upcoming hourly outlook."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from tempodica._logging import get_logger, log_service_call
from tempodica.controller import classify_error
from tempodica.models.hourly import DEFAULT_OUTLOOK_HOURS, HourlyPoint
from tempodica.models.response import WeatherResponse
from tempodica.repository import WeatherRepository


class DetailsUiState(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    forecast: WeatherResponse | None = None
    hourly: list[HourlyPoint] = Field(default_factory=list)
    error_message: str | None = None


class DetailsController:
    """Loads a forecast for an explicit location and derives the hourly outlook."""

    def __init__(
        self,
        repository: WeatherRepository,
        *,
        clock: Callable[[], datetime] | None = None,
        hours: int = DEFAULT_OUTLOOK_HOURS,
    ) -> None:
        self._repository = repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._hours = hours
        self._state = DetailsUiState()

    @property
    def state(self) -> DetailsUiState:
        return self._state

    @log_service_call
    async def fetch_forecast(self, latitude: float, longitude: float) -> DetailsUiState:
        self._state = self._state.model_copy(update={"is_loading": True, "error_message": None})
        try:
            response = await self._repository.get_weather_forecast(latitude, longitude)
        except Exception as exc:
            message = classify_error(exc)
            get_logger().warning("DETAILS FAIL: %s: %s", type(exc).__name__, exc)
            self._state = self._state.model_copy(
                update={"is_loading": False, "error_message": message}
            )
            return self._state

        hourly: list[HourlyPoint] = []
        if response.hourly is not None:
            hourly = response.hourly.upcoming(self._clock(), self._hours)
        self._state = DetailsUiState(forecast=response, hourly=hourly)
        return self._state
