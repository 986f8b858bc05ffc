"""Weather state controller: fetch, classify and publish UI state."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable

from pydantic import BaseModel, ConfigDict

from tempodica._logging import get_logger, log_service_call
from tempodica.conditions import describe_weather_code, suggest
from tempodica.exceptions import NetworkError, ServerError
from tempodica.repository import WeatherRepository

DEFAULT_REFRESH_INTERVAL = 600.0

CONNECTIVITY_MESSAGE = "Connection error. Check your internet connection."
SERVICE_UNAVAILABLE_MESSAGE = "The service is unavailable right now. Try again later."
UNEXPECTED_MESSAGE = "An unexpected error occurred."


def classify_error(exc: BaseException) -> str:
    """Map a fetch failure to the message shown to the user."""
    if isinstance(exc, NetworkError):
        return CONNECTIVITY_MESSAGE
    if isinstance(exc, ServerError):
        return SERVICE_UNAVAILABLE_MESSAGE
    return UNEXPECTED_MESSAGE


def format_temperature(value: float) -> str:
    return f"{value}°C"


class WeatherUiState(BaseModel):
    """Everything the home screen renders."""

    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    temperature: str = ""
    description: str = ""
    suggestion: str = ""
    error_message: str | None = None


@dataclass(frozen=True)
class ShowToast:
    """One-shot notification event."""

    message: str


StateObserver = Callable[[WeatherUiState], None]


class StateSubscription:
    """Handle returned by ``WeatherStateController.subscribe``."""

    def __init__(self, observers: list[StateObserver], observer: StateObserver) -> None:
        self._observers = observers
        self._observer = observer

    def unsubscribe(self) -> None:
        if self._observer in self._observers:
            self._observers.remove(self._observer)


class WeatherStateController:
    """Owns the home screen state for one location.

    State changes are pushed to subscribers; failures additionally put a
    ``ShowToast`` on ``events``, which is consumed at most once.

    A ``fetch_weather()`` issued while another fetch is running joins that
    fetch instead of starting a new request.

    Usage:
        async with WeatherStateController(repository, -23.5505, -46.6333) as controller:
            controller.subscribe(render)
            event = await controller.next_event()
    """

    def __init__(
        self,
        repository: WeatherRepository,
        latitude: float,
        longitude: float,
        *,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        save_history: bool = True,
    ) -> None:
        if refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be positive, got {refresh_interval}")
        self._repository = repository
        self._latitude = latitude
        self._longitude = longitude
        self._refresh_interval = refresh_interval
        self._save_history = save_history
        self._state = WeatherUiState()
        self._observers: list[StateObserver] = []
        self.events: asyncio.Queue[ShowToast] = asyncio.Queue()
        self._inflight: asyncio.Task[WeatherUiState] | None = None
        self._refresh_task: asyncio.Task[None] | None = None

    async def __aenter__(self) -> WeatherStateController:
        self.start()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    @property
    def state(self) -> WeatherUiState:
        return self._state

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    def subscribe(self, observer: StateObserver) -> StateSubscription:
        """Register ``observer``; it receives the current state right away."""
        self._observers.append(observer)
        observer(self._state)
        return StateSubscription(self._observers, observer)

    async def next_event(self) -> ShowToast:
        return await self.events.get()

    def start(self) -> None:
        """Start the periodic refresh: fetch now, then every ``refresh_interval``."""
        if self.is_refreshing:
            return
        self._refresh_task = asyncio.create_task(self._refresh_loop())

    async def close(self) -> None:
        """Cancel the periodic refresh and any fetch still running."""
        tasks = [t for t in (self._refresh_task, self._inflight) if t is not None]
        self._refresh_task = None
        self._inflight = None
        for task in tasks:
            task.cancel()
        # Failures inside these tasks were already logged where they happened.
        await asyncio.gather(*tasks, return_exceptions=True)

    async def fetch_weather(self) -> WeatherUiState:
        """Fetch the forecast and publish the resulting state."""
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.create_task(self._fetch())
        return await asyncio.shield(self._inflight)

    async def retry(self) -> WeatherUiState:
        """User-initiated retry after a failure."""
        return await self.fetch_weather()

    async def _refresh_loop(self) -> None:
        while True:
            try:
                await self.fetch_weather()
            except Exception as exc:
                get_logger().error(
                    "REFRESH FAIL: %s: %s; next tick in %.1fs",
                    type(exc).__name__, exc, self._refresh_interval,
                )
            await asyncio.sleep(self._refresh_interval)

    @log_service_call
    async def _fetch(self) -> WeatherUiState:
        self._publish(self._state.model_copy(update={"is_loading": True, "error_message": None}))
        try:
            response = await self._repository.get_weather_forecast(self._latitude, self._longitude)
        except Exception as exc:
            message = classify_error(exc)
            get_logger().warning(
                "FETCH FAIL: %s: %s -> %r", type(exc).__name__, exc, message,
            )
            self._publish(
                self._state.model_copy(update={"is_loading": False, "error_message": message})
            )
            self.events.put_nowait(ShowToast(message))
            return self._state

        weather = response.current_weather
        description = describe_weather_code(weather.weather_code)
        self._publish(
            WeatherUiState(
                is_loading=False,
                temperature=format_temperature(weather.temperature),
                description=description,
                suggestion=suggest(weather.temperature, weather.weather_code),
                error_message=None,
            )
        )
        if self._save_history:
            try:
                await self._repository.save_measurement(weather.temperature, description)
            except Exception as exc:
                get_logger().error(
                    "HISTORY FAIL: %s: %s", type(exc).__name__, exc,
                )
        return self._state

    def _publish(self, state: WeatherUiState) -> None:
        self._state = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception as exc:
                get_logger().error(
                    "OBSERVER FAIL: %r -> %s: %s", observer, type(exc).__name__, exc,
                )
