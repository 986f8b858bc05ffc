"""Forecast response envelope."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from tempodica.models.current_weather import CurrentWeather
from tempodica.models.hourly import HourlyForecast


class WeatherResponse(BaseModel):
    """Current conditions plus the optional hourly forecast."""

    model_config = ConfigDict(frozen=True)

    current_weather: CurrentWeather
    hourly: HourlyForecast | None = None
