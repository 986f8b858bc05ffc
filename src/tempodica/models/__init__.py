"""Tempodica data models."""

from tempodica.models.current_weather import CurrentWeather
from tempodica.models.hourly import HourlyForecast, HourlyPoint
from tempodica.models.measurement import MeasuredWeather
from tempodica.models.response import WeatherResponse

__all__ = [
    "CurrentWeather",
    "HourlyForecast",
    "HourlyPoint",
    "MeasuredWeather",
    "WeatherResponse",
]
