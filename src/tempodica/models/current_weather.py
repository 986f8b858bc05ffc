"""Current weather model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from tempodica.conditions import describe_weather_code


class CurrentWeather(BaseModel):
    """Conditions at the requested location right now."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float
    wind_speed: float = Field(default=0.0, alias="windspeed")
    weather_code: int = Field(alias="weathercode")

    @property
    def description(self) -> str:
        return describe_weather_code(self.weather_code)
