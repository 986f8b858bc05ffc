"""Query parameter builder for the Open-Meteo forecast endpoint."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_HOURLY_FIELDS: tuple[str, ...] = ("temperature_2m", "weathercode")


@dataclass(frozen=True)
class ForecastQuery:
    """Parameters of a single forecast request.

    Usage:
        ForecastQuery(-23.5505, -46.6333).to_params()
        # latitude=-23.5505&longitude=-46.6333&current_weather=true
        # &hourly=temperature_2m,weathercode

        ForecastQuery(-23.5505, -46.6333, hourly=()).to_params()
        # current weather only, no hourly parameter
    """

    latitude: float
    longitude: float
    current_weather: bool = True
    hourly: tuple[str, ...] = DEFAULT_HOURLY_FIELDS

    def to_params(self) -> list[tuple[str, str]]:
        """Convert this query to a list of (key, value) pairs."""
        params: list[tuple[str, str]] = [
            ("latitude", str(self.latitude)),
            ("longitude", str(self.longitude)),
            ("current_weather", "true" if self.current_weather else "false"),
        ]
        if self.hourly:
            params.append(("hourly", ",".join(self.hourly)))
        return params
