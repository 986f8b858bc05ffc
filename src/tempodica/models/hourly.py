"""Hourly forecast models."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from tempodica.conditions import describe_weather_code

DEFAULT_OUTLOOK_HOURS = 12


def _parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class HourlyPoint(BaseModel):
    """One displayable hour of the forecast."""

    model_config = ConfigDict(frozen=True)

    time: str
    temperature: int
    weather_code: int
    description: str


class HourlyForecast(BaseModel):
    """Parallel hourly sequences as returned by the provider."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    time: list[str] = Field(default_factory=list)
    temperatures: list[float] = Field(default_factory=list, alias="temperature_2m")
    weather_codes: list[int] = Field(default_factory=list, alias="weathercode")

    def __len__(self) -> int:
        return min(len(self.time), len(self.temperatures), len(self.weather_codes))

    def entries(self) -> Iterator[tuple[str, float, int]]:
        """Yield (time, temperature, code) triples, truncated to the shortest sequence."""
        return zip(self.time, self.temperatures, self.weather_codes)

    def upcoming(
        self,
        now: datetime,
        count: int = DEFAULT_OUTLOOK_HOURS,
    ) -> list[HourlyPoint]:
        """Return up to ``count`` hours starting at the first one not before ``now``.

        When no timestamp is at or after ``now`` (or none can be parsed) the
        outlook starts at the first entry.
        """
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        entries = list(self.entries())
        start = 0
        for index, (stamp, _, _) in enumerate(entries):
            parsed = _parse_timestamp(stamp)
            if parsed is not None and parsed >= now:
                start = index
                break
        return [
            HourlyPoint(
                time=stamp,
                temperature=round(temperature),
                weather_code=code,
                description=describe_weather_code(code),
            )
            for stamp, temperature, code in entries[start:start + count]
        ]
