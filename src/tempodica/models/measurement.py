"""Persisted measurement model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MeasuredWeather(BaseModel):
    """A stored temperature reading (timestamp in epoch milliseconds)."""

    model_config = ConfigDict(frozen=True)

    id: int
    temperature: float
    description: str
    timestamp: int
