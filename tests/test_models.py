"""Tests for Pydantic model deserialization."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from tempodica.models import CurrentWeather, HourlyForecast, HourlyPoint, MeasuredWeather, WeatherResponse
from tests.conftest import SAMPLE_CURRENT_WEATHER, SAMPLE_FORECAST, SAMPLE_HOURLY


class TestCurrentWeatherModel:
    def test_parse(self) -> None:
        current = CurrentWeather.model_validate(SAMPLE_CURRENT_WEATHER)
        assert current.temperature == 22.4
        assert current.wind_speed == 11.2
        assert current.weather_code == 2

    def test_description(self) -> None:
        current = CurrentWeather.model_validate(SAMPLE_CURRENT_WEATHER)
        assert current.description == "Partly cloudy"

    def test_required_fields(self) -> None:
        with pytest.raises(Exception):
            CurrentWeather.model_validate({})
        with pytest.raises(Exception):
            CurrentWeather.model_validate({"temperature": 20.0})
        with pytest.raises(Exception):
            CurrentWeather.model_validate({"weathercode": 0})

    def test_wind_speed_optional(self) -> None:
        current = CurrentWeather.model_validate({"temperature": 20.0, "weathercode": 4})
        assert current.wind_speed == 0.0
        assert current.description == "Unknown condition"

    def test_construct_by_name(self) -> None:
        current = CurrentWeather(temperature=10.0, wind_speed=3.0, weather_code=45)
        assert current.description == "Fog"

    def test_frozen(self) -> None:
        current = CurrentWeather.model_validate(SAMPLE_CURRENT_WEATHER)
        with pytest.raises(Exception):
            current.temperature = 30.0  # type: ignore[misc]


class TestHourlyForecastModel:
    def test_parse(self) -> None:
        hourly = HourlyForecast.model_validate(SAMPLE_HOURLY)
        assert hourly.time[0] == "2024-03-05T14:00"
        assert hourly.temperatures == [21.6, 22.4, 23.1, 22.0]
        assert hourly.weather_codes == [1, 2, 61, 95]

    def test_entries_truncate_to_shortest(self) -> None:
        hourly = HourlyForecast(
            time=["2024-03-05T14:00", "2024-03-05T15:00", "2024-03-05T16:00"],
            temperatures=[20.0, 21.0],
            weather_codes=[0, 1, 2, 3],
        )
        assert len(hourly) == 2
        assert list(hourly.entries()) == [
            ("2024-03-05T14:00", 20.0, 0),
            ("2024-03-05T15:00", 21.0, 1),
        ]

    def test_empty(self) -> None:
        hourly = HourlyForecast()
        assert len(hourly) == 0
        assert hourly.upcoming(datetime(2024, 3, 5, tzinfo=timezone.utc)) == []


class TestHourlyOutlook:
    def test_starts_at_first_hour_not_before_now(self) -> None:
        hourly = HourlyForecast.model_validate(SAMPLE_HOURLY)
        now = datetime(2024, 3, 5, 15, 0, tzinfo=timezone.utc)
        points = hourly.upcoming(now)
        assert [p.time for p in points] == ["2024-03-05T15:00", "2024-03-05T16:00", "2024-03-05T17:00"]

    def test_point_fields(self) -> None:
        hourly = HourlyForecast.model_validate(SAMPLE_HOURLY)
        now = datetime(2024, 3, 5, 15, 30, tzinfo=timezone.utc)
        point = hourly.upcoming(now)[0]
        assert point == HourlyPoint(
            time="2024-03-05T16:00", temperature=23, weather_code=61, description="Rain",
        )

    def test_all_in_past_starts_at_beginning(self) -> None:
        hourly = HourlyForecast.model_validate(SAMPLE_HOURLY)
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        assert hourly.upcoming(now)[0].time == "2024-03-05T14:00"

    def test_unparseable_times_start_at_beginning(self) -> None:
        hourly = HourlyForecast(
            time=["yesterday", "today", "tomorrow"],
            temperatures=[10.0, 11.0, 12.0],
            weather_codes=[0, 0, 0],
        )
        points = hourly.upcoming(datetime(2024, 3, 5, tzinfo=timezone.utc))
        assert [p.time for p in points] == ["yesterday", "today", "tomorrow"]

    def test_offset_timestamps(self) -> None:
        hourly = HourlyForecast(
            time=["2024-03-05T12:00-03:00", "2024-03-05T13:00-03:00"],
            temperatures=[25.0, 26.0],
            weather_codes=[0, 0],
        )
        now = datetime(2024, 3, 5, 15, 30, tzinfo=timezone.utc)
        assert hourly.upcoming(now)[0].time == "2024-03-05T13:00-03:00"

    def test_naive_now_is_utc(self) -> None:
        hourly = HourlyForecast.model_validate(SAMPLE_HOURLY)
        points = hourly.upcoming(datetime(2024, 3, 5, 16, 0))
        assert points[0].time == "2024-03-05T16:00"

    def test_limited_to_count(self) -> None:
        hourly = HourlyForecast(
            time=[f"2024-03-05T{h:02d}:00" for h in range(24)],
            temperatures=[float(h) for h in range(24)],
            weather_codes=[0] * 24,
        )
        now = datetime(2024, 3, 5, 3, 0, tzinfo=timezone.utc)
        points = hourly.upcoming(now)
        assert len(points) == 12
        assert points[0].temperature == 3
        assert points[-1].temperature == 14
        assert len(hourly.upcoming(now, count=5)) == 5

    def test_rounds_temperature(self) -> None:
        hourly = HourlyForecast(time=["2024-03-05T00:00"], temperatures=[21.6], weather_codes=[3])
        assert hourly.upcoming(datetime(2024, 3, 5, tzinfo=timezone.utc))[0].temperature == 22


class TestWeatherResponseModel:
    def test_parse_full(self) -> None:
        response = WeatherResponse.model_validate(SAMPLE_FORECAST)
        assert response.current_weather.weather_code == 2
        assert response.hourly is not None
        assert response.hourly.temperatures[2] == 23.1

    def test_hourly_optional(self) -> None:
        response = WeatherResponse.model_validate({"current_weather": SAMPLE_CURRENT_WEATHER})
        assert response.hourly is None

    def test_current_weather_required(self) -> None:
        with pytest.raises(Exception):
            WeatherResponse.model_validate({"hourly": SAMPLE_HOURLY})


class TestMeasuredWeatherModel:
    def test_parse(self) -> None:
        m = MeasuredWeather.model_validate(
            {"id": 3, "temperature": 18.5, "description": "Fog", "timestamp": 1_700_000_000_000}
        )
        assert m.id == 3
        assert m.timestamp == 1_700_000_000_000

    def test_frozen(self) -> None:
        m = MeasuredWeather(id=1, temperature=18.5, description="Fog", timestamp=1)
        with pytest.raises(Exception):
            m.description = "Rain"  # type: ignore[misc]
