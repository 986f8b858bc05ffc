"""Weather code classification and activity suggestions.

Codes follow the WMO interpretation used by Open-Meteo. Only the subset below
is recognised; every other code maps to ``UNKNOWN_CONDITION``.
"""

from __future__ import annotations

UNKNOWN_CONDITION = "Unknown condition"

WEATHER_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Partly cloudy",
    2: "Partly cloudy",
    3: "Partly cloudy",
    45: "Fog",
    48: "Fog",
    51: "Light/moderate rain (drizzle)",
    53: "Light/moderate rain (drizzle)",
    55: "Light/moderate rain (drizzle)",
    61: "Rain",
    63: "Rain",
    65: "Rain",
    80: "Rain showers",
    81: "Rain showers",
    82: "Rain showers",
    95: "Thunderstorm",
}

RAIN_CODES = frozenset({61, 63, 65, 80, 81, 82, 95})

HEAT_WARNING = "Very hot! Drink plenty of water and look for some shade."
RAIN_SUGGESTION = "It's raining. How about a movie at home?"
PLEASANT_SUGGESTION = "Sunny day! Great for a walk in the park."
COLD_SUGGESTION = "It's cold! Perfect for a hot chocolate."
DEFAULT_SUGGESTION = "Enjoy the day!"


def describe_weather_code(code: int) -> str:
    """Return the human-readable description of a weather code."""
    return WEATHER_DESCRIPTIONS.get(code, UNKNOWN_CONDITION)


def suggest(temperature: float, code: int) -> str:
    """Pick a suggestion for the given conditions.

    Rules are evaluated in order and the first match wins:
    heat, rain, clear and mild, cold, then the default.
    """
    if temperature > 28:
        return HEAT_WARNING
    if code in RAIN_CODES:
        return RAIN_SUGGESTION
    if code == 0 and temperature > 18:
        return PLEASANT_SUGGESTION
    if temperature < 12:
        return COLD_SUGGESTION
    return DEFAULT_SUGGESTION
