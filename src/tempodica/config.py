"""Runtime settings for the weather pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from tempodica._http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

ENV_PREFIX = "TEMPODICA_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


@dataclass(frozen=True)
class WeatherSettings:
    """Settings shared by the client, the history store and the controllers.

    Usage:
        settings = WeatherSettings(use_fake=True)

        # Read TEMPODICA_* overrides from the environment:
        settings = WeatherSettings.from_env()
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    use_fake: bool = False
    use_fake_fallback: bool = True
    refresh_interval: float = 600.0
    history_keep: int = 5
    history_limit: int = 5
    database_url: str = "sqlite:///tempodica.db"
    log_dir: str = "logs"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be positive, got {self.refresh_interval}")
        if self.history_keep < 0:
            raise ValueError(f"history_keep must be >= 0, got {self.history_keep}")
        if self.history_limit < 0:
            raise ValueError(f"history_limit must be >= 0, got {self.history_limit}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> WeatherSettings:
        """Build settings from ``TEMPODICA_*`` variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        for field in fields(cls):
            raw = environ.get(ENV_PREFIX + field.name.upper())
            if raw is None:
                continue
            default = field.default
            if isinstance(default, bool):
                overrides[field.name] = _parse_bool(raw)
            elif isinstance(default, int):
                overrides[field.name] = int(raw)
            elif isinstance(default, float):
                overrides[field.name] = float(raw)
            else:
                overrides[field.name] = raw
        return replace(cls(), **overrides)
