"""Environment-driven configuration for the prayer-times service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .timezones import TimezoneProvider, resolve_timezone_provider

__all__ = ["ConfigurationError", "Settings", "load_settings"]

DEFAULT_RANGE_JOBS = 1
DEFAULT_CORS_ORIGINS: Tuple[str, ...] = ("*",)
DEFAULT_LOG_LEVEL = "INFO"


class ConfigurationError(RuntimeError):
    """Raised when an environment setting cannot be interpreted."""


@dataclass(frozen=True)
class Settings:
    """Service configuration resolved at startup."""

    timezone_name: Optional[str] = None
    range_jobs: int = DEFAULT_RANGE_JOBS
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = DEFAULT_LOG_LEVEL

    def timezone_provider(self) -> TimezoneProvider:
        try:
            return resolve_timezone_provider(self.timezone_name)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc


def _parse_range_jobs(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_RANGE_JOBS
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"PRAYER_TIMES_RANGE_JOBS must be an integer: {raw!r}"
        ) from exc
    if value < 1:
        raise ConfigurationError("PRAYER_TIMES_RANGE_JOBS must be at least 1")
    return value


def _parse_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_CORS_ORIGINS
    origins = tuple(item.strip() for item in raw.split(",") if item.strip())
    return origins or DEFAULT_CORS_ORIGINS


def _parse_log_level(raw: Optional[str]) -> str:
    level = (raw or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log level: {raw!r}")
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from *environ* (defaults to ``os.environ``)."""

    env = os.environ if environ is None else environ
    settings = Settings(
        timezone_name=env.get("PRAYER_TIMES_TZ") or None,
        range_jobs=_parse_range_jobs(env.get("PRAYER_TIMES_RANGE_JOBS")),
        cors_origins=_parse_origins(env.get("PRAYER_TIMES_CORS_ORIGINS")),
        log_level=_parse_log_level(env.get("PRAYER_TIMES_LOG_LEVEL")),
    )
    settings.timezone_provider()
    return settings
