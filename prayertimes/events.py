"""Ordering of the seven daily events inside time vectors."""

from typing import Tuple

__all__ = [
    "ASR",
    "DHUHR",
    "EVENT_NAMES",
    "FAJR",
    "ISHA",
    "MAGHRIB",
    "NOMINAL_HOURS",
    "SUNRISE",
    "SUNSET",
]

EVENT_NAMES: Tuple[str, ...] = (
    "fajr",
    "sunrise",
    "dhuhr",
    "asr",
    "sunset",
    "maghrib",
    "isha",
)

FAJR, SUNRISE, DHUHR, ASR, SUNSET, MAGHRIB, ISHA = range(len(EVENT_NAMES))

# Initial guesses, in hours, refined by the engine.
NOMINAL_HOURS: Tuple[float, ...] = (5.0, 6.0, 12.0, 13.0, 18.0, 18.0, 18.0)
