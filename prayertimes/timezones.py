"""Time-zone providers answering offset and daylight-saving questions.

The calculator never consults the platform directly; it is handed one of
these providers so that tests can pin offsets and DST flags explicitly.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

__all__ = [
    "FixedTimezone",
    "LocalTimezone",
    "NamedTimezone",
    "TimezoneProvider",
    "resolve_timezone_provider",
]


class TimezoneProvider(Protocol):
    """Calendar capability consumed by :func:`prayertimes.get_prayer_times`."""

    def utc_offset_hours(self, moment: datetime) -> float:
        """Offset from UTC, in hours, of the civil time at *moment*."""

    def is_daylight_saving(self, moment: datetime) -> bool:
        """Whether *moment* falls within daylight-saving time."""


@dataclass(frozen=True)
class FixedTimezone:
    """Hand-specified offset and DST flag, independent of *moment*."""

    offset_hours: float
    daylight_saving: bool = False

    def utc_offset_hours(self, moment: datetime) -> float:
        return self.offset_hours

    def is_daylight_saving(self, moment: datetime) -> bool:
        return self.daylight_saving


class NamedTimezone:
    """IANA time zone resolved through :mod:`zoneinfo`.

    Naive moments are read as wall-clock time in the zone; aware moments are
    converted into it first.
    """

    def __init__(self, name: str) -> None:
        try:
            self._zone = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {name}") from exc
        self.name = name

    def __repr__(self) -> str:
        return f"NamedTimezone({self.name!r})"

    def _localize(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self._zone)
        return moment.astimezone(self._zone)

    def utc_offset_hours(self, moment: datetime) -> float:
        offset = self._localize(moment).utcoffset()
        return offset.total_seconds() / 3600.0 if offset else 0.0

    def is_daylight_saving(self, moment: datetime) -> bool:
        return bool(self._localize(moment).dst())


class LocalTimezone:
    """The host's configured local time zone."""

    def __repr__(self) -> str:
        return "LocalTimezone()"

    def utc_offset_hours(self, moment: datetime) -> float:
        offset = moment.astimezone().utcoffset()
        return offset.total_seconds() / 3600.0 if offset else 0.0

    def is_daylight_saving(self, moment: datetime) -> bool:
        return time.localtime(moment.timestamp()).tm_isdst > 0


def resolve_timezone_provider(name: Optional[str] = None) -> TimezoneProvider:
    """Return a :class:`NamedTimezone` for *name*, else the host zone."""

    if name:
        return NamedTimezone(name)
    return LocalTimezone()
