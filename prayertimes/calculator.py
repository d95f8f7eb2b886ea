"""Public entry point computing :class:`Times` for a date and location."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_type
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple, Union

from .astro import julian_date
from .engine import compute_day_times
from .events import EVENT_NAMES
from .methods import (
    AsrJuristicMethod,
    CalculationMethod,
    HighLatitudeAdjustmentMethod,
    lookup,
)
from .timezones import LocalTimezone, TimezoneProvider

__all__ = [
    "CalculatorParams",
    "Times",
    "effective_timezone",
    "get_prayer_times",
]

DateLike = Union[date_type, datetime]


@dataclass(frozen=True)
class CalculatorParams:
    """Location and conventions for a prayer-time computation."""

    latitude: float
    longitude: float
    calculation_method: CalculationMethod
    asr_juristic_method: AsrJuristicMethod
    high_latitude_adjustment_method: HighLatitudeAdjustmentMethod = (
        HighLatitudeAdjustmentMethod.none
    )
    dhuhr_minutes: float = 0.0


@dataclass(frozen=True)
class Times:
    """Prayer times of one day.

    ``date`` is the caller's input, unchanged. Each event is a time of day in
    ``[0h, 24h)`` or ``None`` when it does not occur at this location and
    date.
    """

    date: DateLike
    fajr: Optional[timedelta]
    sunrise: Optional[timedelta]
    dhuhr: Optional[timedelta]
    asr: Optional[timedelta]
    sunset: Optional[timedelta]
    maghrib: Optional[timedelta]
    isha: Optional[timedelta]

    @property
    def unavailable(self) -> Tuple[str, ...]:
        """Names of the events that have no time."""

        return tuple(name for name in EVENT_NAMES if getattr(self, name) is None)

    def as_dict(self) -> Dict[str, Optional[timedelta]]:
        return {name: getattr(self, name) for name in EVENT_NAMES}


def _as_moment(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def effective_timezone(
    moment: datetime,
    timezone: Optional[float],
    tz_provider: TimezoneProvider,
) -> float:
    """Return the zone offset, in hours, used for the solar calculation.

    An explicit *timezone* is read as the daylight-saving offset: outside
    daylight-saving time one hour is removed from it. Otherwise the offset
    comes from the moment itself, or from the provider, and already reflects
    DST, so it is used as is.
    """

    if timezone is not None:
        dst_offset = 0.0 if tz_provider.is_daylight_saving(moment) else 1.0
        return timezone - dst_offset
    offset = moment.utcoffset()
    if offset is not None:
        return offset.total_seconds() / 3600.0
    return tz_provider.utc_offset_hours(moment)


def get_prayer_times(
    date: DateLike,
    params: CalculatorParams,
    timezone: Optional[float] = None,
    tz_provider: Optional[TimezoneProvider] = None,
) -> Times:
    """Compute the prayer times for *date* at the location in *params*.

    Parameters
    ----------
    date:
        Calendar day, as a :class:`datetime.date` or a naive or aware
        :class:`datetime.datetime`. It is echoed unchanged in the result.
    params:
        Location, calculation convention, Asr rule and high-latitude method.
    timezone:
        Offset from UTC in hours. Defaults to the date's own offset, or the
        provider's for naive values.
    tz_provider:
        Source of offsets and daylight-saving flags. Defaults to the host's
        local zone.

    Returns
    -------
    Times
        The seven event times; events that do not occur are ``None``.
    """

    if tz_provider is None:
        tz_provider = LocalTimezone()
    moment = _as_moment(date)
    zone = effective_timezone(moment, timezone, tz_provider)
    jd = julian_date(moment.year, moment.month, moment.day) - params.longitude / (15 * 24)
    day_times = compute_day_times(
        jd,
        zone,
        params.latitude,
        params.longitude,
        lookup(params.calculation_method),
        AsrJuristicMethod(params.asr_juristic_method),
        high_latitude_method=HighLatitudeAdjustmentMethod(
            params.high_latitude_adjustment_method
        ),
        dhuhr_minutes=params.dhuhr_minutes,
    )
    return Times(date=date, **day_times)
