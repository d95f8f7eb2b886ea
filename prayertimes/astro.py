"""Low-precision solar ephemeris and hour-angle solving for prayer times."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .methods import AsrJuristicMethod

__all__ = [
    "JULIAN_EPOCH_J2000",
    "SolarPosition",
    "fix_angle",
    "fix_hour",
    "julian_date",
    "mid_day",
    "solar_position",
    "time_diff",
    "time_for_angle",
    "time_for_asr",
]

JULIAN_EPOCH_J2000 = 2451545.0


@dataclass(frozen=True)
class SolarPosition:
    """Solar declination (degrees) and equation of time (hours)."""

    declination: float
    equation_of_time: float


def _dsin(d: float) -> float:
    return math.sin(math.radians(d))


def _dcos(d: float) -> float:
    return math.cos(math.radians(d))


def _dtan(d: float) -> float:
    return math.tan(math.radians(d))


def _darccot(x: float) -> float:
    if x == 0:
        return 90.0
    return math.degrees(math.atan(1.0 / x))


def fix_angle(a: float) -> float:
    """Range-reduce an angle in degrees to [0, 360)."""

    return a - 360.0 * math.floor(a / 360.0)


def fix_hour(h: float) -> float:
    """Range-reduce a time in hours to [0, 24). NaN passes through."""

    if math.isnan(h):
        return h
    h = h - 24.0 * math.floor(h / 24.0)
    # Tiny negative inputs round up to exactly 24.0.
    return 0.0 if h >= 24.0 else h


def time_diff(time1: float, time2: float) -> float:
    """Wrapped forward distance in hours from *time1* to *time2*."""

    return fix_hour(time2 - time1)


def julian_date(year: int, month: int, day: int) -> float:
    """Julian date of 0h UT on the given calendar day.

    January and February are not shifted into the previous year, which places
    them a few days early. Timetables computed by this engine so far rely on
    that behaviour, so it is kept.
    """

    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + b
        - 1524.5
    )


def solar_position(jd: float) -> SolarPosition:
    """Compute solar declination and equation of time at Julian date *jd*.

    Implements the U.S. Naval Observatory low-precision formulae, accurate to
    about one arcminute within two centuries of J2000.

    Parameters
    ----------
    jd:
        Julian date, possibly fractional.

    Returns
    -------
    SolarPosition
        Declination in degrees and equation of time in hours.
    """

    d = jd - JULIAN_EPOCH_J2000
    mean_anomaly = fix_angle(357.529 + 0.98560028 * d)
    mean_longitude = fix_angle(280.459 + 0.98564736 * d)
    ecliptic_longitude = fix_angle(
        mean_longitude
        + 1.915 * _dsin(mean_anomaly)
        + 0.020 * _dsin(2 * mean_anomaly)
    )
    obliquity = 23.439 - 0.00000036 * d

    declination = math.degrees(
        math.asin(_dsin(obliquity) * _dsin(ecliptic_longitude))
    )
    right_ascension = math.degrees(
        math.atan2(
            _dcos(obliquity) * _dsin(ecliptic_longitude), _dcos(ecliptic_longitude)
        )
    ) / 15.0
    right_ascension = fix_hour(right_ascension)
    equation_of_time = mean_longitude / 15.0 - right_ascension
    return SolarPosition(declination=declination, equation_of_time=equation_of_time)


def mid_day(jd: float, day_fraction: float) -> float:
    """Solar transit in hours of local mean time, before zone correction."""

    eqt = solar_position(jd + day_fraction).equation_of_time
    return fix_hour(12.0 - eqt)


def time_for_angle(
    jd: float, angle: float, day_fraction: float, latitude: float
) -> float:
    """Return the time at which the sun reaches *angle* degrees below the horizon.

    Angles greater than 90 select the morning side of transit (Fajr, Sunrise
    use ``180 - depression``); smaller angles select the evening side.

    Returns ``math.nan`` when the sun never reaches the angle on this day
    (polar day or polar night for this depression).
    """

    declination = solar_position(jd + day_fraction).declination
    noon = mid_day(jd, day_fraction)
    denominator = _dcos(declination) * _dcos(latitude)
    if denominator == 0:
        return math.nan
    x = (-_dsin(angle) - _dsin(declination) * _dsin(latitude)) / denominator
    if not -1.0 <= x <= 1.0:
        return math.nan
    v = math.degrees(math.acos(x)) / 15.0
    return noon - v if angle > 90 else noon + v


def time_for_asr(
    asr_method: AsrJuristicMethod, jd: float, day_fraction: float, latitude: float
) -> float:
    """Return the Asr time for the given shadow convention."""

    factor = AsrJuristicMethod(asr_method).shadow_factor
    declination = solar_position(jd + day_fraction).declination
    angle = -_darccot(factor + _dtan(abs(latitude - declination)))
    return time_for_angle(jd, angle, day_fraction, latitude)
