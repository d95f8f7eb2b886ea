"""Computation of the seven daily prayer events for one Julian date."""

from __future__ import annotations

import json
import logging
import math
from datetime import timedelta
from typing import Dict, Optional, Sequence

import numpy as np

from .astro import fix_hour, mid_day, time_for_angle, time_for_asr
from .events import (
    ASR,
    DHUHR,
    EVENT_NAMES,
    FAJR,
    ISHA,
    MAGHRIB,
    NOMINAL_HOURS,
    SUNRISE,
    SUNSET,
)
from .highlat import adjust_high_latitude_times
from .methods import (
    AsrJuristicMethod,
    HighLatitudeAdjustmentMethod,
    MethodParameters,
    Selector,
)

__all__ = [
    "NUM_ITERATIONS",
    "RISE_SET_ANGLE",
    "adjust_times",
    "compute_day_hours",
    "compute_day_times",
    "compute_times",
    "hours_to_time_of_day",
]

LOGGER = logging.getLogger(__name__)

# Declination and equation of time barely move within a day; one pass suffices.
NUM_ITERATIONS = 1

# Refraction plus solar semi-diameter, in degrees.
RISE_SET_ANGLE = 0.833


def compute_times(
    jd: float,
    latitude: float,
    method_params: MethodParameters,
    asr_method: AsrJuristicMethod,
    estimates: Sequence[float],
) -> np.ndarray:
    """Refine *estimates* (hours) into local mean solar times for each event.

    Maghrib and Isha are only solved here when their selector is angle based;
    interval-based values are left NaN for :func:`adjust_times` to fill in.
    """

    t = np.asarray(estimates, dtype=float) / 24.0
    times = np.full(len(EVENT_NAMES), np.nan)

    times[FAJR] = time_for_angle(jd, 180.0 - method_params.fajr_angle, t[FAJR], latitude)
    times[SUNRISE] = time_for_angle(jd, 180.0 - RISE_SET_ANGLE, t[SUNRISE], latitude)
    times[DHUHR] = mid_day(jd, t[DHUHR])
    times[ASR] = time_for_asr(asr_method, jd, t[ASR], latitude)
    times[SUNSET] = time_for_angle(jd, RISE_SET_ANGLE, t[SUNSET], latitude)
    if method_params.maghrib_selector is Selector.angle:
        times[MAGHRIB] = time_for_angle(
            jd, method_params.maghrib_value, t[MAGHRIB], latitude
        )
    if method_params.isha_selector is Selector.angle:
        times[ISHA] = time_for_angle(jd, method_params.isha_value, t[ISHA], latitude)
    return times


def adjust_times(
    times: np.ndarray,
    timezone: float,
    longitude: float,
    method_params: MethodParameters,
    high_latitude_method: HighLatitudeAdjustmentMethod = HighLatitudeAdjustmentMethod.none,
    dhuhr_minutes: float = 0.0,
) -> np.ndarray:
    """Shift solar times into the civil zone and apply interval rules."""

    adjusted = times + (timezone - longitude / 15.0)
    adjusted[DHUHR] += dhuhr_minutes / 60.0

    if method_params.maghrib_selector is Selector.minutes:
        adjusted[MAGHRIB] = adjusted[SUNSET] + method_params.maghrib_value / 60.0
    if method_params.isha_selector is Selector.minutes:
        adjusted[ISHA] = adjusted[MAGHRIB] + method_params.isha_value / 60.0

    high_latitude_method = HighLatitudeAdjustmentMethod(high_latitude_method)
    if high_latitude_method is not HighLatitudeAdjustmentMethod.none:
        adjusted = adjust_high_latitude_times(
            adjusted, method_params, high_latitude_method
        )
    return adjusted


def compute_day_hours(
    jd: float,
    timezone: float,
    latitude: float,
    longitude: float,
    method_params: MethodParameters,
    asr_method: AsrJuristicMethod,
    high_latitude_method: HighLatitudeAdjustmentMethod = HighLatitudeAdjustmentMethod.none,
    dhuhr_minutes: float = 0.0,
) -> np.ndarray:
    """Return the unrounded civil times, in hours, of all seven events.

    Undefined events are NaN. See :func:`compute_day_times` for the
    formatted variant.
    """

    times = np.array(NOMINAL_HOURS, dtype=float)
    for _ in range(NUM_ITERATIONS):
        times = compute_times(jd, latitude, method_params, asr_method, times)
    return adjust_times(
        times,
        timezone,
        longitude,
        method_params,
        high_latitude_method=high_latitude_method,
        dhuhr_minutes=dhuhr_minutes,
    )


def hours_to_time_of_day(value: float) -> Optional[timedelta]:
    """Round fractional hours to the nearest minute within [0h, 24h).

    Returns ``None`` for NaN, i.e. an event that does not occur.
    """

    if math.isnan(value):
        return None
    value = fix_hour(value + 0.5 / 60.0)
    hours = math.floor(value)
    minutes = math.floor((value - hours) * 60.0)
    return timedelta(hours=hours, minutes=minutes)


def compute_day_times(
    jd: float,
    timezone: float,
    latitude: float,
    longitude: float,
    method_params: MethodParameters,
    asr_method: AsrJuristicMethod,
    high_latitude_method: HighLatitudeAdjustmentMethod = HighLatitudeAdjustmentMethod.none,
    dhuhr_minutes: float = 0.0,
) -> Dict[str, Optional[timedelta]]:
    """Compute the prayer times of one day.

    Parameters
    ----------
    jd:
        Julian date of the day, already shifted to local mean solar time.
    timezone:
        Effective (standard) offset from UTC in hours.
    latitude, longitude:
        Geographic coordinates in degrees (east-positive longitude).
    method_params:
        Angles and intervals of the calculation convention.
    asr_method:
        Asr shadow convention.
    high_latitude_method:
        Optional night-portion heuristic.
    dhuhr_minutes:
        Minutes added to solar transit for Dhuhr.

    Returns
    -------
    dict
        Mapping from event name to a time of day, or ``None`` when the event
        does not occur.
    """

    hours = compute_day_hours(
        jd,
        timezone,
        latitude,
        longitude,
        method_params,
        asr_method,
        high_latitude_method=high_latitude_method,
        dhuhr_minutes=dhuhr_minutes,
    )
    result: Dict[str, Optional[timedelta]] = {}
    for name, value in zip(EVENT_NAMES, hours):
        result[name] = hours_to_time_of_day(float(value))
        if result[name] is None:
            LOGGER.debug(
                json.dumps(
                    {
                        "event": "degenerate_time",
                        "time": name,
                        "latitude": latitude,
                        "jd": jd,
                    }
                )
            )
    return result
