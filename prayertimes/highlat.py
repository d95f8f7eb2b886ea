"""Bounding of Fajr, Maghrib and Isha at high latitudes.

Above roughly 48.6 degrees the sun may not reach the Fajr or Isha depression
for weeks around the summer solstice, leaving those times undefined. The
methods here replace such times, or times that drift too far into the night,
with a fixed share of the night measured from sunrise or sunset. The result
is a conventional approximation, not an astronomical event.
"""

from __future__ import annotations

import math

import numpy as np

from .astro import time_diff
from .events import FAJR, ISHA, MAGHRIB, SUNRISE, SUNSET
from .methods import HighLatitudeAdjustmentMethod, MethodParameters, Selector

__all__ = ["adjust_high_latitude_times", "night_portion"]

DEFAULT_ISHA_ANGLE = 18.0
DEFAULT_MAGHRIB_ANGLE = 4.0


def night_portion(angle: float, method: HighLatitudeAdjustmentMethod) -> float:
    """Fraction of the night allotted to an event with depression *angle*."""

    method = HighLatitudeAdjustmentMethod(method)
    if method is HighLatitudeAdjustmentMethod.angle_based:
        return angle / 60.0
    if method is HighLatitudeAdjustmentMethod.mid_night:
        return 1.0 / 2.0
    if method is HighLatitudeAdjustmentMethod.one_seventh:
        return 1.0 / 7.0
    return 0.0


def adjust_high_latitude_times(
    times: np.ndarray,
    method_params: MethodParameters,
    method: HighLatitudeAdjustmentMethod,
) -> np.ndarray:
    """Clamp Fajr, Isha and Maghrib to a portion of the night.

    Parameters
    ----------
    times:
        Seven zone-corrected event times in hours, ordered as
        :data:`prayertimes.events.EVENT_NAMES`. Undefined times are NaN.
    method_params:
        Parameters of the calculation convention in use.
    method:
        Night-portion heuristic.

    Returns
    -------
    numpy.ndarray
        A copy of *times* with the three night events bounded. Events stay NaN
        when sunrise or sunset is itself undefined.
    """

    adjusted = np.array(times, dtype=float, copy=True)
    sunrise = float(adjusted[SUNRISE])
    sunset = float(adjusted[SUNSET])
    night = time_diff(sunset, sunrise)

    fajr_diff = night_portion(method_params.fajr_angle, method) * night
    fajr = float(adjusted[FAJR])
    if math.isnan(fajr) or time_diff(fajr, sunrise) > fajr_diff:
        adjusted[FAJR] = sunrise - fajr_diff

    if method_params.isha_selector is Selector.angle:
        isha_angle = method_params.isha_value
    else:
        isha_angle = DEFAULT_ISHA_ANGLE
    isha_diff = night_portion(isha_angle, method) * night
    isha = float(adjusted[ISHA])
    if math.isnan(isha) or time_diff(sunset, isha) > isha_diff:
        adjusted[ISHA] = sunset + isha_diff

    if method_params.maghrib_selector is Selector.angle:
        maghrib_angle = method_params.maghrib_value
    else:
        maghrib_angle = DEFAULT_MAGHRIB_ANGLE
    maghrib_diff = night_portion(maghrib_angle, method) * night
    maghrib = float(adjusted[MAGHRIB])
    if math.isnan(maghrib) or time_diff(sunset, maghrib) > maghrib_diff:
        adjusted[MAGHRIB] = sunset + maghrib_diff

    return adjusted
