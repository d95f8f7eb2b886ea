from __future__ import annotations

import math

import erfa
import numpy as np
import pytest

from prayertimes.astro import (
    fix_angle,
    fix_hour,
    julian_date,
    mid_day,
    solar_position,
    time_diff,
    time_for_angle,
    time_for_asr,
)
from prayertimes.methods import AsrJuristicMethod


def _erfa_sun(jd: float) -> tuple[float, float]:
    """Apparent declination (degrees) and equation of time (hours) from ERFA.

    *jd* is read as UTC with UT1 = UTC.
    """

    tai1, tai2 = erfa.utctai(jd, 0.0)
    tt1, tt2 = erfa.taitt(tai1, tai2)
    pvh, _ = erfa.epv00(tt1, tt2)
    sun_gcrs = -np.asarray(pvh["p"], dtype=float)
    sun = np.asarray(erfa.pnm06a(tt1, tt2), dtype=float) @ sun_gcrs
    norm = np.linalg.norm(sun)
    declination = math.degrees(math.asin(sun[2] / norm))
    right_ascension = math.atan2(sun[1], sun[0])
    gast = erfa.gst06a(jd, 0.0, tt1, tt2)
    greenwich_hour_angle = math.degrees(gast - right_ascension) / 15.0
    ut_hours = ((jd + 0.5) % 1.0) * 24.0
    equation_of_time = (greenwich_hour_angle - ut_hours + 12.0 + 12.0) % 24.0 - 12.0
    return declination, equation_of_time


@pytest.mark.parametrize(
    "jd",
    [
        2451545.0,  # 2000-01-01 12:00
        2457053.75,
        2457237.5,
        2458290.25,  # near the June solstice of 2018
        2460389.6,  # March equinox of 2024, mean longitude wraps through 0
        2460310.5,
        2460483.6,
    ],
)
def test_solar_position_matches_erfa(jd: float) -> None:
    position = solar_position(jd)
    declination, equation_of_time = _erfa_sun(jd)
    assert position.declination == pytest.approx(declination, abs=0.05)
    difference = (position.equation_of_time - equation_of_time + 12.0) % 24.0 - 12.0
    assert difference == pytest.approx(0.0, abs=1.0 / 60.0)


def test_solar_declination_stays_within_obliquity() -> None:
    for offset in range(0, 366, 5):
        declination = solar_position(2460310.5 + offset).declination
        assert -23.5 < declination < 23.5


def test_julian_date_march_onwards_is_exact() -> None:
    assert julian_date(2015, 8, 3) == 2457237.5
    assert julian_date(2000, 3, 1) == 2451604.5


def test_julian_date_keeps_january_february_unshifted() -> None:
    # The true Julian date of 2015-02-03 is 2457056.5.
    assert julian_date(2015, 2, 3) == 2457053.5


@pytest.mark.parametrize(
    "value, expected",
    [(0.0, 0.0), (24.0, 0.0), (25.5, 1.5), (-1.0, 23.0), (-24.0, 0.0), (-1e-17, 0.0)],
)
def test_fix_hour(value: float, expected: float) -> None:
    result = fix_hour(value)
    assert 0.0 <= result < 24.0
    assert result == pytest.approx(expected)


def test_fix_hour_passes_nan_through() -> None:
    assert math.isnan(fix_hour(math.nan))


def test_fix_angle() -> None:
    assert fix_angle(370.0) == pytest.approx(10.0)
    assert fix_angle(-10.0) == pytest.approx(350.0)


def test_time_diff_wraps_forward() -> None:
    assert time_diff(22.0, 2.0) == pytest.approx(4.0)
    assert time_diff(2.0, 22.0) == pytest.approx(20.0)


def test_sunrise_before_and_sunset_after_transit() -> None:
    jd = julian_date(2015, 8, 3)
    noon = mid_day(jd, 0.5)
    sunrise = time_for_angle(jd, 180.0 - 0.833, 0.25, 47.66)
    sunset = time_for_angle(jd, 0.833, 0.75, 47.66)
    assert sunrise < noon < sunset
    assert noon - sunrise == pytest.approx(sunset - noon, abs=0.05)


def test_time_for_angle_is_nan_without_solution() -> None:
    jd = julian_date(2024, 6, 21)
    assert math.isnan(time_for_angle(jd, 0.833, 0.75, 80.0))
    assert math.isnan(time_for_angle(jd, 18.0, 0.75, 60.0))
    assert math.isnan(time_for_angle(jd, 0.833, 0.75, 90.0))


def test_hanafi_asr_is_later_than_shafii() -> None:
    jd = julian_date(2015, 8, 3)
    shafii = time_for_asr(AsrJuristicMethod.shafii, jd, 13 / 24, 47.66)
    hanafi = time_for_asr(AsrJuristicMethod.hanafi, jd, 13 / 24, 47.66)
    assert mid_day(jd, 0.5) < shafii < hanafi
