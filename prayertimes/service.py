"""Single-day and date-range prayer-time requests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from joblib import Parallel, delayed

from .calculator import CalculatorParams, Times, get_prayer_times
from .timezones import TimezoneProvider

__all__ = [
    "DateRangeError",
    "MAX_RANGE_DAYS",
    "prayer_times_for_day",
    "prayer_times_for_range",
]

MAX_RANGE_DAYS = 365


class DateRangeError(ValueError):
    """Raised when a requested date range is reversed or too long."""


def prayer_times_for_day(
    day: date,
    params: CalculatorParams,
    timezone: Optional[float] = None,
    tz_provider: Optional[TimezoneProvider] = None,
) -> Times:
    return get_prayer_times(day, params, timezone=timezone, tz_provider=tz_provider)


def _validate_range(from_date: date, to_date: date) -> None:
    if from_date > to_date:
        raise DateRangeError("The 'from' date must be before the 'to' date.")
    if (to_date - from_date).days > MAX_RANGE_DAYS:
        raise DateRangeError(
            f"The date range must not exceed {MAX_RANGE_DAYS} days."
        )


def prayer_times_for_range(
    from_date: date,
    to_date: date,
    params: CalculatorParams,
    timezone: Optional[float] = None,
    tz_provider: Optional[TimezoneProvider] = None,
    n_jobs: int = 1,
) -> List[Times]:
    """Compute prayer times for every day in ``[from_date, to_date]``.

    Parameters
    ----------
    from_date, to_date:
        Inclusive bounds; at most :data:`MAX_RANGE_DAYS` apart.
    params, timezone, tz_provider:
        Forwarded to :func:`prayertimes.get_prayer_times` for each day.
    n_jobs:
        Worker threads used to evaluate the days. Results keep date order.

    Raises
    ------
    DateRangeError
        If the bounds are reversed or span more than a year.
    """

    _validate_range(from_date, to_date)
    days = [
        from_date + timedelta(days=offset)
        for offset in range((to_date - from_date).days + 1)
    ]

    n_jobs = max(1, min(n_jobs, len(days)))
    if n_jobs == 1:
        return [
            get_prayer_times(day, params, timezone=timezone, tz_provider=tz_provider)
            for day in days
        ]

    return Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(get_prayer_times)(
            day, params, timezone=timezone, tz_provider=tz_provider
        )
        for day in days
    )
