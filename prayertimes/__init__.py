"""Prayer-time calculation engine."""

from .calculator import CalculatorParams, Times, get_prayer_times
from .methods import (
    AsrJuristicMethod,
    CalculationMethod,
    HighLatitudeAdjustmentMethod,
    MethodParameters,
    lookup,
)
from .service import DateRangeError, prayer_times_for_day, prayer_times_for_range
from .timezones import FixedTimezone, LocalTimezone, NamedTimezone

__all__ = [
    "AsrJuristicMethod",
    "CalculationMethod",
    "CalculatorParams",
    "DateRangeError",
    "FixedTimezone",
    "HighLatitudeAdjustmentMethod",
    "LocalTimezone",
    "MethodParameters",
    "NamedTimezone",
    "Times",
    "get_prayer_times",
    "lookup",
    "prayer_times_for_day",
    "prayer_times_for_range",
]
