"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date as date_type
from datetime import timedelta
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prayertimes import (
    AsrJuristicMethod,
    CalculationMethod,
    CalculatorParams,
    HighLatitudeAdjustmentMethod,
    Times,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PrayerTimesRequest(_CamelModel):
    """Body of the single-day ``/api/prayer-times/{date}`` endpoint."""

    time_zone: float = Field(
        ..., ge=-14.0, le=14.0, description="Offset from UTC in hours"
    )
    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(
        ..., ge=-180.0, le=180.0, description="Longitude in degrees (east-positive)"
    )
    calculation_method: CalculationMethod = Field(
        ..., description="Calculation convention"
    )
    asr_juristic_method: AsrJuristicMethod = Field(
        ..., description="Asr shadow convention"
    )
    high_latitude_adjustment_method: HighLatitudeAdjustmentMethod = Field(
        HighLatitudeAdjustmentMethod.none,
        description="Night-portion heuristic for high latitudes",
    )
    daylight_saving: Optional[bool] = Field(
        None,
        description="Whether the date is under daylight-saving time; "
        "decided by the server's zone when omitted",
    )

    def calculator_params(self) -> CalculatorParams:
        return CalculatorParams(
            latitude=self.latitude,
            longitude=self.longitude,
            calculation_method=self.calculation_method,
            asr_juristic_method=self.asr_juristic_method,
            high_latitude_adjustment_method=self.high_latitude_adjustment_method,
        )


class PrayerTimesRangeRequest(PrayerTimesRequest):
    """Body of the ``/api/prayer-times/range`` endpoint."""

    from_date: date_type = Field(..., description="First day, inclusive")
    to_date: date_type = Field(..., description="Last day, inclusive")


def _format_time_of_day(value: Optional[timedelta]) -> Optional[str]:
    if value is None:
        return None
    total_minutes = int(value.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


class PrayerTimesResponse(_CamelModel):
    """Prayer times of one day; ``null`` marks an event that does not occur."""

    date: date_type
    fajr: Optional[str] = Field(None, description="Fajr (HH:MM)")
    sunrise: Optional[str] = Field(None, description="Sunrise (HH:MM)")
    dhuhr: Optional[str] = Field(None, description="Dhuhr (HH:MM)")
    asr: Optional[str] = Field(None, description="Asr (HH:MM)")
    sunset: Optional[str] = Field(None, description="Sunset (HH:MM)")
    maghrib: Optional[str] = Field(None, description="Maghrib (HH:MM)")
    isha: Optional[str] = Field(None, description="Isha (HH:MM)")
    status: Literal["ok", "degenerate"] = Field(
        "ok", description="'degenerate' when at least one event is unavailable"
    )
    unavailable: List[str] = Field(
        default_factory=list, description="Events without a time on this day"
    )

    @classmethod
    def from_times(cls, times: Times) -> "PrayerTimesResponse":
        fields = {
            name: _format_time_of_day(value) for name, value in times.as_dict().items()
        }
        unavailable = list(times.unavailable)
        return cls(
            date=times.date,
            status="degenerate" if unavailable else "ok",
            unavailable=unavailable,
            **fields,
        )


class PrayerTimesRangeResponse(_CamelModel):
    """Prayer times for each day of a range, in ascending date order."""

    prayer_times: List[PrayerTimesResponse]


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    methods: List[str]


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
