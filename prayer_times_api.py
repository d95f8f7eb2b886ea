"""FastAPI application exposing prayer-time computations."""

from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import date
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from models import (
    ErrorResponse,
    HealthResponse,
    PrayerTimesRangeRequest,
    PrayerTimesRangeResponse,
    PrayerTimesRequest,
    PrayerTimesResponse,
)
from prayertimes import (
    CalculationMethod,
    FixedTimezone,
    prayer_times_for_day,
    prayer_times_for_range,
)
from prayertimes.settings import load_settings
from prayertimes.timezones import TimezoneProvider

SETTINGS = load_settings()

logging.basicConfig(level=SETTINGS.log_level, format="%(message)s")
LOGGER = logging.getLogger("prayer-times-api")

APP_DESCRIPTION = (
    "Islamic prayer times (Fajr, Sunrise, Dhuhr, Asr, Sunset, Maghrib, Isha) "
    "from a low-precision solar ephemeris"
)

TIMEZONE_PROVIDER: TimezoneProvider = SETTINGS.timezone_provider()


@asynccontextmanager
async def lifespan(app: FastAPI):
    LOGGER.info(
        json.dumps(
            {
                "event": "startup",
                "timezone_provider": repr(TIMEZONE_PROVIDER),
                "range_jobs": SETTINGS.range_jobs,
            }
        )
    )
    yield


app = FastAPI(
    title="Prayer Times API",
    description=APP_DESCRIPTION,
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(SETTINGS.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_timezone_provider() -> TimezoneProvider:
    return TIMEZONE_PROVIDER


def require_token(authorization: Optional[str] = Header(None)) -> str:
    """Reject requests whose ``Authorization`` header is not a token."""

    if not authorization or not authorization.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    if not authorization.startswith("token"):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return authorization


def _request_provider(
    request: PrayerTimesRequest, default: TimezoneProvider
) -> TimezoneProvider:
    if request.daylight_saving is None:
        return default
    return FixedTimezone(request.time_zone, request.daylight_saving)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, methods=[method.value for method in CalculationMethod])


_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@app.post(
    "/api/prayer-times/range",
    response_model=PrayerTimesRangeResponse,
    responses=_ERROR_RESPONSES,
    dependencies=[Depends(require_token)],
)
def prayer_times_range_endpoint(
    request: PrayerTimesRangeRequest,
    api_version: str = Query(..., alias="apiVersion"),
    tz_provider: TimezoneProvider = Depends(get_timezone_provider),
) -> PrayerTimesRangeResponse:
    start_time = time.perf_counter()
    try:
        results = prayer_times_for_range(
            request.from_date,
            request.to_date,
            request.calculator_params(),
            timezone=request.time_zone,
            tz_provider=_request_provider(request, tz_provider),
            n_jobs=SETTINGS.range_jobs,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    response = PrayerTimesRangeResponse(
        prayer_times=[PrayerTimesResponse.from_times(times) for times in results]
    )
    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(
        json.dumps(
            {
                "event": "prayer_times_range",
                "api_version": api_version,
                "lat": request.latitude,
                "lon": request.longitude,
                "from": request.from_date.isoformat(),
                "to": request.to_date.isoformat(),
                "method": request.calculation_method.value,
                "days": len(results),
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response


@app.post(
    "/api/prayer-times/{date}",
    response_model=PrayerTimesResponse,
    responses=_ERROR_RESPONSES,
    dependencies=[Depends(require_token)],
)
def prayer_times_endpoint(
    date: date,
    request: PrayerTimesRequest,
    api_version: str = Query(..., alias="apiVersion"),
    tz_provider: TimezoneProvider = Depends(get_timezone_provider),
) -> PrayerTimesResponse:
    start_time = time.perf_counter()
    try:
        times = prayer_times_for_day(
            date,
            request.calculator_params(),
            timezone=request.time_zone,
            tz_provider=_request_provider(request, tz_provider),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    response = PrayerTimesResponse.from_times(times)
    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(
        json.dumps(
            {
                "event": "prayer_times",
                "api_version": api_version,
                "lat": request.latitude,
                "lon": request.longitude,
                "date": date.isoformat(),
                "method": request.calculation_method.value,
                "status": response.status,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response
