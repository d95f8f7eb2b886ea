from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from prayertimes import (  # noqa: E402
    AsrJuristicMethod,
    CalculationMethod,
    CalculatorParams,
    FixedTimezone,
)

REDMOND_LAT = 47.660918
REDMOND_LON = -122.136371


@pytest.fixture
def redmond_isna() -> CalculatorParams:
    return CalculatorParams(
        latitude=REDMOND_LAT,
        longitude=REDMOND_LON,
        calculation_method=CalculationMethod.isna,
        asr_juristic_method=AsrJuristicMethod.shafii,
    )


@pytest.fixture
def summer_provider() -> FixedTimezone:
    """Pacific daylight time: offsets are used as given."""

    return FixedTimezone(-7.0, daylight_saving=True)


@pytest.fixture
def winter_provider() -> FixedTimezone:
    """Pacific standard time: explicit offsets lose one hour."""

    return FixedTimezone(-8.0, daylight_saving=False)


@pytest.fixture
def api_client() -> Iterable:
    from fastapi.testclient import TestClient

    from prayer_times_api import app

    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
