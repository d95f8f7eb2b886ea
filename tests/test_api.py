from __future__ import annotations

import json
import logging

import pytest
from fastapi.testclient import TestClient

from prayertimes import FixedTimezone

AUTH = {"Authorization": "token test-token"}

REDMOND_BODY = {
    "timeZone": -7,
    "latitude": 47.660918,
    "longitude": -122.136371,
    "calculationMethod": "ISNA",
    "asrJuristicMethod": "Shafii",
}


def _post(client: TestClient, path: str, body: dict, headers=AUTH, version="1.0"):
    params = {"apiVersion": version} if version is not None else {}
    return client.post(path, json=body, params=params, headers=headers)


def test_single_day_summer(api_client: TestClient) -> None:
    response = _post(
        api_client,
        "/api/prayer-times/2015-08-03",
        {**REDMOND_BODY, "daylightSaving": True},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["date"] == "2015-08-03"
    assert payload["fajr"] == "04:01"
    assert payload["sunrise"] == "05:48"
    assert payload["dhuhr"] == "13:15"
    assert payload["asr"] == "17:18"
    assert payload["sunset"] == "20:40"
    assert payload["maghrib"] == "20:40"
    assert payload["isha"] == "22:28"
    assert payload["status"] == "ok"
    assert payload["unavailable"] == []


def test_single_day_winter(api_client: TestClient) -> None:
    response = _post(
        api_client,
        "/api/prayer-times/2015-02-03",
        {**REDMOND_BODY, "daylightSaving": False},
    )
    assert response.status_code == 200
    payload = response.json()
    assert [payload[key] for key in ("fajr", "dhuhr", "asr", "isha")] == [
        "06:08",
        "12:22",
        "14:44",
        "18:36",
    ]


def test_server_provider_decides_dst(api_client: TestClient) -> None:
    from prayer_times_api import app, get_timezone_provider

    app.dependency_overrides[get_timezone_provider] = lambda: FixedTimezone(
        -7.0, daylight_saving=True
    )
    response = _post(api_client, "/api/prayer-times/2015-08-03", REDMOND_BODY)
    assert response.status_code == 200
    assert response.json()["dhuhr"] == "13:15"


def test_degenerate_times_are_null(api_client: TestClient) -> None:
    body = {
        "timeZone": 2,
        "latitude": 59.9139,
        "longitude": 10.7522,
        "calculationMethod": "ISNA",
        "asrJuristicMethod": "Shafii",
        "highLatitudeAdjustmentMethod": "None",
        "daylightSaving": True,
    }
    response = _post(api_client, "/api/prayer-times/2024-06-21", body)
    assert response.status_code == 200
    payload = response.json()
    assert payload["fajr"] is None
    assert payload["isha"] is None
    assert payload["sunrise"] is not None
    assert payload["status"] == "degenerate"
    assert payload["unavailable"] == ["fajr", "isha"]

    adjusted = _post(
        api_client,
        "/api/prayer-times/2024-06-21",
        {**body, "highLatitudeAdjustmentMethod": "AngleBased"},
    )
    assert adjusted.json()["status"] == "ok"
    assert adjusted.json()["fajr"] == "02:36"


def test_missing_token_is_unauthorized(api_client: TestClient) -> None:
    response = api_client.post(
        "/api/prayer-times/2024-01-01",
        content="{}",
        params={"apiVersion": "1.0"},
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 401
    payload = response.json()
    assert payload["ok"] is False
    assert payload["code"] == "http_401"
    assert payload["error"] == "Unauthorized"


def test_non_token_authorization_is_unauthorized(api_client: TestClient) -> None:
    response = _post(
        api_client,
        "/api/prayer-times/2024-01-01",
        REDMOND_BODY,
        headers={"Authorization": "Bearer abc"},
    )
    assert response.status_code == 401


def test_api_version_required(api_client: TestClient) -> None:
    response = _post(
        api_client, "/api/prayer-times/2024-01-01", REDMOND_BODY, version=None
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_invalid_latitude(api_client: TestClient) -> None:
    response = _post(
        api_client, "/api/prayer-times/2024-01-01", {**REDMOND_BODY, "latitude": 95}
    )
    assert response.status_code == 422
    payload = response.json()
    assert payload["code"] == "validation_error"
    assert payload["ok"] is False


def test_unknown_method_rejected(api_client: TestClient) -> None:
    response = _post(
        api_client,
        "/api/prayer-times/2024-01-01",
        {**REDMOND_BODY, "calculationMethod": "Tehran"},
    )
    assert response.status_code == 422


def test_range(api_client: TestClient) -> None:
    body = {
        **REDMOND_BODY,
        "fromDate": "2015-08-01",
        "toDate": "2015-08-03",
        "daylightSaving": True,
    }
    response = _post(api_client, "/api/prayer-times/range", body)
    assert response.status_code == 200
    items = response.json()["prayerTimes"]
    assert [item["date"] for item in items] == ["2015-08-01", "2015-08-02", "2015-08-03"]
    assert items[-1]["fajr"] == "04:01"


def test_range_single_day(api_client: TestClient) -> None:
    body = {**REDMOND_BODY, "fromDate": "2024-01-01", "toDate": "2024-01-01"}
    response = _post(api_client, "/api/prayer-times/range", body)
    assert response.status_code == 200
    assert len(response.json()["prayerTimes"]) == 1


def test_reversed_range_is_bad_request(api_client: TestClient) -> None:
    body = {**REDMOND_BODY, "fromDate": "2024-01-02", "toDate": "2024-01-01"}
    response = _post(api_client, "/api/prayer-times/range", body)
    assert response.status_code == 400
    payload = response.json()
    assert payload["code"] == "http_400"
    assert "'from' date" in payload["error"]


def test_too_long_range_is_bad_request(api_client: TestClient) -> None:
    body = {**REDMOND_BODY, "fromDate": "2024-01-01", "toDate": "2025-01-01"}
    response = _post(api_client, "/api/prayer-times/range", body)
    assert response.status_code == 400
    assert "365 days" in response.json()["error"]


def test_health_endpoint(api_client: TestClient) -> None:
    response = api_client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert "ISNA" in payload["methods"]


def test_startup_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    from prayer_times_api import app

    caplog.set_level(logging.INFO, logger="prayer-times-api")
    with TestClient(app):
        pass
    events = [
        json.loads(record.getMessage())
        for record in caplog.records
        if record.name == "prayer-times-api"
    ]
    startup = [event for event in events if event["event"] == "startup"]
    assert len(startup) == 1
    assert "range_jobs" in startup[0]
