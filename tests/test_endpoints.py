"""
Tests for the weather gateway endpoints.
The WeatherService is fully mocked so no live Weatherstack connection is needed.
"""
import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient

# ---------------------------------------------------------------------------
# Minimal env so pydantic-settings doesn't require a real .env file
# ---------------------------------------------------------------------------
import os
os.environ.setdefault("WEATHERSTACK_API_KEY", "test-key")

from app.models import ErrorResponse, TemperatureView, WeatherRecord
from app.services.evaluator import evaluate


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

SAMPLE_RECORD = WeatherRecord(
    location="London",
    country="United Kingdom",
    region="City of London, Greater London",
    latitude=51.517,
    longitude=-0.106,
    local_time=datetime(2026, 10, 19, 9, 5),
    temperature=15,
    weather_descriptions="Partly cloudy",
    weather_icon="https://assets.weatherstack.com/images/wsymbols01_png_64/wsymbol_0002_sunny_intervals.png",
    wind_speed=13,
    wind_direction="SW",
    pressure=1013,
    precipitation=0,
    humidity=72,
    cloud_cover=50,
    feels_like=14,
    uv_index=3,
    visibility=10,
    is_day=True,
)

RAINY_RECORD = SAMPLE_RECORD.model_copy(
    update={"temperature": 2, "weather_descriptions": "Light rain", "precipitation": 1}
)

UNAVAILABLE = ErrorResponse(error="Could not retrieve weather data for the location")


def _make_service(record=SAMPLE_RECORD):
    mock = MagicMock()
    mock.get_current_weather = AsyncMock(return_value=record)
    mock.is_outdoor_weather_good = AsyncMock(return_value=evaluate(record) if record is not None else UNAVAILABLE)
    mock.get_temperature = AsyncMock(
        return_value=TemperatureView(location=record.location, temperature=record.temperature, feels_like=record.feels_like)
        if record is not None else UNAVAILABLE
    )
    return mock


@pytest.fixture()
def client():
    """TestClient with a mocked service returning SAMPLE_RECORD."""
    with patch("app.main.service", _make_service()):
        from app.main import app
        with TestClient(app) as c:
            yield c


@pytest.fixture()
def failing_client():
    """TestClient whose service could not resolve any location."""
    with patch("app.main.service", _make_service(record=None)):
        from app.main import app
        with TestClient(app) as c:
            yield c


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "docs" in resp.json()


# ---------------------------------------------------------------------------
# /v1/weather/current
# ---------------------------------------------------------------------------

def test_current_weather_happy_path(client):
    resp = client.get("/v1/weather/current?location=London")
    assert resp.status_code == 200
    data = resp.json()
    assert data["location"] == "London"
    assert data["temperature"] == 15
    assert data["weatherDescriptions"] == "Partly cloudy"
    assert data["feelsLike"] == 14
    assert data["isDay"] is True
    assert data["localTime"].startswith("2026-10-19T09:05")


def test_current_weather_passes_location_verbatim():
    service = _make_service()
    with patch("app.main.service", service):
        from app.main import app
        with TestClient(app) as c:
            c.get("/v1/weather/current", params={"location": "new york"})
    service.get_current_weather.assert_awaited_once_with("new york")


def test_current_weather_unavailable_returns_null(failing_client):
    resp = failing_client.get("/v1/weather/current?location=Atlantis")
    assert resp.status_code == 200
    assert resp.json() is None


# ---------------------------------------------------------------------------
# /v1/weather/outdoor
# ---------------------------------------------------------------------------

def test_outdoor_suitable_has_no_reasons(client):
    resp = client.get("/v1/weather/outdoor?location=London")
    assert resp.status_code == 200
    data = resp.json()
    assert data["isSuitableForOutdoor"] is True
    assert data["weather"] == "Partly cloudy"
    assert data["uvIndex"] == 3
    assert "unsuitableReasons" not in data


def test_outdoor_unsuitable_includes_reasons():
    with patch("app.main.service", _make_service(RAINY_RECORD)):
        from app.main import app
        with TestClient(app) as c:
            resp = c.get("/v1/weather/outdoor?location=London")
    assert resp.status_code == 200
    data = resp.json()
    assert data["isSuitableForOutdoor"] is False
    assert data["unsuitableReasons"] == {
        "heavyRain": False,
        "strongWind": False,
        "extremeTemperature": True,
        "lowVisibility": False,
        "badWeatherCondition": True,
    }


def test_outdoor_unavailable_returns_error_payload(failing_client):
    resp = failing_client.get("/v1/weather/outdoor?location=Atlantis")
    assert resp.status_code == 200
    assert resp.json() == {"error": "Could not retrieve weather data for the location"}


# ---------------------------------------------------------------------------
# /v1/weather/temperature
# ---------------------------------------------------------------------------

def test_temperature_happy_path(client):
    resp = client.get("/v1/weather/temperature?location=London")
    assert resp.status_code == 200
    assert resp.json() == {"location": "London", "temperature": 15, "feelsLike": 14, "unit": "celsius"}


def test_temperature_unavailable_returns_error_payload(failing_client):
    resp = failing_client.get("/v1/weather/temperature?location=Atlantis")
    assert resp.status_code == 200
    assert "error" in resp.json()


# ---------------------------------------------------------------------------
# Input validation — 422 errors
# ---------------------------------------------------------------------------

def test_missing_location_param(client):
    resp = client.get("/v1/weather/current")
    assert resp.status_code == 422  # FastAPI validation error


def test_empty_location_param(client):
    resp = client.get("/v1/weather/temperature?location=")
    assert resp.status_code == 422
