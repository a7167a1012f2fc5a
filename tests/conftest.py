import os
from datetime import datetime

import pytest

os.environ.setdefault("WEATHERSTACK_API_KEY", "test-key")

from app.models import WeatherRecord


def make_record(**overrides) -> WeatherRecord:
    fields = dict(
        location="London",
        country="United Kingdom",
        region="City of London, Greater London",
        latitude=51.517,
        longitude=-0.106,
        local_time=datetime(2026, 10, 19, 9, 5),
        temperature=20,
        weather_descriptions="Sunny",
        weather_icon="https://assets.weatherstack.com/images/wsymbols01_png_64/wsymbol_0001_sunny.png",
        wind_speed=10,
        wind_direction="W",
        pressure=1015,
        precipitation=0,
        humidity=55,
        cloud_cover=0,
        feels_like=19,
        uv_index=5,
        visibility=10,
        is_day=True,
    )
    fields.update(overrides)
    return WeatherRecord(**fields)


@pytest.fixture
def sample_record():
    return make_record()


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def record_factory():
    return make_record
