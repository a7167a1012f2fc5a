from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WeatherRecord(_CamelModel):
    """Current conditions for one location, normalized from the provider payload."""

    model_config = ConfigDict(frozen=True)

    location: str
    country: str
    region: str
    latitude: float
    longitude: float
    local_time: datetime
    temperature: int
    weather_descriptions: str
    weather_icon: str
    wind_speed: int
    wind_direction: str
    pressure: int
    precipitation: int
    humidity: int
    cloud_cover: int
    feels_like: int
    uv_index: int
    visibility: int
    is_day: bool
    # Set when the provider localtime was unparseable and local_time holds fetch time instead
    local_time_substituted: bool = False


class UnsuitableReasons(_CamelModel):
    heavy_rain: bool
    strong_wind: bool
    extreme_temperature: bool
    low_visibility: bool
    bad_weather_condition: bool


class SuitabilityVerdict(_CamelModel):
    location: str
    is_suitable_for_outdoor: bool
    temperature: int
    weather: str
    wind_speed: int
    precipitation: int
    visibility: int
    humidity: int
    uv_index: int
    is_day: bool
    unsuitable_reasons: Optional[UnsuitableReasons] = None


class TemperatureView(_CamelModel):
    location: str
    temperature: int
    feels_like: int
    unit: Literal["celsius"] = "celsius"


class ErrorResponse(BaseModel):
    error: str
