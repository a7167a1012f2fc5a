import logging
from typing import Optional, Union

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from app.config import settings
from app.models import ErrorResponse, SuitabilityVerdict, TemperatureView, WeatherRecord
from app.services.cache import WeatherCache
from app.services.weather import WeatherService
from app.services.weatherstack import WeatherstackClient

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.app_name)

cache = WeatherCache(
    ttl_seconds=settings.cache_ttl_seconds,
    serve_stale_on_error=settings.cache_serve_stale_on_error,
)
ws = WeatherstackClient(
    settings.weatherstack_base_url,
    settings.weatherstack_api_key,
    timeout_seconds=settings.weatherstack_timeout_seconds,
    strict_local_time=settings.strict_local_time,
)
service = WeatherService(ws, cache)


@app.get("/health")
def health():
    return {"status": "ok", "service": settings.app_name, "cached_locations": len(cache)}


@app.get("/")
def root():
    return JSONResponse({"service": settings.app_name, "docs": "/docs"})


# ── Location endpoints ───────────────────────────────────────────────────────
# Fetch failures come back as null / {"error": ...} with status 200, never as HTTP errors.

@app.get("/v1/weather/current", response_model=Optional[WeatherRecord])
async def current_weather(
    location: str = Query(..., min_length=1, description="Location name, e.g. 'London'"),
):
    return await service.get_current_weather(location)


@app.get(
    "/v1/weather/outdoor",
    response_model=Union[SuitabilityVerdict, ErrorResponse],
    response_model_exclude_none=True,
)
async def outdoor_weather(
    location: str = Query(..., min_length=1, description="Location name, e.g. 'London'"),
):
    return await service.is_outdoor_weather_good(location)


@app.get("/v1/weather/temperature", response_model=Union[TemperatureView, ErrorResponse])
async def temperature(
    location: str = Query(..., min_length=1, description="Location name, e.g. 'London'"),
):
    return await service.get_temperature(location)
