import logging
from typing import Optional, Union

from app.errors import FetchError
from app.models import ErrorResponse, SuitabilityVerdict, TemperatureView, WeatherRecord
from app.services.cache import WeatherCache
from app.services.views import suitability_view, temperature_view
from app.services.weatherstack import WeatherstackClient

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "Could not retrieve weather data for the location"


class WeatherService:
    """The three public weather operations, each resolving its record through the cache."""

    def __init__(self, client: WeatherstackClient, cache: WeatherCache):
        self.client = client
        self.cache = cache

    async def get_current_weather(self, location: str) -> Optional[WeatherRecord]:
        """Return the current record for ``location``, or None if it could not be fetched."""
        try:
            result = await self.cache.get_or_fetch(location, lambda: self.client.fetch_current(location))
        except FetchError as exc:
            logger.error("Error fetching weather data for %r: %s", location, exc)
            return None
        if result.stale:
            logger.info("Serving stale weather for %r (age: %ss)", location, result.age_seconds)
        return result.record

    async def is_outdoor_weather_good(self, location: str) -> Union[SuitabilityVerdict, ErrorResponse]:
        record = await self.get_current_weather(location)
        if record is None:
            return ErrorResponse(error=UNAVAILABLE_MESSAGE)
        return suitability_view(record)

    async def get_temperature(self, location: str) -> Union[TemperatureView, ErrorResponse]:
        record = await self.get_current_weather(location)
        if record is None:
            return ErrorResponse(error=UNAVAILABLE_MESSAGE)
        return temperature_view(record)
