import logging
from datetime import datetime
from typing import Annotated, Any, List, Optional, Tuple

import httpx
from pydantic import BaseModel, BeforeValidator, Field, ValidationError

from app.errors import DateParseError, MalformedResponseError, ProviderError, TransportError
from app.models import WeatherRecord

logger = logging.getLogger(__name__)

LOCALTIME_FORMAT = "%Y-%m-%d %H:%M"


def _truncate(value: Any) -> Any:
    # Provider sometimes reports e.g. precip=0.1; keep the integer part
    if isinstance(value, float):
        return int(value)
    return value


ProviderInt = Annotated[int, BeforeValidator(_truncate)]


class _LocationPayload(BaseModel):
    name: str
    country: str
    region: str
    lat: float
    lon: float
    localtime: str


class _CurrentPayload(BaseModel):
    temperature: ProviderInt
    weather_descriptions: List[str] = Field(min_length=1)
    weather_icons: List[str] = Field(min_length=1)
    wind_speed: ProviderInt
    wind_dir: str
    pressure: ProviderInt
    precip: ProviderInt
    humidity: ProviderInt
    cloudcover: ProviderInt
    feelslike: ProviderInt
    uv_index: ProviderInt
    visibility: ProviderInt
    is_day: str


class WeatherstackClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 5.0,
        strict_local_time: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout_seconds
        self.strict_local_time = strict_local_time
        self._transport = transport

    async def fetch_current(self, location: str) -> WeatherRecord:
        """Fetch current conditions for ``location``.

        One request, no retries. Raises a ``FetchError`` subclass on any failure.
        """
        url = f"{self.base_url}/current"
        params = {"access_key": self.api_key, "query": location}
        logger.info("Fetching current weather for %r", location)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.get(url, params=params)
                r.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("Weatherstack returned HTTP %s for %r", status, location)
            raise TransportError(location, f"HTTP {status}: {exc.response.text[:200]}", status_code=status)
        except httpx.HTTPError as exc:
            logger.error("Network error fetching %r: %s", location, exc)
            raise TransportError(location, f"Network error: {exc}")
        except (httpx.InvalidURL, UnicodeEncodeError) as exc:
            # Raised while building the request, e.g. an over-long or unencodable location
            logger.error("Could not build request for %r: %s", location, exc)
            raise TransportError(location, f"Invalid request: {exc}")

        try:
            data = r.json()
        except ValueError:
            raise MalformedResponseError(location, "Response body is not JSON")
        if not isinstance(data, dict):
            raise MalformedResponseError(location, "Response body is not a JSON object")

        if "error" in data:
            raise self._provider_error(location, data["error"])

        return self._to_record(location, data)

    def _provider_error(self, location: str, error: Any) -> ProviderError:
        if not isinstance(error, dict):
            logger.error("Weatherstack API error for %r: %s", location, error)
            return ProviderError(location, str(error))
        info = str(error.get("info", "Unknown provider error"))
        logger.error("Weatherstack API error for %r: %s", location, info)
        return ProviderError(location, info, code=error.get("code"), error_type=error.get("type"))

    def _to_record(self, location: str, data: dict) -> WeatherRecord:
        try:
            loc = _LocationPayload.model_validate(data.get("location"))
            cur = _CurrentPayload.model_validate(data.get("current"))
        except ValidationError as exc:
            logger.error("Malformed Weatherstack payload for %r: %s", location, exc)
            raise MalformedResponseError(location, f"Malformed response: {exc.error_count()} invalid field(s)")

        local_time, substituted = self._parse_local_time(location, loc.localtime)

        return WeatherRecord(
            location=loc.name,
            country=loc.country,
            region=loc.region,
            latitude=loc.lat,
            longitude=loc.lon,
            local_time=local_time,
            temperature=cur.temperature,
            weather_descriptions=cur.weather_descriptions[0],
            weather_icon=cur.weather_icons[0],
            wind_speed=cur.wind_speed,
            wind_direction=cur.wind_dir,
            pressure=cur.pressure,
            precipitation=cur.precip,
            humidity=cur.humidity,
            cloud_cover=cur.cloudcover,
            feels_like=cur.feelslike,
            uv_index=cur.uv_index,
            visibility=cur.visibility,
            is_day=cur.is_day == "yes",
            local_time_substituted=substituted,
        )

    def _parse_local_time(self, location: str, raw: str) -> Tuple[datetime, bool]:
        try:
            return datetime.strptime(raw, LOCALTIME_FORMAT), False
        except ValueError:
            if self.strict_local_time:
                raise DateParseError(location, f"Unparseable localtime: {raw!r}")
            logger.warning("Unparseable localtime %r for %r, using current time", raw, location)
            return datetime.now(), True
