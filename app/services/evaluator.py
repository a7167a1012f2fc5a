from app.models import SuitabilityVerdict, UnsuitableReasons, WeatherRecord

HEAVY_RAIN_PRECIP = 5
STRONG_WIND_SPEED = 40
MIN_TEMPERATURE = 5
MAX_TEMPERATURE = 35
MIN_VISIBILITY = 5
BAD_WEATHER_WORDS = ("rain", "snow", "storm", "fog")


def evaluate(record: WeatherRecord) -> SuitabilityVerdict:
    """Judge whether current conditions suit outdoor activity.

    Each rule is checked on its own; any one of them makes the location
    unsuitable, and only then is the per-rule breakdown attached.
    """
    desc = record.weather_descriptions.lower()
    reasons = UnsuitableReasons(
        heavy_rain=record.precipitation > HEAVY_RAIN_PRECIP,
        strong_wind=record.wind_speed > STRONG_WIND_SPEED,
        extreme_temperature=record.temperature < MIN_TEMPERATURE or record.temperature > MAX_TEMPERATURE,
        low_visibility=record.visibility < MIN_VISIBILITY,
        bad_weather_condition=any(word in desc for word in BAD_WEATHER_WORDS),
    )
    suitable = not any(reasons.model_dump().values())

    return SuitabilityVerdict(
        location=record.location,
        is_suitable_for_outdoor=suitable,
        temperature=record.temperature,
        weather=record.weather_descriptions,
        wind_speed=record.wind_speed,
        precipitation=record.precipitation,
        visibility=record.visibility,
        humidity=record.humidity,
        uv_index=record.uv_index,
        is_day=record.is_day,
        unsuitable_reasons=None if suitable else reasons,
    )
