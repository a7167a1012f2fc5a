from app.models import SuitabilityVerdict, TemperatureView, WeatherRecord
from app.services.evaluator import evaluate


def temperature_view(record: WeatherRecord) -> TemperatureView:
    return TemperatureView(
        location=record.location,
        temperature=record.temperature,
        feels_like=record.feels_like,
    )


def suitability_view(record: WeatherRecord) -> SuitabilityVerdict:
    return evaluate(record)
