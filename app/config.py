from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    app_name: str = "weather-gateway"
    log_level: str = "INFO"

    # Provider
    weatherstack_api_key: str
    weatherstack_base_url: str = "http://api.weatherstack.com"
    weatherstack_timeout_seconds: float = 5.0

    # Unparseable provider localtime: False substitutes now(), True fails the fetch
    strict_local_time: bool = False

    # Cache tuning
    cache_ttl_seconds: int = 1800
    cache_serve_stale_on_error: bool = False


settings = Settings()
