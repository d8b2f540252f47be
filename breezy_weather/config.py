from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from breezy_weather.logging_config import get_logger
from breezy_weather.models.weather import Units

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent  # breezy-weather/

# Used when no provider key is configured; requests will fail with 401 upstream
DEFAULT_WEATHER_API_KEY = "replace-me"


class Settings(BaseSettings):
    """Application settings with validation.

    Every field has a default so the app starts with an empty environment;
    real deployments provide at least WEATHER_API_KEY and SERVICE_API_KEY
    through environment variables or the .env file.
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")

    # Access control for this service
    service_api_key: str = Field(default="", description="Bearer token required by /api/* and /debug")
    cors_origins: str = Field(
        default="http://localhost:8000,http://127.0.0.1:8000",
        description="Comma-separated list of allowed CORS origins",
    )
    trusted_hosts: str = Field(default="localhost,127.0.0.1", description="Comma-separated list of trusted hosts")
    rate_limit_default: str = Field(default="60/minute", description="Default per-IP rate limit")

    # OpenWeatherMap
    weather_api_key: str = Field(default=DEFAULT_WEATHER_API_KEY, min_length=1, description="OpenWeatherMap API key")
    weather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/",
        pattern=r"^https?://",
        description="OpenWeatherMap base URL",
    )
    weather_units: Units = Field(default=Units.METRIC, description="metric, imperial or standard")
    weather_timeout_seconds: float = Field(default=10.0, gt=0, description="Per-request timeout")

    # City list persistence
    cities_file: Path = Field(default=BASE_DIR / "cities.json", description="JSON file holding tracked cities")

    # Refresh behaviour
    load_on_startup: bool = Field(default=True, description="Fetch weather for all cities during startup")
    refresh_enabled: bool = Field(default=True, description="Run the periodic refresh loop")
    refresh_interval_seconds: float = Field(default=60.0, gt=0, description="Periodic refresh interval")

    log_level: str = Field(default="INFO", description="Root log level")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @property
    def uses_default_weather_api_key(self) -> bool:
        """True when no OpenWeatherMap key was configured."""
        return self.weather_api_key == DEFAULT_WEATHER_API_KEY

    @field_validator("api_host", "weather_api_key", mode="after")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Ensure required strings are not whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("value must not be empty")
        return v

    @field_validator("weather_base_url", mode="after")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Endpoint paths are appended to the base URL."""
        return v if v.endswith("/") else f"{v}/"

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a logging level."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Avoids re-reading the .env file on every request. Use with
    FastAPI's ``Depends()``; tests override it through
    ``app.dependency_overrides``.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
