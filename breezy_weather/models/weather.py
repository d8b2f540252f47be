"""Pydantic models for OpenWeatherMap payloads."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Units(str, Enum):
    """Measurement system sent as the ``units`` query parameter."""

    METRIC = "metric"
    IMPERIAL = "imperial"
    STANDARD = "standard"


class WeatherRecord(BaseModel):
    """Base for decoded provider records: immutable, unknown fields ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class WeatherCondition(WeatherRecord):
    """Weather condition descriptor."""

    id: int
    main: str
    description: str
    icon: str


class Coordinates(WeatherRecord):
    lat: float
    lon: float


class WindInfo(WeatherRecord):
    """Wind information; every field may be absent."""

    speed: float | None = None
    deg: int | None = None
    gust: float | None = None


class CloudsInfo(WeatherRecord):
    """Cloud coverage in percent."""

    all: int


class CurrentMain(WeatherRecord):
    """Main metrics of the current-weather endpoint."""

    temp: float
    feels_like: float
    temp_min: float | None = None
    temp_max: float | None = None
    humidity: int
    pressure: int | None = None


class CurrentWeather(WeatherRecord):
    """Decoded ``/weather`` response."""

    dt: int
    main: CurrentMain
    weather: list[WeatherCondition]
    wind: WindInfo | None = None
    name: str
    coord: Coordinates | None = None


class ForecastMain(WeatherRecord):
    """Main metrics of one forecast step."""

    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int


class ForecastStep(WeatherRecord):
    """One 3-hour step of the ``/forecast`` response."""

    dt: int
    main: ForecastMain
    weather: list[WeatherCondition]
    clouds: CloudsInfo
    wind: WindInfo
    dt_txt: str
    pop: float | None = None
    visibility: int | None = None


class ForecastCity(WeatherRecord):
    """City metadata of the ``/forecast`` response."""

    id: int
    name: str
    coord: Coordinates
    country: str
    population: int | None = None
    timezone: int = Field(..., gt=-86400, lt=86400, description="UTC offset in seconds")
    sunrise: int
    sunset: int


class ForecastBundle(WeatherRecord):
    """Decoded ``/forecast`` response (5 days, 3-hour resolution)."""

    cod: str | int | None = None
    message: float | None = None
    cnt: int | None = None
    steps: list[ForecastStep] = Field(alias="list")
    city: ForecastCity
