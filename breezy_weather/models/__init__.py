"""Breezy Weather models"""

from breezy_weather.models.cities import (
    AddCityRequest,
    CityListResponse,
    FocusCityRequest,
    LocationSignalRequest,
    SessionResponse,
    UnitsRequest,
    UnitsResponse,
)
from breezy_weather.models.health import (
    DebugInfo,
    HealthResponse,
    ReadinessChecks,
    ReadinessResponse,
    RuntimeInfo,
    SanitizedConfig,
    ServiceStateInfo,
)
from breezy_weather.models.views import (
    CitiesWeatherResponse,
    CityWeatherStatus,
    CityWeatherView,
    DailyView,
    HourlyView,
)
from breezy_weather.models.weather import CurrentWeather, ForecastBundle, ForecastStep, Units, WeatherCondition

__all__ = [
    "AddCityRequest",
    "CitiesWeatherResponse",
    "CityListResponse",
    "CityWeatherStatus",
    "CityWeatherView",
    "CurrentWeather",
    "DailyView",
    "DebugInfo",
    "FocusCityRequest",
    "ForecastBundle",
    "ForecastStep",
    "HealthResponse",
    "HourlyView",
    "LocationSignalRequest",
    "ReadinessChecks",
    "ReadinessResponse",
    "RuntimeInfo",
    "SanitizedConfig",
    "ServiceStateInfo",
    "SessionResponse",
    "Units",
    "UnitsRequest",
    "UnitsResponse",
    "WeatherCondition",
]
