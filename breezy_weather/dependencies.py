"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Request

from breezy_weather.services.city_weather_service import CityWeatherService
from breezy_weather.services.refresh_service import PeriodicRefresher
from breezy_weather.services.weather_service import WeatherClient
from breezy_weather.session import SessionGate


def _from_state(request: Request, attribute: str, label: str):
    value = getattr(request.app.state, attribute, None)
    if value is None:
        raise RuntimeError(f"{label} not initialized.")
    return value


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared HTTP client from app state.

    Raises:
        RuntimeError: If the lifespan has not run
    """
    return _from_state(request, "http_client", "HTTP client")


async def get_weather_client(request: Request) -> WeatherClient:
    """Weather provider client from app state."""
    return _from_state(request, "weather_client", "Weather client")


async def get_city_weather_service(request: Request) -> CityWeatherService:
    """City weather service from app state."""
    return _from_state(request, "city_weather_service", "City weather service")


async def get_session_gate(request: Request) -> SessionGate:
    """Session gate from app state."""
    return _from_state(request, "session_gate", "Session gate")


async def get_refresher(request: Request) -> PeriodicRefresher:
    """Periodic refresher from app state."""
    return _from_state(request, "refresher", "Periodic refresher")
