"""Application lifespan management."""

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from breezy_weather import __version__
from breezy_weather.city_registry import CityRegistry
from breezy_weather.config import Settings
from breezy_weather.logging_config import get_logger, log_with_context
from breezy_weather.middleware.logging_middleware import redact_sensitive_data
from breezy_weather.services.city_weather_service import CityWeatherService
from breezy_weather.services.refresh_service import PeriodicRefresher
from breezy_weather.services.weather_service import WeatherClient
from breezy_weather.session import SessionGate
from breezy_weather.state_managers import CityWeatherStore
from breezy_weather.utils.city_store import JsonCityStore

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook to log upstream requests with the API key redacted."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook to log upstream responses with the API key redacted."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Shared HTTP client with pooled connections and logging hooks."""
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }
    return httpx.AsyncClient(  # nosec B113
        timeout=httpx.Timeout(
            connect=5.0,
            read=10.0,
            write=5.0,
            pool=5.0,
        ),
        limits=httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        ),
        follow_redirects=True,
        event_hooks=event_hooks,
        transport=transport,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Wire services on startup and tear them down on shutdown.

    Exceptions raised while serving are logged and re-raised so cleanup
    still runs.
    """
    settings: Settings = app.state.settings
    app.state.startup_time = time.time()
    app.state.request_count = 0

    log_with_context(
        logger,
        "info",
        "Starting Breezy Weather application",
        version=__version__,
        event_type="app_startup",
    )
    if settings.uses_default_weather_api_key:
        log_with_context(
            logger,
            "warning",
            "WEATHER_API_KEY not configured, using placeholder key",
            event_type="config_default_api_key",
        )

    client = create_http_client(getattr(app.state, "http_transport", None))
    app.state.http_client = client

    registry = CityRegistry.from_store(JsonCityStore(settings.cities_file))
    store = CityWeatherStore()
    await store.initialize()

    weather_client = WeatherClient(client, settings)
    service = CityWeatherService(weather_client, registry, store, units=settings.weather_units)
    refresher = PeriodicRefresher(service.refresh_focused, settings.refresh_interval_seconds)

    app.state.city_registry = registry
    app.state.weather_store = store
    app.state.weather_client = weather_client
    app.state.city_weather_service = service
    app.state.session_gate = SessionGate()
    app.state.refresher = refresher
    log_with_context(
        logger,
        "info",
        "Services initialized",
        cities=len(registry),
        event_type="services_ready",
    )

    if settings.load_on_startup:
        await service.refresh_all()
    if settings.refresh_enabled:
        refresher.start()

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Breezy Weather application",
            event_type="app_shutdown",
        )
        await refresher.stop()
        await store.cleanup()
        await client.aclose()
        log_with_context(
            logger,
            "info",
            "HTTP client closed",
            event_type="http_client_cleanup",
        )
