"""Application factory for creating and configuring the FastAPI app."""

import httpx
from fastapi import FastAPI

from breezy_weather import __version__
from breezy_weather.config import Settings, get_settings
from breezy_weather.core.lifespan import lifespan
from breezy_weather.core.middleware import setup_middleware
from breezy_weather.middleware.error_handlers import register_error_handlers
from breezy_weather.routers import cities_router, health_router, session_router, weather_router


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached singleton)
        transport: Transport for the upstream HTTP client (tests pass a mock)

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Breezy Weather API",
        description="""
        🌤️ **Breezy Weather** - forecasts for the cities you track

        ## 🔐 Authentication
        `/api/*` and `/debug` require `Authorization: Bearer <SERVICE_API_KEY>`.

        ## 🏙️ Cities
        Add cities under `/api/cities`; each one is fetched from OpenWeatherMap and
        summarised as current conditions, the next 24 hours and a daily outlook
        under `/api/weather/cities`.

        ## 📍 Session
        Report the device's location permission to `/api/session/location`.

        ## 📊 Health
        - `/health` - liveness
        - `/health/ready` - readiness
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={"name": "MIT"},
    )
    app.state.settings = settings
    app.state.http_transport = transport

    setup_middleware(app, settings)
    register_error_handlers(app)

    # Routes read settings through Depends(get_settings)
    app.dependency_overrides[get_settings] = lambda: settings

    app.include_router(health_router.router, tags=["health"])
    app.include_router(cities_router.router, prefix="/api/cities", tags=["cities"])
    app.include_router(weather_router.router, prefix="/api/weather", tags=["weather"])
    app.include_router(session_router.router, prefix="/api/session", tags=["session"])

    return app
