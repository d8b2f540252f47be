"""Liveness, readiness and debug endpoints."""

import platform
import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from breezy_weather import __version__
from breezy_weather.config import Settings, get_settings
from breezy_weather.dependencies import get_city_weather_service, get_refresher, get_session_gate
from breezy_weather.models import (
    DebugInfo,
    HealthResponse,
    ReadinessChecks,
    ReadinessResponse,
    RuntimeInfo,
    SanitizedConfig,
    ServiceStateInfo,
)
from breezy_weather.security import get_cors_origins, get_trusted_hosts, verify_api_key
from breezy_weather.services.city_weather_service import CityWeatherService
from breezy_weather.services.refresh_service import PeriodicRefresher
from breezy_weather.session import SessionGate

router = APIRouter()


def _refresh_loop_check(settings: Settings, refresher: PeriodicRefresher | None) -> str:
    if not settings.refresh_enabled:
        return "disabled"
    return "ok" if refresher is not None and refresher.is_running else "failed"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness check."""
    return HealthResponse(version=__version__)


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse, "description": "A local component is not ready"}},
)
async def readiness_check(request: Request, settings: Settings = Depends(get_settings)):
    """Readiness check.

    Only local wiring is checked. OpenWeatherMap is not called, so probing
    never spends provider quota.
    """
    state = request.app.state
    checks = ReadinessChecks(
        http_client="ok" if getattr(state, "http_client", None) is not None else "failed",
        city_weather_service="ok" if getattr(state, "city_weather_service", None) is not None else "failed",
        refresh_loop=_refresh_loop_check(settings, getattr(state, "refresher", None)),
    )
    body = ReadinessResponse(
        status="healthy" if checks.passed else "unhealthy",
        version=__version__,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
    return JSONResponse(status_code=200 if checks.passed else 503, content=body.model_dump(mode="json"))


@router.get(
    "/debug",
    response_model=DebugInfo,
    dependencies=[Depends(verify_api_key)],
    responses={401: {"description": "Missing or invalid API key"}},
)
async def debug_info(
    request: Request,
    settings: Settings = Depends(get_settings),
    service: CityWeatherService = Depends(get_city_weather_service),
    gate: SessionGate = Depends(get_session_gate),
    refresher: PeriodicRefresher = Depends(get_refresher),
):
    """Runtime state and configuration. Secrets are reported only as flags."""
    stats = await request.app.state.weather_store.stats()
    python = platform.python_version_tuple()

    return DebugInfo(
        system=RuntimeInfo(
            version=__version__,
            python_version=".".join(python),
            platform=platform.system(),
            uptime_seconds=int(time.time() - request.app.state.startup_time),
            log_level=settings.log_level,
        ),
        state=ServiceStateInfo(
            tracked_cities=service.registry.list(),
            focused_city=service.focused_city,
            units=service.units.value,
            cached_views=stats["views"],
            cities_with_errors=stats["errors"],
            session_state=gate.state.value,
            refresh_loop_running=refresher.is_running,
            refresh_ticks=refresher.tick_count,
            total_requests=request.app.state.request_count,
        ),
        config=SanitizedConfig(
            api_host=settings.api_host,
            api_port=settings.api_port,
            weather_base_url=settings.weather_base_url,
            weather_api_key_configured=not settings.uses_default_weather_api_key,
            service_api_key_configured=bool(settings.service_api_key),
            cities_file=str(settings.cities_file),
            refresh_enabled=settings.refresh_enabled,
            refresh_interval_seconds=settings.refresh_interval_seconds,
            cors_origins=get_cors_origins(settings),
            trusted_hosts=get_trusted_hosts(settings),
            rate_limit_default=settings.rate_limit_default,
        ),
    )
