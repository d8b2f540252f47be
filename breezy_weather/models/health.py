"""Response models for the health, readiness and debug endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

CheckResult = Literal["ok", "failed", "disabled"]


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    version: str


class ReadinessChecks(BaseModel):
    """Result of each local readiness check."""

    http_client: CheckResult
    city_weather_service: CheckResult
    refresh_loop: CheckResult

    @property
    def passed(self) -> bool:
        return "failed" not in (self.http_client, self.city_weather_service, self.refresh_loop)


class ReadinessResponse(BaseModel):
    status: Literal["healthy", "unhealthy"]
    version: str
    timestamp: datetime
    checks: ReadinessChecks


class RuntimeInfo(BaseModel):
    version: str
    python_version: str
    platform: str
    uptime_seconds: int
    log_level: str


class ServiceStateInfo(BaseModel):
    """Snapshot of the tracked cities, stored weather and background loop."""

    tracked_cities: list[str]
    focused_city: str | None
    units: str
    cached_views: int
    cities_with_errors: int
    session_state: str
    refresh_loop_running: bool
    refresh_ticks: int
    total_requests: int


class SanitizedConfig(BaseModel):
    """Configuration with secrets replaced by flags."""

    api_host: str
    api_port: int
    weather_base_url: str
    weather_api_key_configured: bool = Field(..., description="False while the placeholder key is in use")
    service_api_key_configured: bool
    cities_file: str
    refresh_enabled: bool
    refresh_interval_seconds: float
    cors_origins: list[str]
    trusted_hosts: list[str]
    rate_limit_default: str


class DebugInfo(BaseModel):
    system: RuntimeInfo
    state: ServiceStateInfo
    config: SanitizedConfig
