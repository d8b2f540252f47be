"""Bearer-token authentication and host/origin lists for Breezy Weather."""

import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from breezy_weather.config import Settings, get_settings
from breezy_weather.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

KEY_NOT_CONFIGURED = "Authentication not configured - SERVICE_API_KEY environment variable is missing"
KEY_MISSING = "Missing API key"
KEY_INVALID = "Invalid API key"


def _unauthorized(request: Request, detail: str, level: str = "warning") -> HTTPException:
    log_with_context(
        logger,
        level,
        detail,
        path=request.url.path,
        ip=request.client.host if request.client else "unknown",
        event_type="auth_failure",
    )
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_api_key(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> None:
    """Require ``Authorization: Bearer <SERVICE_API_KEY>``.

    With no SERVICE_API_KEY configured every protected route answers 401.

    Raises:
        HTTPException: 401 when the key is unconfigured, missing or wrong
    """
    if not settings.service_api_key:
        raise _unauthorized(request, KEY_NOT_CONFIGURED, level="error")
    if credentials is None:
        raise _unauthorized(request, KEY_MISSING)
    if not secrets.compare_digest(credentials.credentials.encode(), settings.service_api_key.encode()):
        raise _unauthorized(request, KEY_INVALID)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def get_cors_origins(settings: Settings) -> list[str]:
    return _split_csv(settings.cors_origins)


def get_trusted_hosts(settings: Settings) -> list[str]:
    return _split_csv(settings.trusted_hosts)
