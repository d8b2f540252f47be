"""HTTP middleware stack: CORS, trusted hosts, rate limiting and request counting."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from breezy_weather.config import Settings
from breezy_weather.logging_config import get_logger, log_with_context
from breezy_weather.security import get_cors_origins, get_trusted_hosts

logger = get_logger(__name__)


def _add_origin_and_host_checks(app: FastAPI, settings: Settings) -> None:
    origins = get_cors_origins(settings)
    hosts = get_trusted_hosts(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=hosts)

    log_with_context(
        logger,
        "info",
        "Origin and host checks configured",
        origins=origins,
        hosts=hosts,
        event_type="security_config",
    )


def _add_rate_limit(app: FastAPI, settings: Settings) -> Limiter:
    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    return limiter


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Install the middleware stack.

    The per-IP limit from ``RATE_LIMIT_DEFAULT`` applies to every route,
    health checks included.

    Returns:
        The slowapi limiter stored on ``app.state.limiter``
    """
    _add_origin_and_host_checks(app, settings)
    limiter = _add_rate_limit(app, settings)

    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        app.state.request_count = getattr(app.state, "request_count", 0) + 1
        return await call_next(request)

    return limiter
