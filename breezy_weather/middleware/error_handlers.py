"""Exception handlers for the application."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from breezy_weather.exceptions import BreezyException, ErrorCode
from breezy_weather.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


async def breezy_exception_handler(request: Request, exc: BreezyException) -> JSONResponse:
    """Render Breezy exceptions as structured JSON errors.

    Body: ``{"error": {"code": ..., "message": ..., "details": ...}}``.
    """
    log_with_context(
        logger,
        "warning",
        "Breezy error",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        url=str(request.url.path),
        event_type="breezy_error",
    )

    error_content: dict[str, Any] = {"code": exc.code.value, "message": exc.message, "details": exc.details}

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_content},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        url=str(request.url.path),
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=exc)

    return JSONResponse(
        status_code=500,
        content={"error": {"code": ErrorCode.INTERNAL_ERROR.value, "message": "Internal server error"}},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the application."""
    app.add_exception_handler(BreezyException, breezy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
