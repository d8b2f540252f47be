"""Custom exceptions for Breezy Weather with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    BREEZY_ERROR = "BREEZY_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Weather provider errors
    WEATHER_ERROR = "WEATHER_ERROR"
    WEATHER_TRANSPORT_ERROR = "WEATHER_TRANSPORT_ERROR"
    WEATHER_REMOTE_ERROR = "WEATHER_REMOTE_ERROR"
    WEATHER_DECODE_ERROR = "WEATHER_DECODE_ERROR"

    # City registry errors
    CITY_ERROR = "CITY_ERROR"
    CITY_INVALID = "CITY_INVALID"
    CITY_ALREADY_TRACKED = "CITY_ALREADY_TRACKED"
    CITY_NOT_FOUND = "CITY_NOT_FOUND"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"


class BreezyException(Exception):
    """Base exception for Breezy errors with HTTP status code support.

    All custom exceptions inherit from this class so the API layer can
    render them consistently.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.BREEZY_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize Breezy exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class WeatherException(BreezyException):
    """Weather provider errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.WEATHER_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class WeatherTransportException(WeatherException):
    """No response received from the weather provider (DNS, connect, timeout)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.WEATHER_TRANSPORT_ERROR,
            status_code=503,
            details=details,
        )


class WeatherRemoteException(WeatherException):
    """Weather provider answered with a non-2xx status.

    ``status_code`` carries the provider's status (a missing city is 404),
    except that a rejected provider key (401/403) becomes 502.
    """

    def __init__(self, message: str, status_code: int = 502, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.WEATHER_REMOTE_ERROR,
            status_code=status_code,
            details=details,
        )


class WeatherDecodeException(WeatherException):
    """Weather provider answered 2xx with a body we could not decode."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.WEATHER_DECODE_ERROR,
            status_code=502,
            details=details,
        )


class CityException(BreezyException):
    """City registry errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CITY_ERROR,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class InvalidCityException(CityException):
    """City name is empty after trimming."""

    def __init__(self, message: str = "City name must not be empty", details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.CITY_INVALID, status_code=400, details=details)


class CityAlreadyTrackedException(CityException):
    """City is already in the registry (case-insensitive)."""

    def __init__(self, city: str):
        super().__init__(
            f"City '{city}' is already tracked",
            code=ErrorCode.CITY_ALREADY_TRACKED,
            status_code=409,
            details={"city": city},
        )


class CityNotFoundException(CityException):
    """City is not in the registry."""

    def __init__(self, city: str):
        super().__init__(
            f"City '{city}' is not tracked",
            code=ErrorCode.CITY_NOT_FOUND,
            status_code=404,
            details={"city": city},
        )


class ConfigurationException(BreezyException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)
