"""Weather client for the OpenWeatherMap current-weather and forecast endpoints."""

from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from breezy_weather.config import Settings
from breezy_weather.exceptions import (
    InvalidCityException,
    WeatherDecodeException,
    WeatherRemoteException,
    WeatherTransportException,
)
from breezy_weather.logging_config import get_logger, log_with_context
from breezy_weather.models.weather import CurrentWeather, ForecastBundle, Units

CURRENT_ENDPOINT = "weather"
FORECAST_ENDPOINT = "forecast"

# Reported as 502: the provider rejected WEATHER_API_KEY
UPSTREAM_AUTH_STATUSES = frozenset({401, 403})

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def extract_error_message(response: httpx.Response) -> str | None:
    """Pull a readable message out of an error body.

    OpenWeatherMap answers errors with ``{"cod": "404", "message": "city not found"}``;
    other gateways use ``error``.
    """
    try:
        payload = response.json()
    except ValueError:
        return None

    if not isinstance(payload, dict):
        return None

    for key in ("message", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return None


class WeatherClient:
    """Fetches and decodes weather records for a city name.

    Each call is a single round trip: no retry, no caching. The HTTP
    client is shared and owned by the application lifespan.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self._client = client
        self._settings = settings

    async def fetch_current(self, city: str, units: Units | None = None) -> CurrentWeather:
        """Get current weather for a city.

        Raises:
            InvalidCityException: If city is empty
            WeatherTransportException: If no response was received
            WeatherRemoteException: If the provider returned a non-2xx status
            WeatherDecodeException: If the body does not match the schema
        """
        return await self._get(CURRENT_ENDPOINT, city, units, CurrentWeather)

    async def fetch_forecast(self, city: str, units: Units | None = None) -> ForecastBundle:
        """Get the 5-day / 3-hour forecast for a city.

        Raises the same exceptions as :meth:`fetch_current`.
        """
        return await self._get(FORECAST_ENDPOINT, city, units, ForecastBundle)

    async def _get(self, endpoint: str, city: str, units: Units | None, model: type[RecordT]) -> RecordT:
        city = city.strip()
        if not city:
            raise InvalidCityException()

        units = units or self._settings.weather_units
        url = f"{self._settings.weather_base_url}{endpoint}"
        params: dict[str, str] = {
            "q": city,
            "appid": self._settings.weather_api_key,
            "units": units.value,
        }

        try:
            response = await self._client.get(
                url,
                params=params,
                timeout=self._settings.weather_timeout_seconds,
                follow_redirects=True,
            )
        except httpx.HTTPError as e:
            log_with_context(
                logger,
                "warning",
                "Weather request failed without response",
                endpoint=endpoint,
                city=city,
                error=str(e),
                event_type="weather_transport_error",
            )
            raise WeatherTransportException(
                f"Failed to reach weather provider: {e}",
                details={"endpoint": endpoint, "city": city, "error_type": type(e).__name__},
            ) from e

        if not response.is_success:
            message = extract_error_message(response) or f"HTTP Error - status {response.status_code}"
            log_with_context(
                logger,
                "warning",
                "Weather provider returned error status",
                endpoint=endpoint,
                city=city,
                status_code=response.status_code,
                error=message,
                event_type="weather_remote_error",
            )
            status_code = 502 if response.status_code in UPSTREAM_AUTH_STATUSES else response.status_code
            raise WeatherRemoteException(
                message,
                status_code=status_code,
                details={
                    "endpoint": endpoint,
                    "city": city,
                    "upstream_status": response.status_code,
                    "api_response": response.text,
                },
            )

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            log_with_context(
                logger,
                "warning",
                "Weather payload could not be decoded",
                endpoint=endpoint,
                city=city,
                error_count=e.error_count(),
                event_type="weather_decode_error",
            )
            raise WeatherDecodeException(
                f"Decoding failed: {e.error_count()} validation error(s) in {endpoint} response",
                details={"endpoint": endpoint, "city": city, "decode_error": str(e)},
            ) from e
