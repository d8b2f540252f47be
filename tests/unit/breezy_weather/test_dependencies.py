"""Tests for dependency injection functions."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from breezy_weather.dependencies import (
    get_city_weather_service,
    get_http_client,
    get_refresher,
    get_session_gate,
    get_weather_client,
)
from breezy_weather.services.city_weather_service import CityWeatherService
from breezy_weather.services.refresh_service import PeriodicRefresher
from breezy_weather.services.weather_service import WeatherClient
from breezy_weather.session import SessionGate


def _request_with_state(**state):
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(**state)))


class TestDependencies:
    """Tests for dependency injection functions."""

    @pytest.mark.asyncio
    async def test_get_http_client(self):
        """Test getting HTTP client from app state."""
        mock_client = AsyncMock(spec=AsyncClient)

        client = await get_http_client(_request_with_state(http_client=mock_client))

        assert client is mock_client

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("dependency", "attribute", "spec"),
        [
            (get_weather_client, "weather_client", WeatherClient),
            (get_city_weather_service, "city_weather_service", CityWeatherService),
            (get_session_gate, "session_gate", SessionGate),
            (get_refresher, "refresher", PeriodicRefresher),
        ],
    )
    async def test_get_service_from_state(self, dependency, attribute, spec):
        """Test each service is read from app state."""
        service = MagicMock(spec=spec)

        assert await dependency(_request_with_state(**{attribute: service})) is service

    @pytest.mark.asyncio
    async def test_missing_state_raises(self):
        """Test dependencies fail loudly before the lifespan has run."""
        with pytest.raises(RuntimeError, match="HTTP client not initialized"):
            await get_http_client(_request_with_state())

        with pytest.raises(RuntimeError, match="City weather service not initialized"):
            await get_city_weather_service(_request_with_state(city_weather_service=None))
