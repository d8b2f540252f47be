"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime

import httpx
import pytest
from fastapi.testclient import TestClient

from breezy_weather.city_registry import city_key
from breezy_weather.config import Settings
from breezy_weather.core.app_factory import create_app
from breezy_weather.exceptions import WeatherRemoteException
from breezy_weather.models.weather import CurrentWeather, ForecastBundle

SERVICE_API_KEY = "test-service-key"

# Monday 2 June 2025, 00:00 UTC
FORECAST_START = int(datetime(2025, 6, 2, tzinfo=UTC).timestamp())
STEP_SECONDS = 3 * 60 * 60


def build_current_payload(
    city: str = "Tokyo",
    temp: float = 22.7,
    description: str = "scattered clouds",
    icon: str = "03d",
    temp_min: float | None = 18.0,
    temp_max: float | None = 25.0,
    conditions: list[dict] | None = None,
) -> dict:
    main = {"temp": temp, "feels_like": temp - 0.5, "humidity": 60, "pressure": 1013}
    if temp_min is not None:
        main["temp_min"] = temp_min
    if temp_max is not None:
        main["temp_max"] = temp_max
    if conditions is None:
        conditions = [{"id": 802, "main": "Clouds", "description": description, "icon": icon}]
    return {
        "coord": {"lon": 139.6917, "lat": 35.6895},
        "weather": conditions,
        "base": "stations",
        "main": main,
        "visibility": 10000,
        "wind": {"speed": 3.5, "deg": 180},
        "clouds": {"all": 40},
        "dt": FORECAST_START,
        "sys": {"country": "JP", "sunrise": FORECAST_START - 3600, "sunset": FORECAST_START + 3600},
        "timezone": 0,
        "id": 1850147,
        "name": city,
        "cod": 200,
    }


def build_forecast_step(
    dt: int,
    temp: float = 22.0,
    temp_min: float | None = None,
    temp_max: float | None = None,
    icon: str = "03d",
    description: str = "scattered clouds",
    conditions: list[dict] | None = None,
) -> dict:
    if conditions is None:
        conditions = [{"id": 802, "main": "Clouds", "description": description, "icon": icon}]
    return {
        "dt": dt,
        "main": {
            "temp": temp,
            "feels_like": temp - 0.5,
            "temp_min": temp if temp_min is None else temp_min,
            "temp_max": temp if temp_max is None else temp_max,
            "pressure": 1012,
            "sea_level": 1012,
            "humidity": 55,
        },
        "weather": conditions,
        "clouds": {"all": 40},
        "wind": {"speed": 4.1, "deg": 200, "gust": 6.0},
        "visibility": 10000,
        "pop": 0.2,
        "sys": {"pod": "d"},
        "dt_txt": datetime.fromtimestamp(dt, UTC).strftime("%Y-%m-%d %H:%M:%S"),
    }


def build_forecast_payload(
    city: str = "Tokyo",
    steps: list[dict] | None = None,
    step_count: int = 40,
    timezone_offset: int = 0,
) -> dict:
    if steps is None:
        steps = [
            build_forecast_step(FORECAST_START + i * STEP_SECONDS, temp=22.0 + (i % 3) - 1)
            for i in range(step_count)
        ]
    return {
        "cod": "200",
        "message": 0,
        "cnt": len(steps),
        "list": steps,
        "city": {
            "id": 1850147,
            "name": city,
            "coord": {"lat": 35.6895, "lon": 139.6917},
            "country": "JP",
            "population": 12445327,
            "timezone": timezone_offset,
            "sunrise": FORECAST_START - 3600,
            "sunset": FORECAST_START + 3600,
        },
    }


class FakeOpenWeather:
    """In-memory OpenWeatherMap used through httpx.MockTransport."""

    def __init__(self):
        self.current: dict[str, dict] = {}
        self.forecast: dict[str, dict] = {}
        self.failures: dict[tuple[str, str], httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add_city(self, city: str) -> None:
        self.current[city_key(city)] = build_current_payload(city)
        self.forecast[city_key(city)] = build_forecast_payload(city)

    def fail(self, endpoint: str, city: str, outcome: httpx.Response | Exception) -> None:
        self.failures[(endpoint, city_key(city))] = outcome

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 1)[-1]
        key = city_key(request.url.params.get("q", ""))

        failure = self.failures.get((endpoint, key))
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return failure

        source = self.current if endpoint == "weather" else self.forecast
        if key not in source:
            return httpx.Response(404, json={"cod": "404", "message": "city not found"})
        return httpx.Response(200, json=source[key])


class FakeFetcher:
    """WeatherFetcher double returning decoded records per city."""

    def __init__(self):
        self.current: dict[str, CurrentWeather] = {}
        self.forecast: dict[str, ForecastBundle] = {}
        self.errors: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str, object]] = []

    def add_city(self, city: str, current: dict | None = None, forecast: dict | None = None) -> None:
        self.current[city_key(city)] = CurrentWeather.model_validate(current or build_current_payload(city))
        self.forecast[city_key(city)] = ForecastBundle.model_validate(forecast or build_forecast_payload(city))

    def fail(self, endpoint: str, city: str, error: Exception) -> None:
        self.errors[(endpoint, city_key(city))] = error

    def clear_failures(self) -> None:
        self.errors.clear()

    def _lookup(self, endpoint: str, city: str, units, records: dict):
        self.calls.append((endpoint, city, units))
        key = city_key(city)
        if (endpoint, key) in self.errors:
            raise self.errors[(endpoint, key)]
        if key not in records:
            raise WeatherRemoteException("city not found", status_code=404)
        return records[key]

    async def fetch_current(self, city, units=None):
        return self._lookup("weather", city, units, self.current)

    async def fetch_forecast(self, city, units=None):
        return self._lookup("forecast", city, units, self.forecast)


@pytest.fixture
def current_payload():
    """OpenWeatherMap /weather response for Tokyo."""
    return build_current_payload()


@pytest.fixture
def forecast_payload():
    """OpenWeatherMap /forecast response for Tokyo (40 steps, UTC)."""
    return build_forecast_payload()


@pytest.fixture
def fake_openweather():
    provider = FakeOpenWeather()
    provider.add_city("Tokyo")
    provider.add_city("Paris")
    return provider


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated from the developer's .env file."""
    return Settings(
        api_host="127.0.0.1",
        api_port=8000,
        service_api_key=SERVICE_API_KEY,
        trusted_hosts="testserver,localhost",
        cors_origins="http://localhost:8000",
        rate_limit_default="1000/minute",
        weather_api_key="test-weather-key",
        weather_base_url="https://api.openweathermap.test/data/2.5/",
        cities_file=tmp_path / "cities.json",
        load_on_startup=False,
        refresh_enabled=False,
        refresh_interval_seconds=60,
        log_level="DEBUG",
    )


@pytest.fixture
def mock_http_client(fake_openweather):
    """httpx.AsyncClient answering from the fake provider."""
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_openweather.handler))


@pytest.fixture
def app(test_settings, fake_openweather):
    return create_app(test_settings, transport=httpx.MockTransport(fake_openweather.handler))


@pytest.fixture
def test_client(app):
    """FastAPI test client with lifespan context and auth header."""
    with TestClient(app, headers={"Authorization": f"Bearer {SERVICE_API_KEY}"}) as client:
        yield client
