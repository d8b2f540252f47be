"""Protocol definitions for dependency injection."""

from typing import Protocol

from breezy_weather.models.weather import CurrentWeather, ForecastBundle, Units


class WeatherFetcher(Protocol):
    """Source of decoded weather records.

    Implemented by :class:`breezy_weather.services.weather_service.WeatherClient`;
    tests substitute an in-memory fake.
    """

    async def fetch_current(self, city: str, units: Units | None = None) -> CurrentWeather: ...

    async def fetch_forecast(self, city: str, units: Units | None = None) -> ForecastBundle: ...


class CityListStore(Protocol):
    """Persistence for the ordered list of tracked city names."""

    def load(self) -> list[str]: ...

    def save(self, cities: list[str]) -> None: ...
