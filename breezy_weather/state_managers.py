"""State managers for handling application-wide mutable state.

State is guarded by asyncio.Lock. All state managers inherit from
StateManager ABC.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Iterable

from breezy_weather.city_registry import city_key
from breezy_weather.models.views import CityWeatherStatus, CityWeatherView


class StateManager(ABC):
    """Base class for all state managers.

    Subclasses implement the lifecycle hooks called by the app lifespan.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class CityWeatherStore(StateManager):
    """Latest display model and last error per city.

    Views are frozen and only ever replaced whole, so readers never see a
    partially updated city. A failed refresh records an error and leaves
    the previous view in place.
    """

    def __init__(self):
        self._views: dict[str, CityWeatherView] = {}
        self._errors: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        pass

    async def cleanup(self) -> None:
        """Drop all cached views and errors."""
        async with self._lock:
            self._views.clear()
            self._errors.clear()

    async def get_view(self, city: str) -> CityWeatherView | None:
        async with self._lock:
            return self._views.get(city_key(city))

    async def get_error(self, city: str) -> str | None:
        async with self._lock:
            return self._errors.get(city_key(city))

    async def set_view(self, city: str, view: CityWeatherView) -> None:
        """Replace the city's view and clear its error."""
        key = city_key(city)
        async with self._lock:
            self._views[key] = view
            self._errors.pop(key, None)

    async def record_error(self, city: str, message: str) -> None:
        """Remember the latest failure for a city without touching its view."""
        async with self._lock:
            self._errors[city_key(city)] = message

    async def remove(self, city: str) -> None:
        key = city_key(city)
        async with self._lock:
            self._views.pop(key, None)
            self._errors.pop(key, None)

    async def snapshot(self, cities: Iterable[str]) -> list[CityWeatherStatus]:
        """Status of each city, in the order given, looked up by name."""
        async with self._lock:
            return [
                CityWeatherStatus(
                    city=city,
                    weather=self._views.get(city_key(city)),
                    error=self._errors.get(city_key(city)),
                )
                for city in cities
            ]

    async def stats(self) -> dict[str, int]:
        """Counts for the debug endpoint."""
        async with self._lock:
            return {"views": len(self._views), "errors": len(self._errors)}
