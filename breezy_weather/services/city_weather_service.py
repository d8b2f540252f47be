"""Per-city fetch-and-aggregate flow over the city registry."""

import asyncio

from breezy_weather.city_registry import CityRegistry, city_key, normalize_city
from breezy_weather.exceptions import (
    CityAlreadyTrackedException,
    CityNotFoundException,
    InvalidCityException,
    WeatherException,
)
from breezy_weather.logging_config import get_logger, log_with_context
from breezy_weather.models.views import CityWeatherStatus, CityWeatherView
from breezy_weather.models.weather import CurrentWeather, ForecastBundle, Units
from breezy_weather.protocols import WeatherFetcher
from breezy_weather.services.aggregator import aggregate
from breezy_weather.session import SessionGate, SessionState
from breezy_weather.state_managers import CityWeatherStore

logger = get_logger(__name__)


class CityWeatherService:
    """Keeps the per-city display models in sync with the registry.

    Every city is fetched independently: a failure for one city is recorded
    against that city only, and its previously stored view is kept.
    """

    def __init__(
        self,
        fetcher: WeatherFetcher,
        registry: CityRegistry,
        store: CityWeatherStore,
        units: Units = Units.METRIC,
    ):
        self._fetcher = fetcher
        self._registry = registry
        self._store = store
        self._units = units
        # Bumped on every units change; loads started under an older value are dropped
        self._units_generation = 0
        self._focused_key: str | None = None

    @property
    def registry(self) -> CityRegistry:
        return self._registry

    @property
    def units(self) -> Units:
        return self._units

    def set_units(self, units: Units) -> None:
        """Change the units used by subsequent fetches.

        Loads already in flight under the old units are discarded when they finish.
        """
        self._units = units
        self._units_generation += 1
        log_with_context(logger, "info", "Units changed", units=units.value, event_type="units_changed")

    @property
    def focused_city(self) -> str | None:
        """Focused city, falling back to the first tracked city."""
        if self._focused_key is not None:
            focused = self._registry.find(self._focused_key)
            if focused is not None:
                return focused
        cities = self._registry.list()
        return cities[0] if cities else None

    def focus(self, city: str) -> str:
        """Make ``city`` the one refreshed by the periodic loop.

        Raises:
            CityNotFoundException: If the city is not tracked
        """
        registered = self._registry.find(city)
        if registered is None:
            raise CityNotFoundException(normalize_city(city))
        self._focused_key = city_key(registered)
        return registered

    async def _fetch(self, city: str, units: Units) -> tuple[CurrentWeather, ForecastBundle]:
        current, forecast = await asyncio.gather(
            self._fetcher.fetch_current(city, units),
            self._fetcher.fetch_forecast(city, units),
            return_exceptions=True,
        )
        for outcome in (current, forecast):
            if isinstance(outcome, BaseException):
                raise outcome
        return current, forecast

    def _is_stale(self, city: str, generation: int) -> bool:
        stale = city not in self._registry or generation != self._units_generation
        if stale:
            log_with_context(
                logger,
                "debug",
                "Discarding outdated weather load",
                city=city,
                event_type="city_load_discarded",
            )
        return stale

    async def load_city(self, city: str) -> CityWeatherView | None:
        """Fetch, aggregate and store one city's weather.

        The outcome is discarded when, by the time the fetch finishes, the
        city is no longer tracked or the units have changed.

        Returns:
            The new view, or None if fetching failed (the error is recorded)
            or the outcome was discarded
        """
        units, generation = self._units, self._units_generation
        try:
            current, forecast = await self._fetch(city, units)
        except WeatherException as e:
            if self._is_stale(city, generation):
                return None
            log_with_context(
                logger,
                "warning",
                "Weather refresh failed",
                city=city,
                error_code=e.code.value,
                error=e.message,
                event_type="city_refresh_failed",
            )
            await self._store.record_error(city, e.message)
            return None

        if self._is_stale(city, generation):
            return None

        view = aggregate(current, forecast, city=city)
        await self._store.set_view(city, view)
        log_with_context(logger, "debug", "Weather refreshed", city=city, event_type="city_refreshed")
        return view

    async def refresh_all(self) -> dict[str, bool]:
        """Refresh every tracked city concurrently.

        Returns:
            Success flag per city; empty when no cities are tracked
        """
        cities = self._registry.list()
        if not cities:
            return {}

        views = await asyncio.gather(*(self.load_city(city) for city in cities))
        results = {city: view is not None for city, view in zip(cities, views)}
        log_with_context(
            logger,
            "info",
            "Refreshed all cities",
            total=len(results),
            failed=sum(1 for ok in results.values() if not ok),
            event_type="refresh_all",
        )
        return results

    async def refresh_city(self, city: str) -> CityWeatherStatus:
        """Refresh one tracked city and return its status.

        Raises:
            CityNotFoundException: If the city is not tracked
        """
        registered = self._registry.find(city)
        if registered is None:
            raise CityNotFoundException(normalize_city(city))
        await self.load_city(registered)
        return await self.status(registered)

    async def refresh_focused(self) -> CityWeatherView | None:
        """Refresh the focused city; no-op when nothing is tracked."""
        city = self.focused_city
        if city is None:
            return None
        return await self.load_city(city)

    async def add_city(self, name: str) -> CityWeatherStatus:
        """Track a city and load its weather.

        Raises:
            InvalidCityException: If the name is empty
            CityAlreadyTrackedException: If the city is already tracked
        """
        normalized = normalize_city(name)
        if not normalized:
            raise InvalidCityException()
        if not self._registry.add(normalized):
            raise CityAlreadyTrackedException(self._registry.find(normalized) or normalized)
        await self.load_city(normalized)
        return await self.status(normalized)

    async def remove_city(self, name: str) -> None:
        """Stop tracking a city and drop its stored weather.

        Raises:
            CityNotFoundException: If the city is not tracked
        """
        registered = self._registry.find(name)
        if registered is None or not self._registry.remove(registered):
            raise CityNotFoundException(normalize_city(name))
        await self._store.remove(registered)
        if self._focused_key == city_key(registered):
            self._focused_key = None

    async def status(self, city: str) -> CityWeatherStatus:
        """Status of a tracked city.

        Raises:
            CityNotFoundException: If the city is not tracked
        """
        registered = self._registry.find(city)
        if registered is None:
            raise CityNotFoundException(normalize_city(city))
        [status] = await self._store.snapshot([registered])
        return status

    async def snapshot(self) -> list[CityWeatherStatus]:
        """Status of every tracked city in registry order."""
        return await self._store.snapshot(self._registry.list())

    async def handle_location_signal(self, gate: SessionGate, permission: str, city: str | None = None) -> SessionState:
        """Feed a location signal into the gate; track the resolved city once ready."""
        state = gate.update(permission, city)
        user_city = gate.user_city
        if state is SessionState.READY and user_city and user_city not in self._registry:
            await self.add_city(user_city)
        return state
