"""Ordered, case-insensitively unique list of tracked cities."""

from collections.abc import Iterable, Iterator

from breezy_weather.logging_config import get_logger, log_with_context
from breezy_weather.protocols import CityListStore

logger = get_logger(__name__)


def normalize_city(name: str) -> str:
    """Trim surrounding whitespace."""
    return name.strip()


def city_key(name: str) -> str:
    """Case-insensitive lookup key for a city name."""
    return normalize_city(name).casefold()


class CityRegistry:
    """Tracked city names in insertion order.

    Names are compared case-insensitively; the first spelling added wins.
    When a store is attached the list is saved after every change.
    """

    def __init__(self, cities: Iterable[str] = (), store: CityListStore | None = None):
        self._cities: list[str] = []
        self._store = store
        for name in cities:
            self._append(name)

    @classmethod
    def from_store(cls, store: CityListStore) -> "CityRegistry":
        """Build a registry from persisted names (duplicates and blanks dropped)."""
        return cls(store.load(), store=store)

    def _append(self, name: str) -> bool:
        normalized = normalize_city(name)
        if not normalized or self.find(normalized) is not None:
            return False
        self._cities.append(normalized)
        return True

    def _save(self) -> None:
        if self._store is not None:
            self._store.save(list(self._cities))

    def find(self, name: str) -> str | None:
        """Registered spelling of ``name``, or None if not tracked."""
        key = city_key(name)
        return next((city for city in self._cities if city.casefold() == key), None)

    def add(self, name: str) -> bool:
        """Track a city.

        Returns:
            False if the name is empty after trimming or already tracked
        """
        added = self._append(name)
        if added:
            self._save()
            log_with_context(logger, "info", "City added", city=normalize_city(name), event_type="city_added")
        return added

    def remove(self, name: str) -> bool:
        """Stop tracking a city. Returns whether it was tracked."""
        registered = self.find(name)
        if registered is None:
            return False
        self._cities.remove(registered)
        self._save()
        log_with_context(logger, "info", "City removed", city=registered, event_type="city_removed")
        return True

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __len__(self) -> int:
        return len(self._cities)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._cities))

    def list(self) -> list[str]:
        """Snapshot of tracked names in insertion order."""
        return list(self._cities)
