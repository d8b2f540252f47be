"""Unit tests for state managers."""

import asyncio

import pytest

from breezy_weather.models.views import CityWeatherView
from breezy_weather.state_managers import CityWeatherStore


def _view(city: str, temperature: str = "22°") -> CityWeatherView:
    return CityWeatherView(
        city=city,
        temperature=temperature,
        condition="Clear sky",
        high_low="18° / 25°",
        icon="sun.max.fill",
        hourly=[],
        daily=[],
    )


@pytest.mark.asyncio
async def test_store_starts_empty():
    """Test a fresh store has no views or errors."""
    store = CityWeatherStore()
    await store.initialize()

    assert await store.get_view("Tokyo") is None
    assert await store.get_error("Tokyo") is None
    assert await store.stats() == {"views": 0, "errors": 0}


@pytest.mark.asyncio
async def test_set_view_is_case_insensitive():
    """Test views are looked up by city key."""
    store = CityWeatherStore()

    await store.set_view("Tokyo", _view("Tokyo"))

    assert await store.get_view("tokyo") == _view("Tokyo")


@pytest.mark.asyncio
async def test_record_error_keeps_previous_view():
    """Test a failure is recorded next to the last good view."""
    store = CityWeatherStore()
    await store.set_view("Paris", _view("Paris"))

    await store.record_error("Paris", "city not found")

    assert await store.get_view("Paris") == _view("Paris")
    assert await store.get_error("Paris") == "city not found"


@pytest.mark.asyncio
async def test_set_view_clears_error():
    """Test a successful refresh clears the previous error."""
    store = CityWeatherStore()
    await store.record_error("Paris", "timeout")

    await store.set_view("Paris", _view("Paris", "19°"))

    assert await store.get_error("Paris") is None
    assert (await store.get_view("Paris")).temperature == "19°"


@pytest.mark.asyncio
async def test_snapshot_follows_requested_order():
    """Test snapshot lists cities in the given order, including unknown ones."""
    store = CityWeatherStore()
    await store.set_view("Tokyo", _view("Tokyo"))
    await store.record_error("Paris", "timeout")

    statuses = await store.snapshot(["Paris", "Tokyo", "Lima"])

    assert [status.city for status in statuses] == ["Paris", "Tokyo", "Lima"]
    assert statuses[0].weather is None and statuses[0].error == "timeout"
    assert statuses[1].weather == _view("Tokyo") and statuses[1].error is None
    assert statuses[2].weather is None and statuses[2].error is None


@pytest.mark.asyncio
async def test_remove_and_cleanup():
    """Test remove drops one city and cleanup drops everything."""
    store = CityWeatherStore()
    await store.set_view("Tokyo", _view("Tokyo"))
    await store.set_view("Paris", _view("Paris"))
    await store.record_error("Lima", "timeout")

    await store.remove("TOKYO")
    assert await store.get_view("Tokyo") is None
    assert await store.stats() == {"views": 1, "errors": 1}

    await store.cleanup()
    assert await store.stats() == {"views": 0, "errors": 0}


@pytest.mark.asyncio
async def test_concurrent_writes():
    """Test concurrent updates for different cities all land."""
    store = CityWeatherStore()
    cities = [f"City {i}" for i in range(20)]

    await asyncio.gather(*(store.set_view(city, _view(city)) for city in cities))

    assert await store.stats() == {"views": 20, "errors": 0}
