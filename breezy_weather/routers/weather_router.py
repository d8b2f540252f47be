"""Weather API routes: aggregated per-city views and raw provider records."""

from fastapi import APIRouter, Depends, Query

from breezy_weather.dependencies import get_city_weather_service, get_weather_client
from breezy_weather.models import (
    CitiesWeatherResponse,
    CityWeatherStatus,
    CurrentWeather,
    ForecastBundle,
    Units,
    UnitsRequest,
    UnitsResponse,
)
from breezy_weather.security import verify_api_key
from breezy_weather.services.city_weather_service import CityWeatherService
from breezy_weather.services.weather_service import WeatherClient

router = APIRouter(dependencies=[Depends(verify_api_key)])


async def _cities_response(service: CityWeatherService) -> CitiesWeatherResponse:
    return CitiesWeatherResponse(cities=await service.snapshot(), focused_city=service.focused_city)


@router.get(
    "/cities",
    response_model=CitiesWeatherResponse,
    summary="Weather for all tracked cities",
    description="""
    Latest display model for every tracked city, in the order the cities were added.

    A city whose last refresh failed keeps its previous weather and reports the
    failure in `error`. No tracked cities yields an empty list.
    """,
)
async def list_city_weather(service: CityWeatherService = Depends(get_city_weather_service)):
    return await _cities_response(service)


@router.get("/cities/{city}", response_model=CityWeatherStatus, summary="Weather for one tracked city")
async def get_city_weather(city: str, service: CityWeatherService = Depends(get_city_weather_service)):
    return await service.status(city)


@router.post("/refresh", response_model=CitiesWeatherResponse, summary="Refresh all tracked cities")
async def refresh_all(service: CityWeatherService = Depends(get_city_weather_service)):
    """Refresh every tracked city; failures are reported per city."""
    await service.refresh_all()
    return await _cities_response(service)


@router.post("/cities/{city}/refresh", response_model=CityWeatherStatus, summary="Refresh one tracked city")
async def refresh_city(city: str, service: CityWeatherService = Depends(get_city_weather_service)):
    return await service.refresh_city(city)


@router.get(
    "/current",
    response_model=CurrentWeather,
    summary="Current weather record",
    responses={
        404: {"description": "Provider does not know the city"},
        502: {"description": "Provider response could not be decoded"},
        503: {"description": "Provider unreachable"},
    },
)
async def get_current(
    city: str = Query(..., min_length=1, description="City name"),
    units: Units | None = Query(default=None, description="Defaults to the configured units"),
    client: WeatherClient = Depends(get_weather_client),
    service: CityWeatherService = Depends(get_city_weather_service),
):
    """Decoded `/weather` record straight from the provider (not stored)."""
    return await client.fetch_current(city, units or service.units)


@router.get("/forecast", response_model=ForecastBundle, summary="5-day / 3-hour forecast record")
async def get_forecast(
    city: str = Query(..., min_length=1, description="City name"),
    units: Units | None = Query(default=None, description="Defaults to the configured units"),
    client: WeatherClient = Depends(get_weather_client),
    service: CityWeatherService = Depends(get_city_weather_service),
):
    """Decoded `/forecast` record straight from the provider (not stored)."""
    return await client.fetch_forecast(city, units or service.units)


@router.get("/units", response_model=UnitsResponse, summary="Units used for fetching")
async def get_units(service: CityWeatherService = Depends(get_city_weather_service)):
    return UnitsResponse(units=service.units)


@router.put("/units", response_model=UnitsResponse, summary="Change units and refresh all cities")
async def set_units(body: UnitsRequest, service: CityWeatherService = Depends(get_city_weather_service)):
    service.set_units(body.units)
    await service.refresh_all()
    return UnitsResponse(units=service.units)
