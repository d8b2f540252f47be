"""City management routes."""

from fastapi import APIRouter, Depends, Response, status

from breezy_weather.dependencies import get_city_weather_service
from breezy_weather.models import AddCityRequest, CityListResponse, CityWeatherStatus, FocusCityRequest
from breezy_weather.security import verify_api_key
from breezy_weather.services.city_weather_service import CityWeatherService

router = APIRouter(dependencies=[Depends(verify_api_key)])


def _city_list(service: CityWeatherService) -> CityListResponse:
    return CityListResponse(cities=service.registry.list(), focused_city=service.focused_city)


@router.get("", response_model=CityListResponse, summary="Tracked cities")
async def list_cities(service: CityWeatherService = Depends(get_city_weather_service)):
    return _city_list(service)


@router.post(
    "",
    response_model=CityWeatherStatus,
    status_code=status.HTTP_201_CREATED,
    summary="Track a city",
    responses={
        400: {"description": "Empty city name"},
        409: {"description": "City already tracked (case-insensitive)"},
    },
)
async def add_city(body: AddCityRequest, service: CityWeatherService = Depends(get_city_weather_service)):
    """Track a city and load its weather.

    The city is tracked even if the first fetch fails; the failure is
    reported in `error` and retried on the next refresh.
    """
    return await service.add_city(body.name)


@router.delete(
    "/{city}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Stop tracking a city",
    responses={404: {"description": "City not tracked"}},
)
async def remove_city(city: str, service: CityWeatherService = Depends(get_city_weather_service)):
    await service.remove_city(city)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/focus", response_model=CityListResponse, summary="Choose the city refreshed periodically")
async def focus_city(body: FocusCityRequest, service: CityWeatherService = Depends(get_city_weather_service)):
    service.focus(body.name)
    return _city_list(service)
