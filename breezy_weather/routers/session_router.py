"""Session routes driven by the device's location permission."""

from fastapi import APIRouter, Depends

from breezy_weather.dependencies import get_city_weather_service, get_session_gate
from breezy_weather.models import LocationSignalRequest, SessionResponse
from breezy_weather.security import verify_api_key
from breezy_weather.services.city_weather_service import CityWeatherService
from breezy_weather.session import SessionGate

router = APIRouter(dependencies=[Depends(verify_api_key)])


def _session_response(gate: SessionGate) -> SessionResponse:
    return SessionResponse(
        state=gate.state.value,
        authorization=gate.authorization.value,
        user_city=gate.user_city,
    )


@router.get("", response_model=SessionResponse, summary="Current session state")
async def get_session(gate: SessionGate = Depends(get_session_gate)):
    return _session_response(gate)


@router.post("/location", response_model=SessionResponse, summary="Report location permission")
async def report_location(
    body: LocationSignalRequest,
    gate: SessionGate = Depends(get_session_gate),
    service: CityWeatherService = Depends(get_city_weather_service),
):
    """Update the session from a permission signal.

    When permission is granted and a city was resolved, that city is tracked
    (if it isn't already) and its weather loaded.
    """
    await service.handle_location_signal(gate, body.permission, body.city)
    return _session_response(gate)
