"""Request and response models for city and session endpoints."""

from pydantic import BaseModel, Field

from breezy_weather.models.weather import Units


class AddCityRequest(BaseModel):
    name: str = Field(..., description="City name as understood by OpenWeatherMap")


class FocusCityRequest(BaseModel):
    name: str


class CityListResponse(BaseModel):
    """Tracked cities in insertion order."""

    cities: list[str]
    focused_city: str | None = None


class UnitsRequest(BaseModel):
    units: Units


class UnitsResponse(BaseModel):
    units: Units


class LocationSignalRequest(BaseModel):
    """Location permission status reported by the device.

    ``permission`` is kept as a plain string so values introduced by newer
    OS releases are accepted and treated as not authorized.
    """

    permission: str = Field(..., description="e.g. 'authorized_when_in_use', 'denied'")
    city: str | None = Field(default=None, description="Resolved city when authorized")


class SessionResponse(BaseModel):
    state: str
    authorization: str
    user_city: str | None = None
