"""Display models derived from provider records."""

from pydantic import BaseModel, ConfigDict, Field


class HourlyView(BaseModel):
    """One entry of the next-24-hours strip."""

    model_config = ConfigDict(frozen=True)

    hour_label: str = Field(..., description="Local hour, e.g. '2PM'")
    temperature: str = Field(..., description="Temperature label, e.g. '23°'")
    icon: str


class DailyView(BaseModel):
    """One entry of the daily outlook."""

    model_config = ConfigDict(frozen=True)

    day_label: str = Field(..., description="Abbreviated weekday, e.g. 'Mon'")
    min_temperature: str
    max_temperature: str
    icon: str


class CityWeatherView(BaseModel):
    """Aggregated per-city display model. Replaced whole on every refresh."""

    model_config = ConfigDict(frozen=True)

    city: str
    temperature: str
    condition: str
    high_low: str
    icon: str
    wind_speed: float | None = Field(default=None, description="m/s for metric and standard, mph for imperial")
    humidity: int | None = Field(default=None, description="Relative humidity in percent")
    rain_chance: int | None = Field(default=None, description="Precipitation probability of the next step, percent")
    hourly: list[HourlyView]
    daily: list[DailyView]


class CityWeatherStatus(BaseModel):
    """A tracked city with its latest display model and last error, if any."""

    city: str
    weather: CityWeatherView | None = None
    error: str | None = None


class CitiesWeatherResponse(BaseModel):
    """All tracked cities in registry order."""

    cities: list[CityWeatherStatus]
    focused_city: str | None = None
