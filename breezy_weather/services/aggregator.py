"""Mapping of current weather + forecast records into per-city display models.

Everything here is pure: the same inputs always produce an equal
CityWeatherView.

Temperatures are truncated toward zero before the degree mark is added
(``1.9 -> "1°"``, ``-0.7 -> "0°"``).
"""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone, tzinfo

from breezy_weather.models.views import CityWeatherView, DailyView, HourlyView
from breezy_weather.models.weather import CurrentWeather, ForecastBundle, ForecastStep, WeatherCondition

HOURLY_STEPS = 8  # 8 x 3h = next 24 hours
DAILY_LIMIT = 7

DEGREE = "°"
CONDITION_PLACEHOLDER = "—"
HIGH_LOW_PLACEHOLDER = "-- / --"

DEFAULT_ICON = "cloud.fill"
ICON_MAP: dict[str, str] = {
    "01d": "sun.max.fill",
    "01n": "moon.fill",
    "02d": "cloud.sun.fill",
    "02n": "cloud.moon.fill",
    "03d": "cloud.fill",
    "03n": "cloud.fill",
    "04d": "cloud.fill",
    "04n": "cloud.fill",
    "09d": "cloud.drizzle.fill",
    "09n": "cloud.drizzle.fill",
    "10d": "cloud.rain.fill",
    "10n": "cloud.rain.fill",
    "11d": "cloud.bolt.rain.fill",
    "11n": "cloud.bolt.rain.fill",
    "13d": "snow",
    "13n": "snow",
    "50d": "cloud.fog.fill",
    "50n": "cloud.fog.fill",
}

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def format_temperature(value: float) -> str:
    """Temperature label, truncated toward zero: ``22.7 -> "22°"``."""
    return f"{int(value)}{DEGREE}"


def map_icon(code: str) -> str:
    """Map an OpenWeatherMap icon code to a display icon identifier."""
    return ICON_MAP.get(code, DEFAULT_ICON)


def hour_label(moment: datetime) -> str:
    """12-hour clock label without minutes: ``"12AM"``, ``"3PM"``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}{suffix}"


def day_label(day: date) -> str:
    return WEEKDAY_LABELS[day.weekday()]


def capitalize_first(text: str) -> str:
    """Upper-case the first character only: ``"scattered clouds" -> "Scattered clouds"``."""
    return text[:1].upper() + text[1:]


def city_timezone(forecast: ForecastBundle) -> tzinfo:
    """Fixed-offset timezone of the forecast's city."""
    return timezone(timedelta(seconds=forecast.city.timezone))


def _primary(conditions: Sequence[WeatherCondition]) -> WeatherCondition | None:
    return conditions[0] if conditions else None


def _primary_icon(step: ForecastStep) -> str:
    condition = _primary(step.weather)
    return condition.icon if condition else ""


def _local(timestamp: int, tz: tzinfo) -> datetime:
    return datetime.fromtimestamp(timestamp, tz)


def build_hourly(steps: Sequence[ForecastStep], tz: tzinfo) -> list[HourlyView]:
    """First eight steps in their original order."""
    return [
        HourlyView(
            hour_label=hour_label(_local(step.dt, tz)),
            temperature=format_temperature(step.main.temp),
            icon=map_icon(_primary_icon(step)),
        )
        for step in steps[:HOURLY_STEPS]
    ]


def build_daily(steps: Sequence[ForecastStep], tz: tzinfo) -> list[DailyView]:
    """Group steps by local calendar day, earliest days first, at most seven."""
    by_day: dict[date, list[ForecastStep]] = defaultdict(list)
    for step in steps:
        by_day[_local(step.dt, tz).date()].append(step)

    daily = []
    for day in sorted(by_day)[:DAILY_LIMIT]:
        group = by_day[day]
        daily.append(
            DailyView(
                day_label=day_label(day),
                min_temperature=format_temperature(min(step.main.temp_min for step in group)),
                max_temperature=format_temperature(max(step.main.temp_max for step in group)),
                icon=map_icon(_primary_icon(group[0])),
            )
        )
    return daily


def _header_condition(current: CurrentWeather, forecast: ForecastBundle) -> WeatherCondition | None:
    condition = _primary(current.weather)
    if condition is None and forecast.steps:
        condition = _primary(forecast.steps[0].weather)
    return condition


def rain_chance(forecast: ForecastBundle) -> int | None:
    """Probability of precipitation of the first forecast step, in percent."""
    if not forecast.steps or forecast.steps[0].pop is None:
        return None
    return round(forecast.steps[0].pop * 100)


def _high_low(current: CurrentWeather, forecast: ForecastBundle) -> str:
    low, high = current.main.temp_min, current.main.temp_max
    if low is not None and high is not None:
        return f"{format_temperature(low)} / {format_temperature(high)}"
    if forecast.steps:
        first = forecast.steps[0].main
        return f"{format_temperature(first.temp_min)} / {format_temperature(first.temp_max)}"
    return HIGH_LOW_PLACEHOLDER


def aggregate(
    current: CurrentWeather,
    forecast: ForecastBundle,
    *,
    city: str | None = None,
    tz: tzinfo | None = None,
) -> CityWeatherView:
    """Combine current weather and forecast into a CityWeatherView.

    Args:
        current: Decoded current-weather record
        forecast: Decoded 5-day / 3-hour forecast
        city: Name to put on the view (defaults to the provider's city name)
        tz: Timezone for hour and day labels (defaults to the city's offset)

    Returns:
        Display model with the header metrics and up to 8 hourly and 7 daily entries
    """
    tz = tz or city_timezone(forecast)
    condition = _header_condition(current, forecast)

    return CityWeatherView(
        city=city or current.name,
        temperature=format_temperature(current.main.temp),
        condition=capitalize_first(condition.description) if condition else CONDITION_PLACEHOLDER,
        high_low=_high_low(current, forecast),
        icon=map_icon(condition.icon if condition else ""),
        wind_speed=current.wind.speed if current.wind else None,
        humidity=current.main.humidity,
        rain_chance=rain_chance(forecast),
        hourly=build_hourly(forecast.steps, tz),
        daily=build_daily(forecast.steps, tz),
    )
