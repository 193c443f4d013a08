"""Turn an Open-Meteo forecast response into a WeatherData payload."""

from datetime import datetime

from weathernow.models.location import LocationMatch
from weathernow.models.weather import (
    CurrentConditions,
    DailyForecast,
    HourlyForecastPoint,
    UnitLabels,
    Units,
    WeatherData,
)

ICON_PATH = "/assets/images/icon-{name}.webp"

# WMO weather interpretation codes, grouped.
_WEATHER_CODES: list[tuple[tuple[int, ...], str, str]] = [
    ((0,), "sunny", "Clear sky"),
    ((1, 2), "partly-cloudy", "Partly cloudy"),
    ((3,), "overcast", "Overcast"),
    ((45, 48), "fog", "Fog"),
    ((51, 53, 55, 56, 57), "drizzle", "Drizzle"),
    ((61, 63, 65, 66, 67, 80, 81, 82), "rain", "Rain"),
    ((71, 73, 75, 77, 85, 86), "snow", "Snow"),
    ((95, 96, 99), "storm", "Thunderstorm"),
]


def describe_weather_code(code: int | None) -> tuple[str, str]:
    """Return (icon, label) for a WMO code. Unknown codes map to overcast."""
    for codes, name, label in _WEATHER_CODES:
        if code in codes:
            return ICON_PATH.format(name=name), label
    return ICON_PATH.format(name="overcast"), "Unknown"


def hour_label(iso_time: str) -> str:
    """'2026-02-11T15:00' -> '3 PM'."""
    hour = datetime.fromisoformat(iso_time).hour
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12} {suffix}"


def parse_forecast(raw: dict, location: LocationMatch, units: Units) -> WeatherData:
    """Build WeatherData. Raises KeyError/TypeError/ValueError on a malformed payload."""
    current_raw = raw["current"]
    icon, label = describe_weather_code(current_raw.get("weather_code"))
    current = CurrentConditions(
        temperature=float(current_raw["temperature_2m"]),
        apparent_temperature=float(current_raw["apparent_temperature"]),
        humidity=int(current_raw["relative_humidity_2m"]),
        wind_speed=float(current_raw["wind_speed_10m"]),
        precipitation=float(current_raw.get("precipitation") or 0.0),
        icon=icon,
        label=label,
        observation_time=str(current_raw["time"]),
    )

    daily_raw = raw.get("daily") or {}
    daily: list[DailyForecast] = []
    for i, day in enumerate(daily_raw.get("time", [])):
        icon, label = describe_weather_code(daily_raw["weather_code"][i])
        daily.append(
            DailyForecast(
                date=str(day),
                high=float(daily_raw["temperature_2m_max"][i]),
                low=float(daily_raw["temperature_2m_min"][i]),
                icon=icon,
                label=label,
            )
        )

    hourly_raw = raw.get("hourly") or {}
    hourly_by_day: dict[str, list[HourlyForecastPoint]] = {}
    for i, ts in enumerate(hourly_raw.get("time", [])):
        icon, label = describe_weather_code(hourly_raw["weather_code"][i])
        hourly_by_day.setdefault(ts[:10], []).append(
            HourlyForecastPoint(
                time=ts,
                hour_label=hour_label(ts),
                temperature=float(hourly_raw["temperature_2m"][i]),
                icon=icon,
                label=label,
            )
        )

    if daily:
        day_order = [d.date for d in daily]
    else:
        day_order = sorted(hourly_by_day)
    for day in day_order:
        hourly_by_day.setdefault(day, [])

    return WeatherData(
        location=location,
        current=current,
        daily=daily,
        hourly_by_day=hourly_by_day,
        day_order=day_order,
        units=units,
        unit_labels=UnitLabels.for_units(units),
    )
