"""Forecast payload models. A WeatherData is replaced wholesale per fetch."""

from dataclasses import dataclass
from enum import StrEnum

from weathernow.models.location import LocationMatch


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


@dataclass(frozen=True)
class UnitLabels:
    temperature: str
    wind: str
    precipitation: str

    @classmethod
    def for_units(cls, units: Units) -> "UnitLabels":
        if units == Units.IMPERIAL:
            return cls(temperature="°F", wind="mph", precipitation="in")
        return cls(temperature="°C", wind="km/h", precipitation="mm")


@dataclass(frozen=True)
class CurrentConditions:
    temperature: float
    apparent_temperature: float
    humidity: int
    wind_speed: float
    precipitation: float
    icon: str
    label: str
    observation_time: str  # ISO local time at the location


@dataclass(frozen=True)
class DailyForecast:
    date: str  # YYYY-MM-DD
    high: float
    low: float
    icon: str
    label: str


@dataclass(frozen=True)
class HourlyForecastPoint:
    time: str
    hour_label: str  # e.g. "3 PM"
    temperature: float
    icon: str
    label: str


@dataclass(frozen=True)
class WeatherData:
    location: LocationMatch
    current: CurrentConditions
    daily: list[DailyForecast]
    hourly_by_day: dict[str, list[HourlyForecastPoint]]
    day_order: list[str]  # chronological day keys
    units: Units
    unit_labels: UnitLabels
