"""Shared test fixtures."""

import asyncio
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import yaml

from weathernow.config.defaults import DEFAULT_LOCATION
from weathernow.config.loader import default_config
from weathernow.config.schema import DashboardConfig
from weathernow.models.location import LocationMatch
from weathernow.models.weather import (
    CurrentConditions,
    DailyForecast,
    HourlyForecastPoint,
    UnitLabels,
    Units,
    WeatherData,
)
from weathernow.storage.preference_store import PreferenceStore


class FakeRemote:
    """Async stand-in for a remote adapter.

    Each call parks on a future until the test answers it with ``respond``
    (a value or an exception), so tests decide completion order.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self._futures: list[asyncio.Future] = []

    async def __call__(self, *args):
        fut = asyncio.get_running_loop().create_future()
        self.calls.append(args)
        self._futures.append(fut)
        return await fut

    def respond(self, index: int, result) -> None:
        fut = self._futures[index]
        if isinstance(result, BaseException):
            fut.set_exception(result)
        else:
            fut.set_result(result)

    def respond_all(self, result) -> None:
        for fut in self._futures:
            if not fut.done():
                if isinstance(result, BaseException):
                    fut.set_exception(result)
                else:
                    fut.set_result(result)

    async def wait_for_calls(self, count: int, timeout: float = 2.0) -> None:
        async def _poll() -> None:
            while len(self.calls) < count:
                await asyncio.sleep(0.001)

        await asyncio.wait_for(_poll(), timeout)


async def settle(rounds: int = 5) -> None:
    """Let ready callbacks and tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def forecast_api() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def geocoder() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def settle_loop() -> Callable:
    return settle


@pytest.fixture
def paris() -> LocationMatch:
    return LocationMatch(
        id="2988507",
        name="Paris",
        admin1="Île-de-France",
        country="France",
        latitude=48.85341,
        longitude=2.3488,
        timezone="Europe/Paris",
    )


@pytest.fixture
def paris_texas() -> LocationMatch:
    return LocationMatch(
        id="4717560",
        name="Paris",
        admin1="Texas",
        country="United States",
        latitude=33.66094,
        longitude=-95.55551,
        timezone="America/Chicago",
    )


@pytest.fixture
def make_weather() -> Callable[..., WeatherData]:
    """Factory for WeatherData payloads with a given day order."""

    def _make(
        day_order: list[str],
        temperature: float = 18.0,
        location: LocationMatch = DEFAULT_LOCATION,
        units: Units = Units.METRIC,
    ) -> WeatherData:
        current = CurrentConditions(
            temperature=temperature,
            apparent_temperature=temperature - 1,
            humidity=60,
            wind_speed=12.0,
            precipitation=0.0,
            icon="/assets/images/icon-sunny.webp",
            label="Clear sky",
            observation_time=f"{day_order[0]}T12:00" if day_order else "",
        )
        daily = [
            DailyForecast(date=d, high=temperature + 3, low=temperature - 5,
                          icon="/assets/images/icon-sunny.webp", label="Clear sky")
            for d in day_order
        ]
        hourly = {
            d: [HourlyForecastPoint(time=f"{d}T12:00", hour_label="12 PM",
                                    temperature=temperature,
                                    icon="/assets/images/icon-sunny.webp",
                                    label="Clear sky")]
            for d in day_order
        }
        return WeatherData(
            location=location,
            current=current,
            daily=daily,
            hourly_by_day=hourly,
            day_order=list(day_order),
            units=units,
            unit_labels=UnitLabels.for_units(units),
        )

    return _make


@pytest.fixture
def memory_store() -> Iterator[PreferenceStore]:
    store = PreferenceStore.open(":memory:")
    yield store
    store.close()


@pytest.fixture
def dashboard_config(tmp_path: Path) -> DashboardConfig:
    """Default config with fast timers and a temp database."""
    config = default_config()
    return config.model_copy(
        update={
            "timing": config.timing.model_copy(
                update={"refresh_interval_ms": 10, "reload_interval_ms": 60000}
            ),
            "storage": config.storage.model_copy(
                update={"db_path": str(tmp_path / "weathernow.db")}
            ),
        }
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "timing": {"refresh_interval_ms": 1000, "reload_interval_ms": 60000},
        "forecast": {"units": "imperial"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
