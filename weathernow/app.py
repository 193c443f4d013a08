"""Dashboard application object: wires persistence, search, forecast and reload.

The presentation layer drives a WeatherDashboard (submit, select, switch
units, pick a day) and renders ``view()``. Everything below ``_mount``
is session state that ``reload()`` throws away and rebuilds from the
preference store, the way a page reload would.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from weathernow.config.defaults import DEFAULT_LOCATION_CONFIG, location_from_config
from weathernow.config.loader import default_config, load_config
from weathernow.config.schema import DashboardConfig
from weathernow.errors import PersistenceFailure
from weathernow.ingest.open_meteo_client import OpenMeteoClient
from weathernow.models.location import LocationMatch
from weathernow.models.weather import Units, WeatherData
from weathernow.state.forecast_controller import (
    FetchForecast,
    ForecastController,
    ForecastStatus,
)
from weathernow.state.location_store import LocationStore
from weathernow.state.reload_timer import ReloadTimer
from weathernow.state.search_controller import Geocode, SearchController, SearchStatus
from weathernow.storage.preference_store import PreferenceStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


@dataclass(frozen=True)
class DashboardView:
    """Everything a renderer needs for one frame."""

    location: LocationMatch
    units: Units
    query: str
    search_status: SearchStatus
    search_error: str | None
    results: list[LocationMatch]
    forecast_status: ForecastStatus
    forecast_error: str | None
    weather: WeatherData | None
    selected_day: str | None

    @property
    def forecast_visible(self) -> bool:
        # A failed-to-match search hides whatever forecast state remains.
        return self.search_status != SearchStatus.NO_RESULTS

    @property
    def day_options(self) -> list[str]:
        return list(self.weather.day_order) if self.weather else []


class WeatherDashboard:
    def __init__(
        self,
        config: DashboardConfig,
        geocode: Geocode,
        fetch_forecast: FetchForecast,
        store: PreferenceStore | None = None,
    ):
        self.config = config
        self._geocode = geocode
        self._fetch_forecast = fetch_forecast
        self._store = store
        self._client: OpenMeteoClient | None = None
        self._default_location = location_from_config(
            config.default_location or DEFAULT_LOCATION_CONFIG
        )
        self.reload_timer = ReloadTimer(
            self.reload, interval=config.timing.reload_interval_ms / 1000
        )
        self.locations: LocationStore | None = None
        self.forecast: ForecastController | None = None
        self.search: SearchController | None = None

    @classmethod
    def from_config(cls, config: DashboardConfig) -> "WeatherDashboard":
        """Build a dashboard talking to Open-Meteo and persisting to SQLite."""
        client = OpenMeteoClient(
            geocoding_base_url=config.api.geocoding_base_url,
            forecast_base_url=config.api.forecast_base_url,
            timeout=config.api.timeout_seconds,
            max_retries=config.api.max_retries,
            retry_base_delay=config.api.retry_base_delay,
            max_results=config.api.max_search_results,
            forecast_days=config.forecast.forecast_days,
        )
        try:
            store = PreferenceStore.open(config.storage.db_path)
        except PersistenceFailure as e:
            logger.error("Preference storage unavailable, selections won't persist: %s", e)
            store = None
        dashboard = cls(config, client.geocode, client.fetch_forecast, store)
        dashboard._client = client
        return dashboard

    @classmethod
    def from_file(cls, path: str | Path | None = None) -> "WeatherDashboard":
        """Like ``from_config``, reading a YAML file (built-in defaults if None)."""
        config = load_config(path) if path is not None else default_config()
        return cls.from_config(config)

    # --- Lifecycle ---

    async def start(self) -> None:
        self._mount()
        self.reload_timer.start()

    async def reload(self) -> None:
        """Discard all session state and rebuild it from persisted preferences."""
        self._unmount()
        self._mount()

    async def close(self) -> None:
        self.reload_timer.stop()
        if self.forecast is not None:
            await self.forecast.close()
        if self._client is not None:
            await self._client.aclose()
        if self._store is not None:
            self._store.close()

    def _mount(self) -> None:
        self.locations = LocationStore(self._store, default=self._default_location)
        self.forecast = ForecastController(
            self._fetch_forecast,
            units=self.config.forecast.units,
            refresh_interval=self.config.timing.refresh_interval_ms / 1000,
        )
        self.search = SearchController(self._geocode, self.locations, self.forecast)
        self.locations.subscribe(self.forecast.set_location)
        self.forecast.start(self.locations.current)

    def _unmount(self) -> None:
        if self.forecast is not None:
            self.forecast.stop()

    # --- User actions ---

    async def submit_search(self, query: str | None = None) -> list[LocationMatch]:
        return await self._require(self.search).submit(query)

    def select_location(self, location: LocationMatch) -> LocationMatch:
        return self._require(self.search).select_result(location)

    def retry(self) -> LocationMatch:
        """Re-select the current location, restarting its forecast cycle."""
        return self.select_location(self._require(self.locations).current)

    def set_units(self, units: Units | str) -> None:
        self._require(self.forecast).set_units(Units(units))

    def select_day(self, day: str) -> None:
        self._require(self.forecast).select_day(day)

    def view(self) -> DashboardView:
        locations = self._require(self.locations)
        forecast = self._require(self.forecast)
        search = self._require(self.search)
        return DashboardView(
            location=locations.current,
            units=forecast.units,
            query=search.query,
            search_status=search.status,
            search_error=search.error,
            results=list(search.results),
            forecast_status=forecast.status,
            forecast_error=forecast.error,
            weather=forecast.data,
            selected_day=forecast.selected_day,
        )

    @staticmethod
    def _require(component: T | None) -> T:
        if component is None:
            raise RuntimeError("Dashboard not started; call start() first")
        return component
