"""Forecast state machine: one cycle per (location, units) pair.

A cycle issues one initial fetch, whose outcome is always visible
(loading, then ready or error), and then re-fetches silently on a fixed
period. Refresh results replace the payload and keep the selected day when
it still exists; refresh failures are dropped so a working view is never
disturbed.

Within a cycle at most one request is outstanding: the period is measured
from the end of the previous fetch, so a slow server delays refreshes
instead of stacking them up.

Every cycle carries a generation number. Completions compare their
generation with the controller's before touching state, so nothing from a
superseded cycle lands after a newer one has begun. Requests themselves
are never aborted; only their results are discarded.
"""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable, Coroutine
from enum import StrEnum
from typing import Any

from weathernow.errors import StaleCycle
from weathernow.models.location import LocationMatch
from weathernow.models.weather import Units, WeatherData
from weathernow.state.selection import SelectionState

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 1.0  # seconds
DEFAULT_ERROR_MESSAGE = "Unable to load forecast"

FetchForecast = Callable[[LocationMatch, Units], Awaitable[WeatherData]]


class ForecastStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class ForecastController:
    def __init__(
        self,
        fetch_forecast: FetchForecast,
        units: Units = Units.METRIC,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        selection: SelectionState | None = None,
    ):
        self._fetch_forecast = fetch_forecast
        self.units = units
        self.refresh_interval = refresh_interval
        self.selection = selection or SelectionState()

        self.status = ForecastStatus.IDLE
        self.error: str | None = None
        self.data: WeatherData | None = None
        self.location: LocationMatch | None = None

        self._generation = 0
        self._refresh_task: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def selected_day(self) -> str | None:
        return self.selection.selected_day

    @property
    def active(self) -> bool:
        return self._refresh_task is not None

    def select_day(self, day: str) -> None:
        self.selection.select_day(day)

    # --- Cycle control ---

    def start(self, location: LocationMatch, units: Units | None = None) -> None:
        """Tear down any running cycle and start a fresh one.

        Must be called from inside a running event loop. Status is
        ``loading`` by the time this returns.
        """
        self.stop()
        self.location = location
        if units is not None:
            self.units = units
        generation = self._generation

        logger.info(
            "Starting forecast cycle %d for %s (%s)",
            generation, location.search_term, self.units,
        )
        self.status = ForecastStatus.LOADING
        self.error = None
        initial = self._spawn(
            self._fetch(generation, location, self.units, auto_refresh=False)
        )
        self._refresh_task = asyncio.create_task(
            self._refresh_loop(generation, location, self.units, initial),
            name=f"weathernow-forecast-cycle-{generation}",
        )

    def set_location(self, location: LocationMatch) -> None:
        """Every explicit selection is a new cycle, even for an equal location."""
        self.start(location)

    def set_units(self, units: Units) -> None:
        if units == self.units:
            return
        self.units = units
        if self.location is not None:
            self.start(self.location)

    def stop(self) -> None:
        """End the current cycle. In-flight requests finish but are ignored."""
        self._generation += 1
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            self._refresh_task = None

    def clear(self) -> None:
        """Drop the forecast entirely and go back to idle."""
        self.stop()
        self.data = None
        self.error = None
        self.status = ForecastStatus.IDLE
        self.selection.clear()

    async def close(self) -> None:
        """Stop the cycle and wait for outstanding requests to settle."""
        task = self._refresh_task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    # --- Internals ---

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _refresh_loop(
        self,
        generation: int,
        location: LocationMatch,
        units: Units,
        initial: asyncio.Task,
    ) -> None:
        # asyncio.wait does not cancel the awaited fetch if this loop is
        # cancelled; teardown leaves it to finish and be discarded.
        pending = initial
        while True:
            await asyncio.wait({pending})
            if generation != self._generation:
                break
            await asyncio.sleep(self.refresh_interval)
            if generation != self._generation:
                break
            pending = self._spawn(
                self._fetch(generation, location, units, auto_refresh=True)
            )

    def _ensure_current(self, generation: int) -> None:
        if generation != self._generation:
            raise StaleCycle(
                f"response from cycle {generation} arrived during cycle {self._generation}"
            )

    async def _fetch(
        self,
        generation: int,
        location: LocationMatch,
        units: Units,
        auto_refresh: bool,
    ) -> None:
        if generation != self._generation:
            # torn down before the request went out
            return
        try:
            try:
                data = await self._fetch_forecast(location, units)
            except Exception as e:
                if auto_refresh:
                    logger.debug(
                        "Auto-refresh for %s failed, keeping last state: %s",
                        location.name, e,
                    )
                    return
                self._ensure_current(generation)
                logger.warning("Forecast for %s failed: %s", location.name, e)
                self.status = ForecastStatus.ERROR
                self.error = str(e) or DEFAULT_ERROR_MESSAGE
                return

            self._ensure_current(generation)
        except StaleCycle as e:
            logger.debug("Discarding forecast for %s: %s", location.name, e)
            return

        self.data = data
        if auto_refresh:
            self.selection.carry_over(data.day_order)
        else:
            self.selection.reset(data.day_order)
        self.error = None
        self.status = ForecastStatus.READY
