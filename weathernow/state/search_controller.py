"""Location search: query text, geocoding, result list and search status."""

import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum

from weathernow.models.location import LocationMatch
from weathernow.state.forecast_controller import ForecastController
from weathernow.state.location_store import LocationStore

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Unknown error"

Geocode = Callable[[str], Awaitable[list[LocationMatch]]]


class SearchStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    NO_RESULTS = "no-results"


class SearchController:
    """The only writer of search status.

    Matches are offered, never auto-selected; picking one is a separate
    call to ``select_result``. Editing ``query`` persists nothing.
    """

    def __init__(
        self,
        geocode: Geocode,
        locations: LocationStore,
        forecast: ForecastController,
        query: str | None = None,
    ):
        self._geocode = geocode
        self._locations = locations
        self._forecast = forecast
        self.query = query if query is not None else locations.load_search_term()
        self.results: list[LocationMatch] = []
        self.status = SearchStatus.IDLE
        self.error: str | None = None
        self._request_id = 0

    async def submit(self, query: str | None = None) -> list[LocationMatch]:
        """Geocode the query and publish matches. Returns the matches offered."""
        if query is not None:
            self.query = query
        text = self.query.strip()
        self._request_id += 1
        request_id = self._request_id
        self.results = []

        if not text:
            self.status = SearchStatus.NO_RESULTS
            self.error = None
            self._forecast.clear()
            return []

        self.status = SearchStatus.LOADING
        self.error = None
        try:
            matches = await self._geocode(text)
        except Exception as e:
            if request_id != self._request_id:
                logger.debug("Ignoring failed search %r, superseded", text)
                return []
            logger.warning("Search for %r failed: %s", text, e)
            self.status = SearchStatus.ERROR
            self.error = str(e) or DEFAULT_ERROR_MESSAGE
            self._forecast.clear()
            return []

        if request_id != self._request_id:
            logger.debug("Ignoring results for %r, superseded", text)
            return []

        if not matches:
            logger.info("No locations found for %r", text)
            self.status = SearchStatus.NO_RESULTS
            self._forecast.clear()
            return []

        self.results = list(matches)
        self.status = SearchStatus.IDLE
        logger.info("Search for %r returned %d matches", text, len(self.results))
        return self.results

    def select_result(self, location: LocationMatch) -> LocationMatch:
        """Select a location, rewrite the query to its canonical text and persist both."""
        self._request_id += 1
        selected = self._locations.select(location)
        self.results = []
        self.status = SearchStatus.IDLE
        self.error = None
        self.query = selected.search_term
        self._locations.save(selected, self.query)
        return selected
