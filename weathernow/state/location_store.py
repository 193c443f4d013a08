"""Selected location with best-effort persistence."""

import dataclasses
import json
import logging
from collections.abc import Callable

from weathernow.config.defaults import DEFAULT_LOCATION
from weathernow.errors import PersistenceFailure
from weathernow.models.location import LocationMatch
from weathernow.storage.preference_store import PreferenceStore

logger = logging.getLogger(__name__)

SELECTED_LOCATION_KEY = "selectedLocation"
SEARCH_TERM_KEY = "searchTerm"

LocationListener = Callable[[LocationMatch], None]


class LocationStore:
    """Owns the selected location and publishes every explicit selection.

    Storage is optional: with no preference store (storage disabled) the
    default location is used and saves are skipped.
    """

    def __init__(
        self,
        store: PreferenceStore | None,
        default: LocationMatch = DEFAULT_LOCATION,
    ):
        self._store = store
        self.default = default
        self._listeners: list[LocationListener] = []
        self.current: LocationMatch = self.load()

    def load(self) -> LocationMatch:
        """Return the persisted location, or the default on absence or corruption."""
        if self._store is None:
            return self.default
        try:
            saved = self._store.load(SELECTED_LOCATION_KEY)
            if saved:
                return LocationMatch.from_dict(json.loads(saved))
        except (PersistenceFailure, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load saved location: %s", e)
        return self.default

    def load_search_term(self) -> str:
        if self._store is not None:
            try:
                saved = self._store.load(SEARCH_TERM_KEY)
                if saved:
                    return saved
            except PersistenceFailure as e:
                logger.error("Failed to load saved search term: %s", e)
        return self.default.search_term

    def save(self, location: LocationMatch, search_term: str | None = None) -> bool:
        """Persist the location (and search text). Returns False if storage failed."""
        if self._store is None:
            logger.debug("No preference store, skipping save of %s", location.name)
            return False
        values = {SELECTED_LOCATION_KEY: json.dumps(location.to_dict())}
        if search_term is not None:
            values[SEARCH_TERM_KEY] = search_term
        try:
            self._store.save_many(values)
        except PersistenceFailure as e:
            logger.error("Failed to save location: %s", e)
            return False
        return True

    def subscribe(self, listener: LocationListener) -> None:
        self._listeners.append(listener)

    def select(self, location: LocationMatch) -> LocationMatch:
        """Make ``location`` current and publish a fresh copy of it.

        A copy is published even when it equals the current location, so
        re-selecting the same place restarts downstream work.
        """
        selected = dataclasses.replace(location)
        self.current = selected
        logger.info("Selected location %s (%s)", selected.search_term, selected.id)
        for listener in list(self._listeners):
            listener(selected)
        return selected
