"""Failure taxonomy for the dashboard core.

Empty queries and zero-match searches are outcomes, not exceptions; they
surface as the ``no-results`` search status.
"""


class NetworkFailure(Exception):
    """Transport or parse failure talking to a remote adapter."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GeocodeError(NetworkFailure):
    """Raised when a location search cannot be completed."""


class ForecastError(NetworkFailure):
    """Raised when a forecast cannot be fetched or parsed."""


class PersistenceFailure(Exception):
    """Raised by the preference store when the underlying storage fails."""


class StaleCycle(Exception):
    """A completion belonging to a superseded cycle. Never surfaced."""
