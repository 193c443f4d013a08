"""Location models returned by the geocoder and persisted as the selection."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LocationMatch:
    id: str
    name: str
    country: str
    latitude: float
    longitude: float
    timezone: str
    admin1: str | None = None

    @property
    def search_term(self) -> str:
        """Canonical search text for this location, e.g. "Paris, France"."""
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "admin1": self.admin1,
            "country": self.country,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timezone": self.timezone,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LocationMatch":
        """Build from a persisted or API dict. Raises KeyError/TypeError/ValueError on bad input."""
        if not isinstance(data, dict):
            raise TypeError(f"Expected a mapping, got {type(data).__name__}")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            admin1=data.get("admin1") or None,
            country=str(data.get("country") or ""),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            timezone=str(data.get("timezone") or "auto"),
        )
