"""Compiled-in default location used when nothing is persisted."""

from weathernow.config.schema import LocationConfig
from weathernow.models.location import LocationMatch

DEFAULT_LOCATION_CONFIG = LocationConfig(
    id="5391959",
    name="San Francisco",
    admin1="California",
    country="United States",
    latitude=37.7749,
    longitude=-122.4194,
    timezone="America/Los_Angeles",
)


def location_from_config(cfg: LocationConfig) -> LocationMatch:
    return LocationMatch.from_dict(cfg.model_dump())


DEFAULT_LOCATION: LocationMatch = location_from_config(DEFAULT_LOCATION_CONFIG)
