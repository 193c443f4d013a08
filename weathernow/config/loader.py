"""YAML config loader."""

from pathlib import Path

import yaml

from weathernow.config.defaults import DEFAULT_LOCATION_CONFIG
from weathernow.config.schema import DashboardConfig


def load_config(path: str | Path) -> DashboardConfig:
    """Load and validate config from a YAML file.

    If no default location is specified in the YAML, injects
    DEFAULT_LOCATION_CONFIG.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not raw.get("default_location"):
        raw["default_location"] = DEFAULT_LOCATION_CONFIG.model_dump()

    return DashboardConfig(**raw)


def default_config() -> DashboardConfig:
    """Config with every section at its default value."""
    return DashboardConfig(default_location=DEFAULT_LOCATION_CONFIG)
