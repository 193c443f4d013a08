"""Tests for config loading."""

from pathlib import Path

import yaml

from weathernow.config.defaults import DEFAULT_LOCATION, DEFAULT_LOCATION_CONFIG
from weathernow.config.loader import default_config, load_config
from weathernow.models.weather import Units


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.forecast.units == Units.IMPERIAL
        assert config.timing.refresh_interval_ms == 1000

    def test_default_location_injected(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.default_location == DEFAULT_LOCATION_CONFIG

    def test_explicit_location_not_overridden(self, tmp_path: Path):
        data = {
            "default_location": {
                "id": "2643743",
                "name": "London",
                "country": "United Kingdom",
                "latitude": 51.50853,
                "longitude": -0.12574,
                "timezone": "Europe/London",
            }
        }
        path = tmp_path / "custom.yaml"
        with open(path, "w") as f:
            yaml.dump(data, f)
        config = load_config(path)
        assert config.default_location.name == "London"

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.timing.reload_interval_ms == 60000
        assert config.default_location.name == "San Francisco"

    def test_fixtures_config(self, fixtures_dir: Path):
        config = load_config(fixtures_dir / "config_default.yaml")
        assert config.api.max_search_results == 5
        assert config.default_location == DEFAULT_LOCATION_CONFIG


class TestDefaults:
    def test_default_location_matches_config(self):
        assert DEFAULT_LOCATION.name == DEFAULT_LOCATION_CONFIG.name
        assert DEFAULT_LOCATION.search_term == "San Francisco, United States"

    def test_default_config_has_location(self):
        assert default_config().default_location == DEFAULT_LOCATION_CONFIG

