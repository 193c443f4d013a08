"""Tests for config schema validation."""

import pytest
from pydantic import ValidationError

from weathernow.config.schema import (
    ApiConfig,
    DashboardConfig,
    ForecastConfig,
    LocationConfig,
    TimingConfig,
)
from weathernow.models.weather import Units


class TestDashboardConfig:
    def test_defaults(self):
        config = DashboardConfig()
        assert config.timing.refresh_interval_ms == 1000
        assert config.timing.reload_interval_ms == 60000
        assert config.forecast.units == Units.METRIC
        assert config.default_location is None

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            DashboardConfig(unknown_field="bad")

    def test_nested_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            TimingConfig(refresh_interval_ms=1000, bogus=True)


class TestTimingConfig:
    def test_intervals_must_be_positive(self):
        with pytest.raises(ValidationError):
            TimingConfig(refresh_interval_ms=0)
        with pytest.raises(ValidationError):
            TimingConfig(reload_interval_ms=-5)


class TestForecastConfig:
    def test_units_from_string(self):
        assert ForecastConfig(units="imperial").units == Units.IMPERIAL

    def test_unknown_units_rejected(self):
        with pytest.raises(ValidationError):
            ForecastConfig(units="kelvin")

    def test_forecast_days_bounds(self):
        with pytest.raises(ValidationError):
            ForecastConfig(forecast_days=0)
        with pytest.raises(ValidationError):
            ForecastConfig(forecast_days=17)


class TestApiConfig:
    def test_timeout_positive(self):
        with pytest.raises(ValidationError):
            ApiConfig(timeout_seconds=0)


class TestLocationConfig:
    def test_coordinate_bounds(self):
        with pytest.raises(ValidationError):
            LocationConfig(id="1", name="X", latitude=91.0, longitude=0.0)
        with pytest.raises(ValidationError):
            LocationConfig(id="1", name="X", latitude=0.0, longitude=181.0)
