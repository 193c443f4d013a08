"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from weathernow.models.weather import Units


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    id: str
    name: str
    admin1: str | None = None
    country: str = ""
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    timezone: str = "auto"


class TimingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    refresh_interval_ms: int = Field(default=1000, ge=1)
    reload_interval_ms: int = Field(default=60000, ge=1)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    units: Units = Units.METRIC
    forecast_days: int = Field(default=7, ge=1, le=16)


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    geocoding_base_url: str = "https://geocoding-api.open-meteo.com"
    forecast_base_url: str = "https://api.open-meteo.com"
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    max_search_results: int = Field(default=5, ge=1, le=100)


class StorageConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = "data/weathernow.db"


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timing: TimingConfig = TimingConfig()
    forecast: ForecastConfig = ForecastConfig()
    api: ApiConfig = ApiConfig()
    storage: StorageConfig = StorageConfig()
    default_location: LocationConfig | None = None
