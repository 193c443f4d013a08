"""Open-Meteo geocoding and forecast client with retry and rate limit handling."""

import asyncio
import logging
from typing import Any

import httpx

from weathernow.errors import ForecastError, GeocodeError
from weathernow.ingest.forecast_parser import parse_forecast
from weathernow.models.location import LocationMatch
from weathernow.models.weather import Units, WeatherData

logger = logging.getLogger(__name__)

GEOCODING_BASE_URL = "https://geocoding-api.open-meteo.com"
FORECAST_BASE_URL = "https://api.open-meteo.com"
DEFAULT_USER_AGENT = "weathernow/0.1.0"

CURRENT_VARS = [
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "wind_speed_10m",
    "precipitation",
    "weather_code",
]
HOURLY_VARS = ["temperature_2m", "weather_code"]
DAILY_VARS = ["temperature_2m_max", "temperature_2m_min", "weather_code"]

IMPERIAL_PARAMS = {
    "temperature_unit": "fahrenheit",
    "wind_speed_unit": "mph",
    "precipitation_unit": "inch",
}


class OpenMeteoClient:
    def __init__(
        self,
        geocoding_base_url: str = GEOCODING_BASE_URL,
        forecast_base_url: str = FORECAST_BASE_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        max_results: int = 5,
        forecast_days: int = 7,
        client: httpx.AsyncClient | None = None,
    ):
        self.geocoding_base_url = geocoding_base_url
        self.forecast_base_url = forecast_base_url
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.max_results = max_results
        self.forecast_days = forecast_days
        self._client = client or httpx.AsyncClient(
            timeout=timeout, headers={"User-Agent": DEFAULT_USER_AGENT}
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def geocode(self, query: str) -> list[LocationMatch]:
        """Resolve free text to matching locations, best match first."""
        url = f"{self.geocoding_base_url}/v1/search"
        params = {
            "name": query,
            "count": self.max_results,
            "language": "en",
            "format": "json",
        }
        try:
            data = await self._get_json(url, params)
        except httpx.HTTPStatusError as e:
            raise GeocodeError(
                f"Location search failed (HTTP {e.response.status_code})",
                e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise GeocodeError(f"Location search request failed: {e}") from e
        except ValueError as e:
            raise GeocodeError("Location search returned an invalid response") from e

        if not isinstance(data, dict):
            raise GeocodeError("Location search returned an invalid response")
        # Open-Meteo omits "results" entirely when nothing matches
        results = data.get("results") or []
        matches: list[LocationMatch] = []
        for raw in results:
            try:
                matches.append(LocationMatch.from_dict(raw))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed geocoding result: %r", raw)
        return matches

    async def fetch_forecast(self, location: LocationMatch, units: Units) -> WeatherData:
        url = f"{self.forecast_base_url}/v1/forecast"
        params: dict[str, Any] = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "timezone": location.timezone or "auto",
            "current": ",".join(CURRENT_VARS),
            "hourly": ",".join(HOURLY_VARS),
            "daily": ",".join(DAILY_VARS),
            "forecast_days": self.forecast_days,
        }
        if units == Units.IMPERIAL:
            params.update(IMPERIAL_PARAMS)

        try:
            raw = await self._get_json(url, params)
        except httpx.HTTPStatusError as e:
            raise ForecastError(
                f"Forecast request failed (HTTP {e.response.status_code})",
                e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise ForecastError(f"Forecast request failed: {e}") from e
        except ValueError as e:
            raise ForecastError("Forecast returned an invalid response") from e

        try:
            return parse_forecast(raw, location, units)
        except (KeyError, TypeError, ValueError, IndexError) as e:
            raise ForecastError(f"Malformed forecast payload: {e}") from e

    async def _get_json(self, url: str, params: dict[str, Any]) -> Any:
        """GET with retries on 503/429 and transport errors, exponential backoff."""
        for attempt in range(self.max_retries + 1):
            try:
                resp = await self._client.get(url, params=params)
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Open-Meteo request error, retrying in %.1fs: %s", delay, e
                    )
                    await asyncio.sleep(delay)
                    continue
                raise
            if resp.status_code in (503, 429) and attempt < self.max_retries:
                delay = self.retry_base_delay * (2**attempt)
                logger.warning(
                    "Open-Meteo %s returned %d, retrying in %.1fs (attempt %d/%d)",
                    url, resp.status_code, delay, attempt + 1, self.max_retries,
                )
                await asyncio.sleep(delay)
                continue
            resp.raise_for_status()
            return resp.json()
        raise AssertionError("unreachable")
