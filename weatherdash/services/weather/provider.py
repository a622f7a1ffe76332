from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from weatherdash.core.config import Settings
from weatherdash.core.errors import MalformedPayload, TransportError
from weatherdash.core.http import request_with_retries
from weatherdash.schemas.weather import Coordinates


logger = logging.getLogger(__name__)


class WeatherProvider(Protocol):
    async def get_current(
        self,
        *,
        place_name: str | None = None,
        coordinates: Coordinates | None = None,
    ) -> dict[str, Any]:
        """Return the raw current-weather payload for a place name or coordinates."""

    async def get_forecast_series(self, coordinates: Coordinates) -> dict[str, Any]:
        """Return the raw 3-hour forecast series payload for coordinates."""


class OpenWeatherProvider:
    """OpenWeatherMap 2.5 API: ``/weather`` and ``/forecast``, metric units."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self.client = client
        self.settings = settings
        self.base_url = settings.openweather_base_url.rstrip("/")

    async def get_current(
        self,
        *,
        place_name: str | None = None,
        coordinates: Coordinates | None = None,
    ) -> dict[str, Any]:
        if (place_name is None) == (coordinates is None):
            raise ValueError("Pass exactly one of place_name or coordinates")
        if place_name is not None:
            params: dict[str, Any] = {"q": place_name}
        else:
            params = {"lat": coordinates.lat, "lon": coordinates.lon}
        return await self._get("weather", params)

    async def get_forecast_series(self, coordinates: Coordinates) -> dict[str, Any]:
        return await self._get("forecast", {"lat": coordinates.lat, "lon": coordinates.lon})

    async def _get(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/{endpoint}"
        query = {**params, "appid": self.settings.openweather_api_key, "units": "metric"}

        try:
            resp = await request_with_retries(
                self.client,
                method="GET",
                url=url,
                params=query,
                retries=self.settings.http_retries,
                backoff_seconds=self.settings.http_retry_backoff_seconds,
            )
        except httpx.HTTPError as exc:
            logger.warning("OpenWeather %s request failed: %s", endpoint, type(exc).__name__)
            raise TransportError(f"Weather upstream error: {type(exc).__name__}") from exc

        logger.debug("OpenWeather %s -> %s", endpoint, resp.status_code)
        if resp.status_code == 404:
            raise TransportError("Weather data not found", status_code=404, upstream_status=404)
        if resp.status_code != 200:
            logger.warning("OpenWeather %s returned status %s", endpoint, resp.status_code)
            raise TransportError(
                f"Weather upstream status {resp.status_code}",
                upstream_status=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise MalformedPayload(f"Weather upstream returned invalid JSON for '{endpoint}'") from exc
        if not isinstance(data, dict):
            raise MalformedPayload(f"Weather upstream returned a non-object body for '{endpoint}'")
        return data
