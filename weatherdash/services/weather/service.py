"""Weather retrieval pipeline.

A retrieval runs two stages:

1. current stage: provider current payload -> ``CurrentConditions``
2. forecast stage: coordinates -> provider forecast series -> daily summaries

The forecast stage takes coordinates as input. For a place name those come
out of stage 1, so stage 2 cannot start until stage 1 has succeeded. When
the caller already holds coordinates the stages are independent and run
concurrently. Either failure fails the retrieval; no partial report is
returned.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import timezone as dt_timezone, tzinfo

from weatherdash.core.errors import WeatherError
from weatherdash.schemas.weather import Coordinates, CurrentConditions, DailyForecastSummary, WeatherReport
from weatherdash.services.weather.current import normalize
from weatherdash.services.weather.forecast import aggregate, parse_series
from weatherdash.services.weather.location import LocationSource
from weatherdash.services.weather.provider import WeatherProvider


logger = logging.getLogger(__name__)


class WeatherDataService:
    def __init__(self, provider: WeatherProvider, *, tz: tzinfo = dt_timezone.utc) -> None:
        self.provider = provider
        self.tz = tz

    async def current_stage(
        self,
        *,
        place_name: str | None = None,
        coordinates: Coordinates | None = None,
    ) -> CurrentConditions:
        payload = await self.provider.get_current(place_name=place_name, coordinates=coordinates)
        return normalize(payload)

    async def forecast_stage(self, coordinates: Coordinates) -> list[DailyForecastSummary]:
        payload = await self.provider.get_forecast_series(coordinates)
        return aggregate(parse_series(payload), self.tz)

    async def fetch_by_city(self, name: str) -> WeatherReport:
        logger.info("Fetching weather for city %r", name)
        try:
            current = await self.current_stage(place_name=name)
            forecast = await self.forecast_stage(current.coordinates)
        except WeatherError as exc:
            logger.warning("Weather retrieval for %r failed: %s", name, exc.message)
            raise
        return WeatherReport(current=current, forecast=forecast)

    async def fetch_by_coordinates(self, lat: float, lon: float) -> WeatherReport:
        coordinates = Coordinates(lat=lat, lon=lon)
        logger.info("Fetching weather for coordinates %.4f,%.4f", lat, lon)
        # Both stages run to completion before any failure is raised.
        current, forecast = await asyncio.gather(
            self.current_stage(coordinates=coordinates),
            self.forecast_stage(coordinates),
            return_exceptions=True,
        )
        for outcome in (current, forecast):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, WeatherError):
                    logger.warning("Weather retrieval for %.4f,%.4f failed: %s", lat, lon, outcome.message)
                raise outcome
        return WeatherReport(current=current, forecast=forecast)

    async def fetch_by_device_location(self, source: LocationSource) -> WeatherReport:
        position = await source.current_position()
        return await self.fetch_by_coordinates(position.lat, position.lon)
