from __future__ import annotations

from zoneinfo import ZoneInfo

from fastapi import Depends, Query

from weatherdash.core.config import Settings, get_settings
from weatherdash.core.http import get_http_client
from weatherdash.services.weather import OpenWeatherProvider, TemperatureUnit, WeatherDataService


def _resolve_timezone(timezone: str) -> ZoneInfo:
    try:
        return ZoneInfo(timezone)
    except Exception:
        return ZoneInfo("UTC")


def get_app_settings() -> Settings:
    return get_settings()


def get_weather_service(
    timezone: str | None = Query(None, min_length=1, max_length=64),
    settings: Settings = Depends(get_app_settings),
) -> WeatherDataService:
    """Build a service per request; nothing is shared between retrievals but the HTTP pool."""
    provider = OpenWeatherProvider(get_http_client(), settings)
    return WeatherDataService(provider, tz=_resolve_timezone(timezone or settings.forecast_timezone))


def get_display_unit(
    unit: TemperatureUnit | None = Query(None, description="Temperature unit for display values."),
    settings: Settings = Depends(get_app_settings),
) -> TemperatureUnit:
    return unit or TemperatureUnit(settings.default_unit)
