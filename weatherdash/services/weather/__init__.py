from __future__ import annotations

from weatherdash.services.weather.current import DEFAULT_VISIBILITY_KM, normalize
from weatherdash.services.weather.forecast import aggregate, parse_series
from weatherdash.services.weather.location import LocationSource, QueryLocationSource
from weatherdash.services.weather.provider import OpenWeatherProvider, WeatherProvider
from weatherdash.services.weather.service import WeatherDataService
from weatherdash.services.weather.units import TemperatureUnit, convert

__all__ = [
    "DEFAULT_VISIBILITY_KM",
    "LocationSource",
    "OpenWeatherProvider",
    "QueryLocationSource",
    "TemperatureUnit",
    "WeatherDataService",
    "WeatherProvider",
    "aggregate",
    "convert",
    "normalize",
    "parse_series",
]
