from __future__ import annotations

from typing import Protocol

from weatherdash.core.errors import LocationUnavailable
from weatherdash.schemas.weather import Coordinates


class LocationSource(Protocol):
    async def current_position(self) -> Coordinates:
        """Return the device position or raise ``LocationUnavailable``."""


class QueryLocationSource:
    """Device position reported by the client alongside the request.

    The browser resolves geolocation itself; it forwards the coordinates, or
    ``denied`` when the user refused the permission prompt.
    """

    def __init__(self, lat: float | None, lon: float | None, *, denied: bool = False) -> None:
        self.lat = lat
        self.lon = lon
        self.denied = denied

    async def current_position(self) -> Coordinates:
        if self.denied:
            raise LocationUnavailable("denied")
        if self.lat is None or self.lon is None:
            raise LocationUnavailable("unsupported")
        if not (-90 <= self.lat <= 90 and -180 <= self.lon <= 180):
            raise LocationUnavailable("unsupported")
        return Coordinates(lat=self.lat, lon=self.lon)
