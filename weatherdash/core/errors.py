"""Error taxonomy for weather retrieval.

Every error carries a user-facing ``message`` and the HTTP ``status_code``
the API layer answers with. The core raises these to its immediate caller
and never retries or recovers partially.
"""
from __future__ import annotations

from typing import Literal


class WeatherError(Exception):
    """Base class for all retrieval failures."""

    status_code: int = 502

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class TransportError(WeatherError):
    """The provider request failed: network, timeout or non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.upstream_status = upstream_status


class MalformedPayload(WeatherError):
    """A successful response is missing a required field or has the wrong type."""


LOCATION_MESSAGES = {
    "denied": "Location access denied. Please enable permissions or search by city name.",
    "unsupported": "Location is unavailable on this device. Please search by city name.",
}


class LocationUnavailable(WeatherError):
    """The device location could not be obtained."""

    status_code = 400

    def __init__(self, reason: Literal["denied", "unsupported"]) -> None:
        super().__init__(LOCATION_MESSAGES[reason])
        self.reason = reason
