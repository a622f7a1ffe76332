from __future__ import annotations

import math
from typing import Any, Mapping

from pydantic import ValidationError

from weatherdash.core.errors import MalformedPayload
from weatherdash.schemas.weather import Coordinates, CurrentConditions
from weatherdash.services.weather.units import round_half_away


# The provider omits "visibility" when nothing limits it. 10 km is its
# implied clear-visibility value; it is a policy, not a measurement.
DEFAULT_VISIBILITY_KM = 10

MS_TO_KMH = 3.6


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if not isinstance(value, Mapping):
        raise MalformedPayload(f"Weather payload missing '{key}'")
    return value


def _string(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedPayload(f"Weather payload field '{where}' must be a string")
    return value


def _number(data: Mapping[str, Any], key: str, where: str) -> float:
    value = data.get(key)
    # bool is an int subclass; a flag is never a measurement.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedPayload(f"Weather payload field '{where}' must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise MalformedPayload(f"Weather payload field '{where}' must be a finite number")
    return float(value)


def _first_weather(data: Mapping[str, Any]) -> Mapping[str, Any]:
    weather = data.get("weather")
    if not isinstance(weather, list) or not weather or not isinstance(weather[0], Mapping):
        raise MalformedPayload("Weather payload missing 'weather[0]'")
    return weather[0]


def _visibility_km(data: Mapping[str, Any]) -> int:
    if data.get("visibility") is None:
        return DEFAULT_VISIBILITY_KM
    return round_half_away(_number(data, "visibility", "visibility") / 1000)


def normalize(payload: Mapping[str, Any]) -> CurrentConditions:
    """Map a provider "current weather" payload into ``CurrentConditions``.

    Raises ``MalformedPayload`` when a required field is absent or mistyped.
    The only value ever defaulted is visibility (see ``DEFAULT_VISIBILITY_KM``).
    """
    if not isinstance(payload, Mapping):
        raise MalformedPayload("Weather payload must be an object")

    name = _string(payload, "name", "name")
    country = _string(_section(payload, "sys"), "country", "sys.country")
    main = _section(payload, "main")
    weather = _first_weather(payload)
    coord = _section(payload, "coord")
    wind = _section(payload, "wind")

    try:
        return CurrentConditions(
            location=f"{name}, {country}",
            temperature_c=_number(main, "temp", "main.temp"),
            feels_like_c=_number(main, "feels_like", "main.feels_like"),
            condition=_string(weather, "main", "weather[0].main"),
            icon_code=_string(weather, "icon", "weather[0].icon"),
            humidity_pct=round_half_away(_number(main, "humidity", "main.humidity")),
            wind_speed_kmh=round_half_away(_number(wind, "speed", "wind.speed") * MS_TO_KMH),
            pressure_hpa=round_half_away(_number(main, "pressure", "main.pressure")),
            visibility_km=_visibility_km(payload),
            coordinates=Coordinates(
                lat=_number(coord, "lat", "coord.lat"),
                lon=_number(coord, "lon", "coord.lon"),
            ),
        )
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise MalformedPayload(f"Weather payload out of range: {fields}") from exc
