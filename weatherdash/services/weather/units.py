from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


class TemperatureUnit(str, Enum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    # Decimal(float) is exact, so values just below .5 are not pushed up.
    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def convert(temp_c: float, unit: TemperatureUnit) -> int:
    """Convert a Celsius reading to ``unit``, rounding once after the transform."""
    if TemperatureUnit(unit) is TemperatureUnit.FAHRENHEIT:
        return round_half_away(temp_c * 9 / 5 + 32)
    return round_half_away(temp_c)
