"""Reduce the provider's 3-hour forecast series to daily summaries.

The series holds one sample per 3-hour slot, so a day is 8 samples. Each
day is represented by a single sample: indices 0, 8, 16, 24 and 32. The
sampled entry's own high/low window stands in for the whole day; no min/max
reduction over the other 7 samples is performed. Output stays compatible
with clients that were built against that behaviour.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Any, Mapping, Sequence

from weatherdash.core.errors import MalformedPayload
from weatherdash.schemas.weather import DailyForecastSummary, RawForecastEntry


SAMPLES_PER_DAY = 8
MAX_DAYS = 5

# en-US abbreviations; independent of the process locale.
WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def _parse_entry(index: int, item: Any) -> RawForecastEntry:
    where = f"list[{index}]"
    if not isinstance(item, Mapping):
        raise MalformedPayload(f"Forecast payload entry '{where}' must be an object")

    dt = item.get("dt")
    main = item.get("main")
    weather = item.get("weather")
    if not _is_number(dt):
        raise MalformedPayload(f"Forecast payload field '{where}.dt' must be a number")
    if not isinstance(main, Mapping) or not _is_number(main.get("temp_max")) or not _is_number(main.get("temp_min")):
        raise MalformedPayload(f"Forecast payload field '{where}.main' is incomplete")
    if not isinstance(weather, list) or not weather or not isinstance(weather[0], Mapping):
        raise MalformedPayload(f"Forecast payload missing '{where}.weather[0]'")
    condition = weather[0].get("main")
    icon = weather[0].get("icon")
    if not isinstance(condition, str) or not isinstance(icon, str):
        raise MalformedPayload(f"Forecast payload field '{where}.weather[0]' is incomplete")

    return RawForecastEntry(
        timestamp=int(dt),
        temp_max_c=float(main["temp_max"]),
        temp_min_c=float(main["temp_min"]),
        condition=condition,
        icon_code=icon,
    )


def parse_series(payload: Mapping[str, Any]) -> list[RawForecastEntry]:
    if not isinstance(payload, Mapping) or not isinstance(payload.get("list"), list):
        raise MalformedPayload("Forecast payload missing 'list'")
    return [_parse_entry(i, item) for i, item in enumerate(payload["list"])]


def day_label(moment: datetime) -> str:
    return WEEKDAY_ABBR[moment.weekday()]


def date_label(moment: datetime) -> str:
    return f"{MONTH_ABBR[moment.month - 1]} {moment.day}"


def aggregate(
    series: Sequence[RawForecastEntry],
    tz: tzinfo = dt_timezone.utc,
) -> list[DailyForecastSummary]:
    summaries: list[DailyForecastSummary] = []
    for entry in series[::SAMPLES_PER_DAY]:
        if len(summaries) >= MAX_DAYS:
            break
        moment = datetime.fromtimestamp(entry.timestamp, tz=tz)
        summaries.append(
            DailyForecastSummary(
                day_label=day_label(moment),
                date_label=date_label(moment),
                high_c=entry.temp_max_c,
                low_c=entry.temp_min_c,
                condition=entry.condition,
                icon_code=entry.icon_code,
            )
        )
    return summaries
