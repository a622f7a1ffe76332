from __future__ import annotations

from datetime import datetime, timezone as dt_timezone

from weatherdash.schemas.weather import (
    CurrentConditions,
    CurrentConditionsView,
    DailyForecastSummary,
    DailyForecastView,
    WeatherReport,
    WeatherReportResponse,
)
from weatherdash.services.weather.units import TemperatureUnit, convert


def icon_url(icon_base_url: str, icon_code: str) -> str:
    return f"{icon_base_url.rstrip('/')}/{icon_code}@2x.png"


def current_view(current: CurrentConditions, *, unit: TemperatureUnit, icon_base_url: str) -> CurrentConditionsView:
    return CurrentConditionsView(
        **current.model_dump(),
        temperature=convert(current.temperature_c, unit),
        feels_like=convert(current.feels_like_c, unit),
        icon_url=icon_url(icon_base_url, current.icon_code),
    )


def forecast_view(day: DailyForecastSummary, *, unit: TemperatureUnit, icon_base_url: str) -> DailyForecastView:
    return DailyForecastView(
        **day.model_dump(),
        high=convert(day.high_c, unit),
        low=convert(day.low_c, unit),
        icon_url=icon_url(icon_base_url, day.icon_code),
    )


def render_report(report: WeatherReport, *, unit: TemperatureUnit, icon_base_url: str) -> WeatherReportResponse:
    """Build the API view of a report; unit and icon base are explicit inputs."""
    return WeatherReportResponse(
        unit=unit.value,
        current=current_view(report.current, unit=unit, icon_base_url=icon_base_url),
        forecast=[forecast_view(day, unit=unit, icon_base_url=icon_base_url) for day in report.forecast],
        generated_at=datetime.now(dt_timezone.utc),
    )
