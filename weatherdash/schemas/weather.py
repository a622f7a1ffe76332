from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class CurrentConditions(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str = Field(..., description='Display name, "{city}, {country}".')
    temperature_c: float = Field(..., description="Air temperature (C).")
    feels_like_c: float = Field(..., description="Apparent temperature (C).")
    condition: str = Field(..., description="Provider condition group, e.g. Rain.")
    icon_code: str = Field(..., description="Provider icon code, e.g. 10d.")
    humidity_pct: int = Field(..., ge=0, le=100, description="Relative humidity (%).")
    wind_speed_kmh: int = Field(..., ge=0, description="Wind speed (km/h).")
    pressure_hpa: int = Field(..., ge=0, description="Sea-level pressure (hPa).")
    visibility_km: int = Field(..., ge=0, description="Visibility (km).")
    coordinates: Coordinates


class RawForecastEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., description="Sample time (unix seconds, UTC).")
    temp_max_c: float
    temp_min_c: float
    condition: str
    icon_code: str


class DailyForecastSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    day_label: str = Field(..., description="Short weekday, e.g. Mon.")
    date_label: str = Field(..., description="Short month and day, e.g. Oct 7.")
    high_c: float
    low_c: float
    condition: str
    icon_code: str


class WeatherReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: CurrentConditions
    forecast: list[DailyForecastSummary] = Field(default_factory=list, max_length=5)


class CurrentConditionsView(CurrentConditions):
    temperature: int = Field(..., description="Temperature in the requested unit.")
    feels_like: int = Field(..., description="Apparent temperature in the requested unit.")
    icon_url: str


class DailyForecastView(DailyForecastSummary):
    high: int = Field(..., description="High in the requested unit.")
    low: int = Field(..., description="Low in the requested unit.")
    icon_url: str


class WeatherReportResponse(BaseModel):
    unit: Literal["C", "F"]
    current: CurrentConditionsView
    forecast: list[DailyForecastView]
    generated_at: datetime


class ConvertedTemperature(BaseModel):
    value: int
    unit: Literal["C", "F"]
