from fastapi import APIRouter, Depends, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from weatherdash.api.v1.deps import get_app_settings, get_display_unit, get_weather_service
from weatherdash.core.config import Settings, get_settings
from weatherdash.schemas.weather import ConvertedTemperature, WeatherReportResponse
from weatherdash.services.weather import QueryLocationSource, TemperatureUnit, WeatherDataService, convert
from weatherdash.services.weather.display import render_report


router = APIRouter()

_settings = get_settings()

# Rate limiter
limiter = Limiter(key_func=get_remote_address)


@router.get("/city", response_model=WeatherReportResponse)
@limiter.limit(_settings.rate_limit)
async def weather_by_city(
    request: Request,
    name: str = Query(..., min_length=1, max_length=120),
    unit: TemperatureUnit = Depends(get_display_unit),
    service: WeatherDataService = Depends(get_weather_service),
    settings: Settings = Depends(get_app_settings),
):
    report = await service.fetch_by_city(name.strip())
    return render_report(report, unit=unit, icon_base_url=settings.openweather_icon_base_url)


@router.get("/coordinates", response_model=WeatherReportResponse)
@limiter.limit(_settings.rate_limit)
async def weather_by_coordinates(
    request: Request,
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    unit: TemperatureUnit = Depends(get_display_unit),
    service: WeatherDataService = Depends(get_weather_service),
    settings: Settings = Depends(get_app_settings),
):
    report = await service.fetch_by_coordinates(lat, lon)
    return render_report(report, unit=unit, icon_base_url=settings.openweather_icon_base_url)


@router.get("/device", response_model=WeatherReportResponse)
@limiter.limit(_settings.rate_limit)
async def weather_by_device(
    request: Request,
    lat: float | None = Query(None),
    lon: float | None = Query(None),
    denied: bool = Query(False, description="Client reports the location permission was refused."),
    unit: TemperatureUnit = Depends(get_display_unit),
    service: WeatherDataService = Depends(get_weather_service),
    settings: Settings = Depends(get_app_settings),
):
    report = await service.fetch_by_device_location(QueryLocationSource(lat, lon, denied=denied))
    return render_report(report, unit=unit, icon_base_url=settings.openweather_icon_base_url)


@router.get("/convert", response_model=ConvertedTemperature)
async def convert_temperature(
    temp_c: float = Query(..., ge=-273.15, le=1000),
    unit: TemperatureUnit = Depends(get_display_unit),
):
    return ConvertedTemperature(value=convert(temp_c, unit), unit=unit.value)
