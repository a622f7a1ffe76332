import httpx
import pytest
import respx
from httpx import Response

from weatherdash.core.config import Settings
from weatherdash.core.errors import MalformedPayload, TransportError
from weatherdash.schemas.weather import Coordinates
from weatherdash.services.weather.provider import OpenWeatherProvider


CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"


def _settings(**overrides):
    return Settings(openweather_api_key="test-key", **overrides)


@pytest.mark.asyncio
async def test_current_by_place_name(current_payload):
    with respx.mock:
        route = respx.get(CURRENT_URL).mock(return_value=Response(200, json=current_payload))
        async with httpx.AsyncClient() as client:
            data = await OpenWeatherProvider(client, _settings()).get_current(place_name="Paris")

        assert data["name"] == "Paris"
        params = route.calls.last.request.url.params
        assert params["q"] == "Paris"
        assert params["units"] == "metric"
        assert params["appid"] == "test-key"
        assert "lat" not in params


@pytest.mark.asyncio
async def test_forecast_by_coordinates(forecast_payload):
    with respx.mock:
        route = respx.get(FORECAST_URL).mock(return_value=Response(200, json=forecast_payload))
        async with httpx.AsyncClient() as client:
            data = await OpenWeatherProvider(client, _settings()).get_forecast_series(Coordinates(lat=1.5, lon=2.5))

        assert len(data["list"]) == 40
        params = route.calls.last.request.url.params
        assert params["lat"] == "1.5"
        assert params["lon"] == "2.5"


@pytest.mark.asyncio
async def test_not_found_maps_to_404_transport_error():
    with respx.mock:
        respx.get(CURRENT_URL).mock(return_value=Response(404, json={"cod": "404", "message": "city not found"}))
        async with httpx.AsyncClient() as client:
            with pytest.raises(TransportError) as excinfo:
                await OpenWeatherProvider(client, _settings()).get_current(place_name="Atlantis")

    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Weather data not found"


@pytest.mark.asyncio
async def test_server_error_is_not_retried_by_default():
    with respx.mock:
        route = respx.get(CURRENT_URL).mock(return_value=Response(503))
        async with httpx.AsyncClient() as client:
            with pytest.raises(TransportError) as excinfo:
                await OpenWeatherProvider(client, _settings()).get_current(place_name="Paris")

        assert route.call_count == 1
    assert excinfo.value.upstream_status == 503
    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_network_failure_maps_to_transport_error():
    with respx.mock:
        respx.get(CURRENT_URL).mock(side_effect=httpx.ConnectError("boom"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(TransportError, match="ConnectError"):
                await OpenWeatherProvider(client, _settings()).get_current(coordinates=Coordinates(lat=0, lon=0))


@pytest.mark.asyncio
async def test_non_json_body_is_malformed():
    with respx.mock:
        respx.get(FORECAST_URL).mock(return_value=Response(200, content=b"<html>oops</html>"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(MalformedPayload):
                await OpenWeatherProvider(client, _settings()).get_forecast_series(Coordinates(lat=0, lon=0))


@pytest.mark.asyncio
async def test_get_current_requires_exactly_one_locator():
    async with httpx.AsyncClient() as client:
        provider = OpenWeatherProvider(client, _settings())
        with pytest.raises(ValueError):
            await provider.get_current()
        with pytest.raises(ValueError):
            await provider.get_current(place_name="Paris", coordinates=Coordinates(lat=0, lon=0))


@pytest.mark.asyncio
async def test_configured_retry_recovers_from_server_error(current_payload):
    settings = _settings(http_retries=1, http_retry_backoff_seconds=0)
    with respx.mock:
        route = respx.get(CURRENT_URL).mock(
            side_effect=[Response(503), Response(200, json=current_payload)]
        )
        async with httpx.AsyncClient() as client:
            data = await OpenWeatherProvider(client, settings).get_current(place_name="Paris")

        assert data["name"] == "Paris"
        assert route.call_count == 2


@pytest.mark.asyncio
async def test_configured_retry_recovers_from_network_error(current_payload):
    settings = _settings(http_retries=1, http_retry_backoff_seconds=0)
    with respx.mock:
        route = respx.get(CURRENT_URL).mock(
            side_effect=[httpx.ConnectError("boom"), Response(200, json=current_payload)]
        )
        async with httpx.AsyncClient() as client:
            data = await OpenWeatherProvider(client, settings).get_current(place_name="Paris")

        assert data["name"] == "Paris"
        assert route.call_count == 2


@pytest.mark.asyncio
async def test_retries_exhausted_surfaces_last_status():
    settings = _settings(http_retries=2, http_retry_backoff_seconds=0)
    with respx.mock:
        route = respx.get(CURRENT_URL).mock(return_value=Response(502))
        async with httpx.AsyncClient() as client:
            with pytest.raises(TransportError) as excinfo:
                await OpenWeatherProvider(client, settings).get_current(place_name="Paris")

        assert route.call_count == 3
    assert excinfo.value.upstream_status == 502


@pytest.mark.asyncio
async def test_retries_exhausted_on_network_error():
    settings = _settings(http_retries=1, http_retry_backoff_seconds=0)
    with respx.mock:
        route = respx.get(CURRENT_URL).mock(side_effect=httpx.ConnectTimeout("slow"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(TransportError, match="ConnectTimeout"):
                await OpenWeatherProvider(client, settings).get_current(place_name="Paris")

        assert route.call_count == 2
