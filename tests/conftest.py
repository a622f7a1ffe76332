import httpx
import pytest
import pytest_asyncio

from weatherdash.core.http import set_http_client


# 2024-01-01 00:00:00 UTC, a Monday.
MONDAY_TS = 1704067200
SLOT_SECONDS = 3 * 60 * 60


def make_current_payload(**overrides):
    payload = {
        "name": "Paris",
        "sys": {"country": "FR"},
        "main": {"temp": 18.4, "feels_like": 17.9, "humidity": 62, "pressure": 1014},
        "weather": [{"main": "Clouds", "icon": "04d"}],
        "wind": {"speed": 5.0},
        "coord": {"lat": 48.8534, "lon": 2.3488},
    }
    payload.update(overrides)
    return payload


def make_forecast_payload(count, start=MONDAY_TS):
    return {
        "list": [
            {
                "dt": start + i * SLOT_SECONDS,
                "main": {"temp_max": 10.0 + i, "temp_min": 5.0 + i},
                "weather": [{"main": "Rain" if i % 2 else "Clear", "icon": f"{i:02d}d"}],
            }
            for i in range(count)
        ]
    }


@pytest.fixture
def current_payload():
    return make_current_payload()


@pytest.fixture
def forecast_payload():
    return make_forecast_payload(40)


@pytest_asyncio.fixture
async def http_client():
    client = httpx.AsyncClient()
    set_http_client(client)
    try:
        yield client
    finally:
        set_http_client(None)
        await client.aclose()


@pytest.fixture
def make_current():
    return make_current_payload


@pytest.fixture
def make_forecast():
    return make_forecast_payload
