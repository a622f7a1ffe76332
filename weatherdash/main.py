from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from weatherdash.api.v1.endpoints.weather import limiter
from weatherdash.api.v1.router import api_v1_router
from weatherdash.core.config import get_settings
from weatherdash.core.errors import WeatherError
from weatherdash.core.http import create_http_client, set_http_client
from weatherdash.core.logs import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Setup HTTP client
    client = create_http_client(settings)
    set_http_client(client)

    # Store settings in app state
    app.state.settings = settings

    try:
        yield
    finally:
        set_http_client(None)
        await client.aclose()


async def weather_error_handler(request: Request, exc: WeatherError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="weatherdash",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(WeatherError, weather_error_handler)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(api_v1_router, prefix="/api/v1")
    return app


app = create_app()
