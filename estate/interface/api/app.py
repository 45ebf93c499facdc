"""FastAPI application factory."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from estate.config import Settings
from estate.interface.api.routes import auth, health, users
from estate.util.di.container import create_container, setup_di
from estate.util.observability import instrument_fastapi, instrument_httpx

# Local frontends allowed in every environment
DEV_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


def cors_origins(settings: Settings) -> list[str]:
    return [settings.api.frontend_url, *DEV_ORIGINS]


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the API with its routers and DI container.

    Logfire must already be configured. ``scripts/start_app.py`` does this
    in production and ``tests/conftest.py`` under pytest, where a container
    with mock providers is passed in.
    """
    settings = Settings()
    instrument_httpx()

    api = FastAPI(
        title="EstateHub API",
        description="Identity and verification API for the EstateHub property marketplace",
        version="0.1.0",
    )
    instrument_fastapi(api)

    api.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(api, container or create_container())

    for module in (health, auth, users):
        api.include_router(module.router)

    return api


app = create_app()
