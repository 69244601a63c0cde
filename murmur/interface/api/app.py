"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from murmur.config import Settings
from murmur.interface.api.routes import apps, comments, health, identity
from murmur.util.di.container import create_container, setup_di
from murmur.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py does.

    Args:
        container: DI container to use (defaults to the production container)
    """
    settings = Settings()

    # Signing key fetches go through httpx
    instrument_httpx()

    app_instance = FastAPI(
        title="Murmur API",
        description="Backend API for Murmur - an embeddable comment widget",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    # The widget runs inside arbitrary customer pages; per-app origin checks
    # happen in the domain, CORS only admits the hosted widget frames.
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(identity.router)
    app_instance.include_router(apps.router)
    app_instance.include_router(comments.router)

    return app_instance
