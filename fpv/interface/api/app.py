"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fpv.config import Settings
from fpv.interface.api.errors import setup_error_handlers
from fpv.interface.api.routes import auth, blogs, health, stats
from fpv.util.di.container import create_container, setup_di
from fpv.util.observability import instrument_fastapi


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        settings: Settings to build the app with (loaded from env if omitted)
        container: DI container (production container if omitted)

    Returns:
        Configured application
    """
    settings = settings or Settings()
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        # Disposes the connection pool and other APP-scoped resources
        await container.close()

    app_instance = FastAPI(
        title="Project FPV API",
        description="Backend API for Project FPV - a blog for FPV drone pilots",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Development accepts any origin; other environments only the frontend
    # and the configured extra origins
    if settings.environment == "development":
        allow_origins = ["*"]
        allow_credentials = False
    else:
        allow_origins = settings.allowed_origins
        allow_credentials = True

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    setup_di(app_instance, container)

    # Register routes under the configured mount point
    prefix = settings.api.prefix
    app_instance.include_router(health.router, prefix=prefix)
    app_instance.include_router(auth.router, prefix=prefix)
    app_instance.include_router(blogs.router, prefix=prefix)
    app_instance.include_router(stats.router, prefix=prefix)

    setup_error_handlers(app_instance)

    return app_instance
