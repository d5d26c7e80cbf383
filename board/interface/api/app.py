"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from board.application.event import NotificationEventBus, push_delivery_handler
from board.config import Settings
from board.interface.api.routes import (
    actors,
    comments,
    feed,
    health,
    notifications,
    posts,
    push,
)
from board.util.di.container import create_container, setup_di
from board.util.error import ConfigurationError
from board.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncIterator[None]:
    """Wire the push worker to the event bus for the life of the process.

    The container is read from app state at startup, so a container swapped
    in by setup_di before startup is the one that gets used.
    """
    container = app_instance.state.dishka_container
    bus = await container.get(NotificationEventBus)
    bus.subscribe(push_delivery_handler(container))
    logfire.info("Push delivery subscribed to notification events")

    yield

    # Let in-flight deliveries finish before the engine goes away
    logfire.info("Draining push deliveries", pending=bus.pending)
    await bus.drain()
    await container.close()


def _check_settings(settings: Settings) -> None:
    if (
        settings.environment == "production"
        and settings.auth.jwt_secret == "CHANGE_ME_IN_PRODUCTION"
    ):
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()
    _check_settings(settings)

    app_instance = FastAPI(
        title="Board API",
        description="Anonymous line-tagged discussion board with votes, notifications and Web Push",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type", "Retry-After"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(actors.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(feed.router)
    app_instance.include_router(notifications.router)
    app_instance.include_router(push.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
