"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from .dependencies import get_container
from .middleware.errors import setup_error_handlers
from .routes import health
from modules.lives.routes import router as lives_router
from modules.preferences.routes import router as settings_router
from modules.rooms.routes import router as rooms_router
from modules.tournaments.routes import router as tournaments_router
from modules.users.routes import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    On startup, re-arms tournament fill deadlines and timed-room clocks
    from their stored values and starts the life regeneration poller and
    the notification dispatcher. On shutdown, stops both and cancels
    pending timers.
    """
    # Startup
    settings = get_settings()
    container = get_container()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    await container.startup()
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    await container.shutdown()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Turkish word game backend: rooms, scoring, lives and tournaments",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    setup_error_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(lives_router, prefix="/api/lives", tags=["lives"])
    app.include_router(rooms_router, prefix="/api/rooms", tags=["rooms"])
    app.include_router(tournaments_router, prefix="/api/tournaments", tags=["tournaments"])
    app.include_router(settings_router, prefix="/api/settings", tags=["settings"])

    return app


# Application instance for uvicorn
app = create_app()
