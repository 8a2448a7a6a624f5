"""
Fusion API - FastAPI application entry point.

This module initializes the FastAPI application and configures
middleware, routers, and lifecycle events.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from arq import create_pool
from arq.connections import RedisSettings
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fusion_core import get_logger, init_logging

from . import dependencies
from .config import settings
from .dependencies import require_session
from .routers import feeds, groups, items, sessions

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifecycle manager.

    Handles startup and shutdown events for the application.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    from fusion_database.session import close_database, create_tables, init_database

    init_logging(settings.log_level, settings.debug)
    logger.info("Starting Fusion API", extra={"version": settings.version})

    init_database(settings.database_url)
    await create_tables()

    # Initialize Redis pool for task queue
    dependencies.redis_pool = await create_pool(RedisSettings.from_dsn(settings.redis_url))
    logger.info("Redis pool initialized")

    yield

    # Shutdown: Cleanup resources
    if dependencies.redis_pool:
        await dependencies.redis_pool.close()
        dependencies.redis_pool = None
    await close_database()
    logger.info("Shutting down Fusion API")


def create_app() -> FastAPI:
    """
    Build the FastAPI application.

    Returns:
        A new application instance.
    """
    app = FastAPI(
        title="Fusion API",
        description="Fusion - lightweight RSS reader API",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    protected = [Depends(require_session)]
    app.include_router(sessions.router, prefix="/api/sessions", tags=["Sessions"])
    app.include_router(groups.router, prefix="/api/groups", tags=["Groups"], dependencies=protected)
    app.include_router(feeds.router, prefix="/api/feeds", tags=["Feeds"], dependencies=protected)
    app.include_router(items.router, prefix="/api/items", tags=["Items"], dependencies=protected)

    @app.get("/api/health")
    async def health_check() -> dict[str, str]:
        """
        Health check endpoint.

        Returns:
            Dictionary containing service status and version.
        """
        return {"status": "healthy", "version": settings.version}

    return app


app = create_app()
