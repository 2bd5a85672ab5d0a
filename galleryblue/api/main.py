"""FastAPI application for GalleryBlue.

Builds the app with CORS middleware, the three Connect RPC routers and the
Connect error handlers. The database is created once per application and
kept on ``app.state.database``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from galleryblue import __version__
from galleryblue.api.errors import register_exception_handlers
from galleryblue.api.routes import auth, images, users
from galleryblue.core.database import Database
from galleryblue.core.settings import AppSettings, get_settings
from galleryblue.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

CORS_ALLOWED_HEADERS = [
    "Accept",
    "Content-Type",
    "Connect-Protocol-Version",
    "Connect-Timeout-Ms",
    "X-User-ID",
]


def create_app(
    settings: Optional[AppSettings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Application factory.

    Args:
        settings: Configuration; defaults to the environment-derived settings
        database: Pre-built database (tests pass an in-memory one); built
            from settings at startup when omitted
    """
    settings = settings or get_settings()

    setup_logging(
        level=settings.logging.level,
        fmt=settings.logging.format,
        log_file=settings.logging.file,
        max_file_size_mb=settings.logging.max_file_size_mb,
        backup_count=settings.logging.backup_count,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown events."""
        # Startup
        logger.info(f"Starting GalleryBlue API (environment: {settings.environment})")
        owns_database = app.state.database is None
        if owns_database:
            app.state.database = Database.from_settings(settings.database)
        if settings.database.create_tables:
            app.state.database.create_all()
            logger.info("Database tables ensured")
        yield
        # Shutdown
        logger.info("Shutting down GalleryBlue API")
        if owns_database:
            app.state.database.dispose()
            app.state.database = None

    app = FastAPI(
        title="GalleryBlue API",
        description="User accounts and image gallery over Connect RPC",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.settings = settings

    if settings.api.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=CORS_ALLOWED_HEADERS,
        )

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(images.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "version": __version__,
        }

    return app


app = create_app()
