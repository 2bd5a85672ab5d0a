"""Entrypoints: start the API server or create the database tables."""

from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

from galleryblue.core.settings import get_settings
from galleryblue.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def init_database() -> None:
    """Initialize database tables.

    Safe to run multiple times - only creates tables that don't already exist.
    """
    load_dotenv()
    settings = get_settings()
    setup_logging(level=settings.logging.level, fmt=settings.logging.format)

    logger.info("Initializing database tables...")

    from galleryblue.core.database import Database

    database = Database.from_settings(settings.database)
    try:
        if not database.ping():
            raise SystemExit(1)
        database.create_all()
        logger.info("Database tables initialized successfully")
    finally:
        database.dispose()


def main() -> None:
    """Start the uvicorn server."""
    load_dotenv()
    settings = get_settings()
    uvicorn.run(
        "galleryblue.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
    )


if __name__ == "__main__":
    main()
