"""Database connection and session management.

A ``Database`` owns one SQLAlchemy engine (and therefore one connection
pool) plus the session factory bound to it. The application factory builds
exactly one and stores it on ``app.state``; request handlers get a session
through the ``get_db`` dependency.
"""
import logging
from typing import Any, Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from galleryblue.core.settings import DatabaseSettings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine plus session factory, safe to share across request threads."""

    def __init__(self, url: str, echo: bool = False, **engine_options: Any):
        self.url = url
        self.engine: Engine = create_engine(url, echo=echo, **engine_options)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "Database":
        """Build a pooled engine from configuration."""
        options: dict[str, Any] = {"pool_pre_ping": True}
        if not settings.url.startswith("sqlite"):
            options["pool_size"] = settings.pool_size
            options["max_overflow"] = settings.max_overflow
        logger.info("Configuring database connection")
        return cls(settings.url, echo=settings.echo, **options)

    def create_all(self) -> None:
        """Create all tables in the database."""
        # Models register themselves on Base when imported
        import galleryblue.database.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        """Check that a connection can be established."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for FastAPI routes.
    Yields a session from the application's Database and ensures cleanup.
    """
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized; is the app lifespan running?")
    db = database.session_factory()
    try:
        yield db
    finally:
        db.close()
