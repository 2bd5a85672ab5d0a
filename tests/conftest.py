"""
Pytest configuration and shared fixtures.

This module provides fixtures that are available to all test modules.
"""

import io
import os

# Cheap bcrypt cost for tests; must be set before settings are first read
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from PIL import Image as PILImage  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from galleryblue.core.database import Base, Database  # noqa: E402
from galleryblue.core.settings import get_settings  # noqa: E402
from tests.helpers import make_jpeg  # noqa: E402


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """
    Clear settings cache before each test.

    This ensures each test gets fresh settings.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# --- Database ---

@pytest.fixture(scope="function")
def database() -> Generator[Database, None, None]:
    """In-memory SQLite database shared by every session in the test."""
    db = Database(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db.create_all()
    yield db
    Base.metadata.drop_all(bind=db.engine)
    db.dispose()


@pytest.fixture(scope="function")
def db_session(database: Database) -> Generator[Session, None, None]:
    session = database.session_factory()
    yield session
    session.close()


# --- Test Image Generators ---

@pytest.fixture
def jpeg_100x50() -> bytes:
    """Wide image: the width bound decides the thumbnail size."""
    return make_jpeg(100, 50)


@pytest.fixture
def jpeg_100x100() -> bytes:
    return make_jpeg(100, 100, color=(0, 255, 0))


@pytest.fixture
def jpeg_640x1280() -> bytes:
    """Tall image: the height bound decides the thumbnail size."""
    return make_jpeg(640, 1280, color=(255, 0, 0))


@pytest.fixture
def jpeg_greyscale() -> bytes:
    return make_jpeg(400, 300, color=128, mode="L")


@pytest.fixture
def png_100x100() -> bytes:
    """Valid image, wrong format for the JPEG-only upload path."""
    buf = io.BytesIO()
    PILImage.new("RGB", (100, 100), color=(0, 128, 255)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def not_an_image() -> bytes:
    return b"definitely not a jpeg"


@pytest.fixture
def exact_limit_content() -> bytes:
    """Exactly 5MB: the largest accepted upload."""
    return b"\xff\xd8" + b"\x00" * (5 * 1024 * 1024 - 2)


@pytest.fixture
def oversized_content() -> bytes:
    """Content exceeding 5MB limit by one byte."""
    return b"x" * (5 * 1024 * 1024 + 1)
