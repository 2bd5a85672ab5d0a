"""Fixtures for API tests against an in-memory database."""
import pytest
from fastapi.testclient import TestClient

from galleryblue.api.main import create_app
from tests.helpers import create_test_user


@pytest.fixture(scope="function")
def client(database):
    app = create_app(database=database)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def alice(db_session):
    return create_test_user(db_session, email="alice@example.com", display_name="alice")


@pytest.fixture
def bob(db_session):
    return create_test_user(db_session, email="bob@example.com", display_name="bob")
