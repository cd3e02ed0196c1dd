"""
Test configuration and fixtures for the link shortener.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from links_app.app_factory import create_app
from links_app.config import Settings
from links_app.database.connection import Database
from links_app.services.link_service import LinkService
from links_app.storage.link_store import SQLAlchemyLinkStore


@pytest.fixture(scope="function")
def test_settings(tmp_path):
    """
    Settings pointing at a throwaway SQLite file.
    A file (not :memory:) so several threads/sessions see the same data.
    """
    return Settings(
        environment="test",
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        log_level="DEBUG",
    )


@pytest.fixture(scope="function")
def database(test_settings):
    """Fresh database with the schema created, disposed after the test."""
    db = Database(test_settings)
    db.create_schema()
    try:
        yield db
    finally:
        db.dispose()


@pytest.fixture(scope="function")
def db_session(database):
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def link_service(db_session):
    return LinkService(SQLAlchemyLinkStore(db_session))


@pytest.fixture(scope="function")
def client(test_settings, database):
    """
    Create a test client for an app bound to the test database.
    This is the main fixture that API tests will use.
    """
    app = create_app(test_settings, database=database)

    with TestClient(app) as test_client:
        yield test_client
