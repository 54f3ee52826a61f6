# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from main import create_app
from dependencies.auth import CurrentUser, get_current_user


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_admin_user():
    return CurrentUser(id="admin-id", email="admin@example.com", role="admin")


@pytest.fixture
def mock_support_user():
    return CurrentUser(id="support-id", email="support@example.com", role="support")


@pytest.fixture
def mock_tenant_user():
    return CurrentUser(id="tenant-id", email="tenant@example.com", role="user")


@pytest.fixture
def login_as(app):
    """
    Override the session dependency for the rest of the test:
        login_as(mock_admin_user)
    """
    def _login(user: CurrentUser):
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    yield _login
    app.dependency_overrides = {}
