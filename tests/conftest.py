# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from jose import jwt
from typing import Generator

from main import create_app
from core.config import settings
from core.roles import Role
from dependencies.auth import CurrentUser


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
def make_token():
    """Factory for signed session tokens, as issued by the auth service."""

    def _make_token(**claims) -> str:
        payload = {
            "sub": "test-user-id",
            "email": "test@example.com",
            "tenant_id": "T1",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        }
        payload.update(claims)
        return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    return _make_token


@pytest.fixture
def auth_headers(make_token):
    """Authorization header for the given claims."""

    def _auth_headers(**claims) -> dict:
        return {"Authorization": f"Bearer {make_token(**claims)}"}

    return _auth_headers


@pytest.fixture
def mock_resident_user():
    """Resident bound to unit U1 in tenant T1."""
    return CurrentUser(
        id="resident-user-id",
        email="resident@example.com",
        role=Role.RESIDENT,
        tenant_id="T1",
        property_id="P1",
        unit_id="U1",
    )


@pytest.fixture
def mock_tenant_admin_user():
    """Tenant admin for tenant T1."""
    return CurrentUser(
        id="admin-user-id",
        email="admin@example.com",
        role=Role.TENANT_ADMIN,
        tenant_id="T1",
    )
