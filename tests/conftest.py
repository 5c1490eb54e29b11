"""Shared test fixtures for Church CRM tests"""

import os
from typing import AsyncGenerator
from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio

# Set test environment before importing the app
os.environ["DEBUG"] = "true"
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite:////tmp/church_crm_unused.db"
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["SMTP_HOST"] = ""
os.environ["EMAIL_FROM"] = ""


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def db(tmp_path):
    """Fresh SQLite database with the full schema"""
    from church_crm.services.database_service import db_service

    db_service.connect(f"sqlite:///{tmp_path / 'church.db'}")
    db_service.initialize()
    yield db_service
    db_service.close()


# =============================================================================
# Application and Client Fixtures
# =============================================================================

@pytest.fixture
def app(db):
    """The FastAPI application bound to the test database"""
    from church_crm.main import app as fastapi_app
    return fastapi_app


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator:
    """Create async HTTP client for testing"""
    from httpx import AsyncClient, ASGITransport

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# =============================================================================
# User Fixtures
# =============================================================================

def _make_user(db, email: str, password: str, name: str, role: str) -> dict:
    from church_crm.auth.passwords import hash_password

    user = db.create_user(email, hash_password(password), name, role=role)
    return {**user, "plain_password": password}


@pytest.fixture
def admin_user(db) -> dict:
    return _make_user(db, "admin@ssda.org", "Password@123", "Admin User", "admin")


@pytest.fixture
def regular_user(db) -> dict:
    return _make_user(db, "clerk@ssda.org", "ClerkPass#1", "Church Clerk", "user")


# =============================================================================
# JWT Token Fixtures
# =============================================================================

@pytest.fixture
def admin_headers(admin_user) -> dict:
    from church_crm.auth.jwt import create_access_token
    return {"Authorization": f"Bearer {create_access_token(admin_user)}"}


@pytest.fixture
def user_headers(regular_user) -> dict:
    from church_crm.auth.jwt import create_access_token
    return {"Authorization": f"Bearer {create_access_token(regular_user)}"}


# =============================================================================
# Service Mocks
# =============================================================================

@pytest.fixture
def mock_email():
    """Configured email service that records instead of sending"""
    mock = MagicMock()
    mock.is_configured = True
    mock.send_password_reset.return_value = {"sent": True}

    with patch("church_crm.routes.auth.get_email_service", return_value=mock):
        yield mock


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers"""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
