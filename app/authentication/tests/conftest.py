"""
Test configuration and fixtures for authentication tests.

This module provides:
- Reusable user fixtures
- API client helpers for authenticated requests
- Registration payloads

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/auth/user/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import RESERVED_USERNAMES, User
from authentication.tests.factories import UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic active user."""
    return UserFactory()


@pytest.fixture
def user_with_username(db):
    """Create a user that has picked a username handle."""
    return UserFactory(username="testuser")


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!"
    )


@pytest.fixture
def deactivated_user(db):
    """Create a deactivated user (is_active=False)."""
    return UserFactory(is_active=False)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """
    API client authenticated with JWT token for the default user fixture.

    Use this for tests that need a logged-in user.
    """
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.get('/api/v1/auth/user/')
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def valid_registration_data():
    """Valid data for user registration endpoint."""
    return {
        "email": "newuser@example.com",
        "username": "newuser",
        "password1": "SecurePass123!",
        "password2": "SecurePass123!",
    }


@pytest.fixture
def reserved_usernames():
    """A handful of reserved usernames for validation tests."""
    return sorted(RESERVED_USERNAMES)[:5]


@pytest.fixture
def invalid_usernames():
    """Usernames rejected by the format validator."""
    return [
        "ab",  # Too short (2 chars)
        "a" * 31,  # Too long (31 chars)
        "user name",  # Contains space
        "user@name",  # Contains @
        "user.name",  # Contains period
    ]
