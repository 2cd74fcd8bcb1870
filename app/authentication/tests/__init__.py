"""
Tests for authentication app.

This package contains test modules for:
- test_managers.py: UserManager tests
- test_views.py: Registration, login and current-user endpoint tests
- test_integration.py: Register → login → use the API → delete account

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_views.py
"""
