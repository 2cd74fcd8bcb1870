"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        register/                  - User registration
        login/                     - Email/password login (JWT pair)
        token/refresh/             - Refresh access token
        user/                      - Current user (GET/PUT/PATCH/DELETE)
    /api/v1/                       - Bookkeeping endpoints
        members/                   - Household members
        categories/                - Income/expense categories
        accounts/                  - Accounts (balances are read-only)
        accounts/{id}/adjustments/ - Balance audit trail
        transactions/              - Income/expense postings
        transfers/                 - Account-to-account transfers

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication
    path("auth/", include("authentication.urls")),
    # Bookkeeping
    path("", include("bookkeeping.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Finance Admin"
admin.site.site_title = "Finance Admin Portal"
admin.site.index_title = "Household bookkeeping"
