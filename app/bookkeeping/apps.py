"""
Django app configuration for bookkeeping.
"""

from django.apps import AppConfig


class BookkeepingConfig(AppConfig):
    """Configuration for the bookkeeping application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "bookkeeping"
    verbose_name = "Bookkeeping"
