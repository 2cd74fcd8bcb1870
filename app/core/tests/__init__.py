"""Tests for core infrastructure: exception handling and health check."""
