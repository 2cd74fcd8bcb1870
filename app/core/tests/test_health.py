"""Tests for the health check endpoint."""

from unittest.mock import patch

from django.db import DatabaseError


class TestHealthCheck:
    """Tests for the /health/ endpoint."""

    def test_reports_connected_database(self, client, db):
        """Returns 200 when the database answers."""
        response = client.get("/health/")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected"}

    def test_reports_unreachable_database(self, client, db):
        """Returns 503 when the database query fails."""
        with patch("core.views.connection") as mock_connection:
            mock_connection.cursor.side_effect = DatabaseError("down")
            response = client.get("/health/")

        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy", "database": "disconnected"}
