"""API tests for the health endpoint."""

from unittest.mock import patch

import aiosqlite

from billing.infrastructure.storage import sqlite as sqlite_storage


class TestHealth:
    async def test_healthy_with_database(self, client, migrated_db):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "ok"
        assert data["uptime_seconds"] >= 0

    async def test_degraded_without_database(self, client):
        def broken_connection():
            raise aiosqlite.OperationalError("unable to open database file")

        with patch.object(sqlite_storage, "get_connection", broken_connection):
            response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["database"] == "unavailable"

    async def test_no_tenant_needed(self, client, migrated_db):
        response = await client.get("/health", headers={})
        assert response.status_code == 200

    async def test_request_id_echoed(self, client, migrated_db):
        response = await client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert response.headers["X-Response-Time"].endswith("ms")
