"""
Basic Tests for Core Functionality
Tests health and root endpoints
"""
import pytest
from httpx import AsyncClient, ASGITransport


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_endpoint_returns_healthy(self):
        """Test that /health returns healthy status."""
        from cdr_gateway.main import app

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "cdr-gateway"
        assert data["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    async def test_root_endpoint_returns_running(self):
        """Test that / returns running status."""
        from cdr_gateway.main import app

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert "CDR Gateway" in data["message"]
