"""Tests for the FastAPI endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from swapintents.api.app import create_app
from swapintents.config import Settings
from swapintents.engine.intents import SwapIntents

PRICE_REQUEST = {
    "network_in": 1,
    "network_out": 1,
    "token_in": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
    "token_out": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
    "amount_in": "1000000",
    "sender": "0x1234567890123456789012345678901234567890",
}


@pytest.fixture
def test_app():
    """Create test application over the dry-run protocols."""
    return create_app(SwapIntents(Settings(_env_file=None)))


@pytest.fixture
async def client(test_app):
    """Create async test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "swapintents"

    @pytest.mark.asyncio
    async def test_detailed_health(self, client):
        response = await client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert "dry-run-dex" in data["protocols"]
        assert data["config"]["aggregation"]["method"] == "best"


class TestQuoteEndpoints:
    """Tests for price and quote endpoints."""

    @pytest.mark.asyncio
    async def test_price(self, client):
        response = await client.post("/quotes/price", json=PRICE_REQUEST)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["method"] == "best"
        assert data["result"]["protocol"] == "dry-run-dex"
        assert data["result"]["amount_out"] == "997000"
        assert data["all_results"][0]["success"] is True

    @pytest.mark.asyncio
    async def test_quote(self, client):
        body = {**PRICE_REQUEST, "receiver": "0x000000000000000000000000000000000000dEaD"}
        response = await client.post("/quotes/quote", json=body)

        assert response.status_code == 200
        result = response.json()["result"]
        assert result["receiver"] == body["receiver"]
        assert result["evm_execution_payload"]["approval"]["amount"] == "1000000"

    @pytest.mark.asyncio
    async def test_unsupported_route(self, client):
        body = {**PRICE_REQUEST, "network_in": 56, "network_out": 999999}
        response = await client.post("/quotes/price", json=body)

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["type"] == "INVALID_PARAMS"
        assert "No compatible protocols" in detail["message"]

    @pytest.mark.asyncio
    async def test_invalid_amount(self, client):
        response = await client.post("/quotes/price", json={**PRICE_REQUEST, "amount_in": "1.5"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_non_ascii_digits_rejected(self, client):
        response = await client.post("/quotes/price", json={**PRICE_REQUEST, "amount_in": "\u00b2"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_no_offer_is_not_an_error(self, client):
        """Every protocol failing still answers 200 with success False."""
        response = await client.post("/quotes/price", json={**PRICE_REQUEST, "amount_in": "0"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["result"] is None
        assert "INVALID_PARAMS" in data["all_results"][0]["error"]

    @pytest.mark.asyncio
    async def test_list_protocols(self, client):
        response = await client.get("/quotes/protocols")

        assert response.status_code == 200
        protocols = {p["protocol"]: p for p in response.json()}
        assert set(protocols) == {"dry-run-dex", "dry-run-solana", "dry-run-bridge"}
        assert protocols["dry-run-bridge"]["multi_chain"] is True
        assert 1399811149 in protocols["dry-run-solana"]["chains"]
