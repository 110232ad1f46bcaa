"""Tests for trading API endpoints."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_container
from modules.trading.validator import LEVERAGE_VIOLATION, STOP_LOSS_VIOLATION


@pytest.fixture
def client():
    return TestClient(create_app())


def operation(op_id: str, status: str = "open", result=None) -> dict:
    """A trade operation as the frontend sends it."""
    return {
        "id": op_id,
        "userId": "test-user-123",
        "exchange": "binance",
        "symbol": "BTCUSDT",
        "type": "LONG",
        "status": status,
        "entryPrice": 100,
        "exitPrice": 110 if status == "closed" else None,
        "quantity": 1,
        "leverage": 5,
        "stopLoss": 95,
        "result": result,
        "commission": 0,
        "fees": 0,
    }


class TestLimits:
    def test_limits_are_public(self, client):
        response = client.get("/api/trading/limits")
        assert response.status_code == 200
        assert response.json()["maxConcurrentTrades"] == 2


class TestSettings:
    def test_requires_auth(self, client):
        assert client.get("/api/trading/settings").status_code == 401

    def test_defaults(self, client, auth_headers):
        response = client.get("/api/trading/settings", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["userId"] == "test-user-123"
        assert data["maxLeverage"] == 10
        assert data["isActive"] is False

    def test_update(self, client, auth_headers):
        response = client.put(
            "/api/trading/settings",
            headers=auth_headers,
            json={
                "maxLeverage": 20,
                "binanceApiKey": "bk",
                "binanceApiSecret": "binance-secret",
                "isActive": True,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["maxLeverage"] == 20
        assert data["maxStopLoss"] == 5
        assert data["binanceApiKey"] == "bk"
        assert data["binanceApiSecret"] == "********cret"

        stored = get_container().trading_settings.get("test-user-123")
        assert stored.binance_api_secret == "binance-secret"

    def test_invalid_update_rejected(self, client, auth_headers):
        response = client.put(
            "/api/trading/settings",
            headers=auth_headers,
            json={"maxLeverage": 150, "maxStopLoss": 80},
        )
        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "INVALID_TRADING_SETTINGS"
        assert data["violations"] == [LEVERAGE_VIOLATION, STOP_LOSS_VIOLATION]
        assert data["detail"] == "Configurações de trading inválidas"
        assert "details" not in data
        assert get_container().trading_settings.get("test-user-123") is None

    def test_saving_fetched_settings_keeps_secret(self, client, auth_headers):
        """A form that re-submits what GET returned must not store the mask."""
        client.put(
            "/api/trading/settings",
            headers=auth_headers,
            json={"binanceApiKey": "bk", "binanceApiSecret": "binance-secret"},
        )
        fetched = client.get("/api/trading/settings", headers=auth_headers).json()
        assert fetched["binanceApiSecret"] == "********cret"

        response = client.put(
            "/api/trading/settings",
            headers=auth_headers,
            json={**fetched, "maxLeverage": 20},
        )
        assert response.status_code == 200

        stored = get_container().trading_settings.get("test-user-123")
        assert stored.binance_api_secret == "binance-secret"
        assert stored.max_leverage == 20

    def test_null_clears_credentials(self, client, auth_headers):
        client.put(
            "/api/trading/settings",
            headers=auth_headers,
            json={"bybitApiKey": "k", "bybitApiSecret": "s"},
        )
        response = client.put(
            "/api/trading/settings",
            headers=auth_headers,
            json={"bybitApiKey": None, "bybitApiSecret": None},
        )
        assert response.status_code == 200
        assert response.json()["bybitApiKey"] is None

        decision = client.post(
            "/api/trading/can-open",
            headers=auth_headers,
            json={"exchange": "bybit", "openTrades": []},
        ).json()
        assert decision["canOpen"] is False


class TestCanOpen:
    def test_without_credentials(self, client, auth_headers):
        response = client.post(
            "/api/trading/can-open",
            headers=auth_headers,
            json={"exchange": "binance", "openTrades": []},
        )
        assert response.status_code == 200
        assert response.json() == {
            "canOpen": False,
            "reason": "Chaves API da binance não configuradas",
        }

    def test_with_credentials(self, client, auth_headers):
        client.put(
            "/api/trading/settings",
            headers=auth_headers,
            json={"bybitApiKey": "k", "bybitApiSecret": "s"},
        )
        response = client.post(
            "/api/trading/can-open",
            headers=auth_headers,
            json={"exchange": "bybit", "openTrades": [operation("t1")]},
        )
        assert response.json()["canOpen"] is True

    def test_concurrency_cap(self, client, auth_headers):
        response = client.post(
            "/api/trading/can-open",
            headers=auth_headers,
            json={"exchange": "bybit", "openTrades": [operation("t1"), operation("t2")]},
        )
        data = response.json()
        assert data["canOpen"] is False
        assert "2 operações" in data["reason"]

    def test_unknown_exchange(self, client, auth_headers):
        response = client.post(
            "/api/trading/can-open",
            headers=auth_headers,
            json={"exchange": "kraken", "openTrades": []},
        )
        assert response.status_code == 422


class TestStats:
    def test_stats(self, client, auth_headers):
        response = client.post(
            "/api/trading/stats",
            headers=auth_headers,
            json={
                "operations": [
                    operation("w", status="closed", result=40),
                    operation("l", status="closed", result=-10),
                    operation("o"),
                ]
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["totalOperations"] == 2
        assert data["successRate"] == 50
        assert data["netResult"] == 30

    def test_requires_auth(self, client):
        assert client.post("/api/trading/stats", json={"operations": []}).status_code == 401
