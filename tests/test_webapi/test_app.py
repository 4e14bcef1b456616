"""Tests for FastAPI application endpoints."""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from stockpulse.core import security
from stockpulse.exceptions import UpstreamUnavailableError
from stockpulse.webapi.dependencies import get_market_data_service


class TestHealthEndpoints:
    """Test health and client configuration endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "status": "OK",
            "message": "Server is running",
        }

    def test_request_id_header(self, client):
        response = client.get("/api/health")
        assert response.headers.get("X-Request-ID")

    def test_readiness_healthy(self, client):
        health = {"status": "healthy", "connectivity": True}
        with patch("stockpulse.webapi.health.check_database_health", return_value=health):
            response = client.get("/api/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_readiness_unhealthy(self, client):
        health = {"status": "unhealthy", "error": "disk I/O error", "connectivity": False}
        with patch("stockpulse.webapi.health.check_database_health", return_value=health):
            response = client.get("/api/health/ready")

        assert response.status_code == 503
        assert response.json()["success"] is False
        assert response.json()["status"] == "not_ready"

    def test_client_config(self, client):
        response = client.get("/api/config")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"refreshIntervalSeconds": 10, "defaultCurrency": "INR"},
        }


class TestStockEndpoints:
    """Test quote, history and search endpoints."""

    def test_list_stocks(self, client, stub_provider, quote_payload):
        stub_provider.quotes["RELIANCE.NS"] = quote_payload("RELIANCE.NS", price=2900.0)
        stub_provider.quotes["TCS.NS"] = quote_payload("TCS.NS", price=3800.0)

        response = client.get("/api/stocks")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [s["symbol"] for s in body["data"]] == ["RELIANCE.NS", "TCS.NS"]
        first = body["data"][0]
        assert first["companyName"] == "Reliance Industries"
        assert first["currentPrice"] == 2900.0
        for key in ("previousClose", "change", "changePercent", "high", "low",
                    "volume", "marketCap", "currency", "open"):
            assert key in first

    def test_list_stocks_all_failing(self, client):
        response = client.get("/api/stocks")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    def test_get_stock(self, client, stub_provider, quote_payload):
        stub_provider.quotes["INFY.NS"] = quote_payload("INFY.NS", price=1500.0)

        response = client.get("/api/stocks/infy.ns")

        assert response.status_code == 200
        assert response.json()["data"]["symbol"] == "INFY.NS"
        assert response.json()["data"]["companyName"] == "Infosys"

    def test_get_stock_not_found(self, client):
        response = client.get("/api/stocks/NOPE.NS")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Stock not found"}

    def test_get_stock_upstream_failure(self, client, stub_provider):
        stub_provider.quotes["TCS.NS"] = UpstreamUnavailableError("TCS.NS", "quote", "timeout")

        response = client.get("/api/stocks/TCS.NS")

        assert response.status_code == 404

    def test_historical_synthetic_fallback(self, client):
        response = client.get("/api/stocks/TCS.NS/historical?interval=1wk&range=1y")

        assert response.status_code == 200
        points = response.json()["data"]
        assert len(points) == 53
        assert set(points[0]) == {"timestamp", "date", "open", "high", "low", "close", "volume"}
        assert [p["timestamp"] for p in points] == sorted(p["timestamp"] for p in points)

    def test_historical_defaults(self, client, stub_provider):
        response = client.get("/api/stocks/TCS.NS/historical")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 31
        _, interval, _, _ = stub_provider.candle_calls[0]
        assert interval == "1d"

    def test_historical_invalid_parameters(self, client, stub_provider):
        response = client.get("/api/stocks/TCS.NS/historical?interval=5m&range=max")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 31
        _, interval, _, _ = stub_provider.candle_calls[0]
        assert interval == "1d"

    def test_search(self, client, stub_provider):
        stub_provider.hits = [
            {"symbol": "TATAMOTORS.NS", "longname": "Tata Motors Limited", "exchange": "NSI"},
            {"symbol": "TTM", "longname": "Tata Motors ADR", "exchange": "NYQ"},
        ]

        response = client.get("/api/stocks/search/tata")

        assert response.status_code == 200
        assert response.json()["data"] == [
            {"symbol": "TATAMOTORS.NS", "name": "Tata Motors Limited", "exchange": "NSI"}
        ]

    def test_search_failure_is_empty(self, client, stub_provider):
        stub_provider.hits = UpstreamUnavailableError("tata", "search", "timeout")

        response = client.get("/api/stocks/search/tata")

        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_list_indices(self, client, stub_provider, quote_payload):
        stub_provider.quotes["^NSEI"] = quote_payload("^NSEI", price=22500.0)
        stub_provider.quotes["^CNX100"] = quote_payload("^CNX100", price=23000.0)

        response = client.get("/api/indices")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [(i["symbol"], i["indexName"]) for i in data] == [
            ("^NSEI", "Nifty 50"),
            ("^CNX100", "Nifty 100"),
        ]


class TestAuthEndpoints:
    """Test registration, login and profile endpoints."""

    def register(self, client, **overrides):
        payload = {"username": "asha", "email": "asha@example.com", "password": "secret123"}
        payload.update(overrides)
        return client.post("/api/auth/register", json=payload)

    def test_register(self, client):
        response = self.register(client)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["token"]
        assert body["user"]["username"] == "asha"
        assert body["user"]["email"] == "asha@example.com"
        assert isinstance(body["user"]["id"], int)
        assert "password" not in str(body)

    def test_register_normalizes_email(self, client):
        response = self.register(client, email="Asha@Example.COM")
        assert response.json()["user"]["email"] == "asha@example.com"

    def test_register_duplicate(self, client):
        self.register(client)

        response = self.register(client, username="someone-else")

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "message": "User with this email or username already exists",
        }

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"username": "ab"}, "body.username"),
            ({"username": "has space"}, "body.username"),
            ({"email": "not-an-email"}, "body.email"),
            ({"password": "12345"}, "body.password"),
            ({"password": "p" * 100}, "body.password"),
            ({"password": "\u20ac" * 30}, "body.password"),
        ],
    )
    def test_register_validation(self, client, overrides, field):
        response = self.register(client, **overrides)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert field in body["error"]["field_errors"]

    def test_register_multibyte_password_at_limit(self, client):
        password = "\u20ac" * 24

        response = self.register(client, password=password)
        assert response.status_code == 201

        response = client.post(
            "/api/auth/login", json={"email": "asha@example.com", "password": password}
        )
        assert response.status_code == 200

    @pytest.mark.parametrize("name", ["hash_password", "verify_password"])
    def test_password_hashing_runs_off_event_loop(self, client, name):
        original = getattr(security, name)
        loop_running = []

        def spy(*args, **kwargs):
            try:
                asyncio.get_running_loop()
                loop_running.append(True)
            except RuntimeError:
                loop_running.append(False)
            return original(*args, **kwargs)

        with patch(f"stockpulse.services.auth_service.{name}", side_effect=spy):
            self.register(client)
            client.post(
                "/api/auth/login", json={"email": "asha@example.com", "password": "secret123"}
            )

        assert loop_running == [False]

    def test_login(self, client):
        self.register(client)

        response = client.post(
            "/api/auth/login", json={"email": "ASHA@example.com", "password": "secret123"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert response.json()["user"]["username"] == "asha"

    def test_login_failures_are_indistinguishable(self, client):
        self.register(client)

        wrong_password = client.post(
            "/api/auth/login", json={"email": "asha@example.com", "password": "nope"}
        )
        unknown_email = client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()

    def test_profile(self, client, auth_headers, stub_provider, quote_payload):
        stub_provider.quotes["TCS.NS"] = quote_payload("TCS.NS")
        client.post("/api/watchlist/TCS.NS", headers=auth_headers)

        response = client.get("/api/auth/profile", headers=auth_headers)

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["username"] == "trader"
        assert user["createdAt"]
        assert [e["symbol"] for e in user["watchlist"]] == ["TCS.NS"]
        assert "passwordHash" not in user

    def test_profile_requires_token(self, client):
        response = client.get("/api/auth/profile")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Token required"}

    def test_profile_invalid_token(self, client):
        response = client.get(
            "/api/auth/profile", headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"


class TestWatchlistEndpoints:
    """Test the authenticated watchlist endpoints."""

    @pytest.fixture(autouse=True)
    def quotes(self, stub_provider, quote_payload):
        stub_provider.quotes["TCS.NS"] = quote_payload("TCS.NS", price=3800.0)
        stub_provider.quotes["ITC.NS"] = quote_payload("ITC.NS", price=430.0)

    @pytest.mark.parametrize(
        "method,path",
        [("get", "/api/watchlist"), ("post", "/api/watchlist/TCS.NS"),
         ("delete", "/api/watchlist/TCS.NS")],
    )
    def test_requires_token(self, client, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 401

    def test_add(self, client, auth_headers):
        response = client.post("/api/watchlist/tcs.ns", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Stock added to watchlist"
        assert response.json()["data"] == {
            "symbol": "TCS.NS",
            "companyName": "Tata Consultancy Services",
        }

    def test_add_twice(self, client, auth_headers):
        client.post("/api/watchlist/TCS.NS", headers=auth_headers)

        response = client.post("/api/watchlist/TCS.NS", headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["message"] == "Stock already in watchlist"

    def test_add_unknown_symbol(self, client, auth_headers):
        response = client.post("/api/watchlist/NOPE.NS", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Stock not found"

    def test_list_with_prices(self, client, auth_headers, stub_provider):
        client.post("/api/watchlist/ITC.NS", headers=auth_headers)
        client.post("/api/watchlist/TCS.NS", headers=auth_headers)
        stub_provider.quotes["ITC.NS"] = UpstreamUnavailableError("ITC.NS", "quote", "timeout")

        response = client.get("/api/watchlist", headers=auth_headers)

        assert response.status_code == 200
        items = response.json()["data"]
        assert [i["symbol"] for i in items] == ["ITC.NS", "TCS.NS"]
        assert items[0]["currentPrice"] == 0
        assert items[0]["companyName"] == "ITC Limited"
        assert items[1]["currentPrice"] == 3800.0
        assert items[1]["changePercent"] == 0.4
        assert items[1]["addedAt"]

    def test_remove_is_idempotent(self, client, auth_headers):
        client.post("/api/watchlist/TCS.NS", headers=auth_headers)

        first = client.delete("/api/watchlist/TCS.NS", headers=auth_headers)
        second = client.delete("/api/watchlist/TCS.NS", headers=auth_headers)

        assert first.status_code == second.status_code == 200
        assert first.json() == {"success": True, "message": "Stock removed from watchlist"}
        assert client.get("/api/watchlist", headers=auth_headers).json()["data"] == []


class TestErrorHandling:
    """Test the uniform error envelope."""

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route Not Found"}

    @pytest.fixture
    def failing_app(self, app):
        broken = Mock()
        broken.get_stock_quotes = AsyncMock(side_effect=RuntimeError("database exploded"))
        app.dependency_overrides[get_market_data_service] = lambda: broken
        return app

    def test_unexpected_error_hides_detail(self, failing_app):
        client = TestClient(failing_app, raise_server_exceptions=False)

        response = client.get("/api/stocks")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Something went wrong"}

    def test_unexpected_error_detail_in_development(self, failing_app, test_settings):
        failing_app.state.settings = test_settings.model_copy(
            update={"environment": "development"}
        )
        client = TestClient(failing_app, raise_server_exceptions=False)

        response = client.get("/api/stocks")

        assert response.status_code == 500
        assert response.json()["error"] == "database exploded"
