from __future__ import annotations

import time

import httpx
from sqlmodel import Session, select

from bullion_gateway.db import User
from bullion_gateway.security import TokenService


def login(client, email="ada@example.com", password="analytical-engine"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    def test_health(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestRegister:
    def test_created_with_public_fields(self, client, registered_user):
        _, user = registered_user

        assert set(user) == {"id", "firstName", "lastName", "email"}
        assert user["firstName"] == "Ada"
        assert user["email"] == "ada@example.com"

    def test_duplicate_email(self, client, registered_user, engine):
        body, _ = registered_user

        response = client.post("/api/auth/register", json={**body, "firstName": "Other"})

        assert response.status_code == 400
        assert response.json() == {"error": "Email already in use"}
        with Session(engine) as session:
            users = session.exec(select(User)).all()
        assert [u.first_name for u in users] == ["Ada"]

    def test_names_are_trimmed(self, client):
        response = client.post(
            "/api/auth/register",
            json={"firstName": "  Alan ", "lastName": "Turing",
                  "email": "alan@example.com", "password": "enigma-machine"},
        )

        assert response.status_code == 201
        assert response.json()["firstName"] == "Alan"

    def test_validation_failures_are_400(self, client):
        valid = {"firstName": "Alan", "lastName": "Turing",
                 "email": "alan@example.com", "password": "enigma-machine"}
        cases = [
            {"firstName": "   "},
            {"lastName": "x" * 101},
            {"email": "not-an-email"},
            {"email": "a" * 250 + "@example.com"},
            {"password": "short"},
        ]
        for override in cases:
            response = client.post("/api/auth/register", json={**valid, **override})
            assert response.status_code == 400, override
            assert "error" in response.json()

    def test_rejected_password_not_echoed(self, client):
        response = client.post(
            "/api/auth/register",
            json={"firstName": "", "lastName": "Turing",
                  "email": "alan@example.com", "password": "hunter2-hunter2"},
        )

        assert response.status_code == 400
        assert "hunter2-hunter2" not in response.text

    def test_missing_body_fields(self, client):
        response = client.post("/api/auth/register", json={"email": "alan@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"


class TestLogin:
    def test_success(self, client, registered_user):
        _, user = registered_user

        response = login(client)

        assert response.status_code == 200
        data = response.json()
        assert data["user"] == user
        assert data["token"]
        assert "passwordHash" not in data["user"]

    def test_wrong_password_and_unknown_email_look_the_same(self, client, registered_user):
        wrong_password = login(client, password="not-the-password")
        unknown_email = login(client, email="nobody@example.com")

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


class TestCurrentUser:
    def test_me_with_token(self, client, registered_user):
        _, user = registered_user
        token = login(client).json()["token"]

        for path in ("/api/users/me", "/api/auth/me"):
            response = client.get(path, headers=bearer(token))
            assert response.status_code == 200
            assert response.json() == user

    def test_missing_token(self, client):
        response = client.get("/api/users/me")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token(self, client):
        response = client.get("/api/users/me", headers=bearer("garbage.token.value"))

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_expired_token(self, client, registered_user, settings):
        _, user = registered_user
        issued_long_ago = TokenService(settings.jwt_secret, 60, clock=lambda: time.time() - 3600)

        response = client.get("/api/users/me", headers=bearer(issued_long_ago.issue(user["id"])))

        assert response.status_code == 401
        assert response.json() == {"error": "Token expired"}

    def test_user_removed_after_login(self, client, registered_user, engine):
        token = login(client).json()["token"]
        with Session(engine) as session:
            session.delete(session.exec(select(User)).one())
            session.commit()

        response = client.get("/api/users/me", headers=bearer(token))

        assert response.status_code == 404


class TestQuotes:
    def test_quotes_shape_and_cache_status(self, client, fake_provider):
        first = client.get("/api/quotes", params={"symbols": "aapl,AAPL"})
        second = client.get("/api/quotes", params={"symbols": "AAPL,MSFT"})

        assert first.status_code == 200
        assert first.json() == {
            "quotes": {
                "AAPL": {"price": 189.5, "change": 1.25, "changePct": 0.66, "status": "fresh"}
            }
        }
        quotes = second.json()["quotes"]
        assert quotes["AAPL"] == {"price": 189.5, "change": 1.25, "changePct": 0.66,
                                  "status": "cached"}
        assert quotes["MSFT"] == {"error": "rate_limited", "status": "throttled"}
        assert fake_provider.quote_calls == ["AAPL"]

    def test_upstream_failure_is_per_symbol(self, client, fake_provider):
        fake_provider.quotes["AAPL"] = httpx.ConnectError("connection refused")

        response = client.get("/api/quotes", params={"symbols": "AAPL"})

        assert response.status_code == 200
        assert response.json()["quotes"]["AAPL"] == {
            "error": "Finnhub unreachable: connection refused",
            "status": "error",
        }

    def test_symbols_param_required(self, client):
        assert client.get("/api/quotes").status_code == 400

    def test_blank_symbols(self, client):
        response = client.get("/api/quotes", params={"symbols": " , "})

        assert response.status_code == 200
        assert response.json() == {"quotes": {}}


class TestSearch:
    def test_search(self, client):
        response = client.get("/api/search", params={"q": "apple"})

        assert response.status_code == 200
        assert response.json() == [
            {"symbol": "AAPL", "description": "APPLE INC"},
            {"symbol": "APLE", "description": "APPLE HOSPITALITY REIT INC"},
        ]

    def test_upstream_failure_is_502(self, client, fake_provider):
        fake_provider.search_results = httpx.ConnectError("connection refused")

        response = client.get("/api/search", params={"q": "apple"})

        assert response.status_code == 502
        assert response.json() == {"error": "Finnhub unreachable: connection refused"}

    def test_query_required(self, client):
        assert client.get("/api/search", params={"q": ""}).status_code == 400


class TestLifespan:
    def test_provider_closed_on_shutdown(self, settings, engine, fake_provider):
        from fastapi.testclient import TestClient

        from bullion_gateway.main import create_app

        with TestClient(create_app(settings, quote_provider=fake_provider, engine=engine)):
            assert not fake_provider.closed

        assert fake_provider.closed
