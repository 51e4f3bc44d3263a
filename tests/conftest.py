from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from bullion_gateway.config import Settings
from bullion_gateway.db import UserRepository, init_db
from bullion_gateway.main import create_app
from bullion_gateway.providers import QuoteProviderABC
from bullion_gateway.schemas import QuotePayload, SymbolMatch
from bullion_gateway.security import PasswordHasher, TokenService
from bullion_gateway.services import AuthService, QuoteCache, create_quotes_service

TEST_SECRET = "test-signing-secret-0123456789abcdef"
TEST_ROUNDS = 1000


class FakeClock:
    """Manually advanced clock; call it to read the time."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeQuoteProvider(QuoteProviderABC):
    """Upstream double that records every call.

    ``quotes`` maps symbol -> QuotePayload, or an exception to raise.
    Unknown symbols raise ValueError like the real provider.
    """

    def __init__(self) -> None:
        self.quotes: dict[str, QuotePayload | Exception] = {
            "AAPL": QuotePayload(price=189.5, change=1.25, change_pct=0.66),
            "MSFT": QuotePayload(price=415.1, change=-2.4, change_pct=-0.57),
            "GOOGL": QuotePayload(price=171.0, change=0.0, change_pct=0.0),
        }
        self.search_results: list[SymbolMatch] | Exception = [
            SymbolMatch(symbol="AAPL", description="APPLE INC"),
            SymbolMatch(symbol="APLE", description="APPLE HOSPITALITY REIT INC"),
        ]
        self.quote_calls: list[str] = []
        self.search_calls: list[str] = []
        self.closed = False

    async def get_quote(self, symbol: str) -> QuotePayload:
        self.quote_calls.append(symbol)
        result = self.quotes.get(symbol)
        if isinstance(result, Exception):
            raise result
        if result is None:
            raise ValueError(f"Stock '{symbol}' not found or has no price data")
        return result

    async def search(self, query: str) -> list[SymbolMatch]:
        self.search_calls.append(query)
        if isinstance(self.search_results, Exception):
            raise self.search_results
        return list(self.search_results)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_provider():
    return FakeQuoteProvider()


@pytest.fixture
def quote_cache(clock):
    return QuoteCache(ttl_seconds=60.0, min_interval_seconds=10.0, clock=clock)


@pytest.fixture
def quotes_service(fake_provider, quote_cache):
    return create_quotes_service(fake_provider, quote_cache)


@pytest.fixture
def engine():
    """In-memory SQLite shared across threads (TestClient runs sync routes in a threadpool)."""
    db_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=TEST_ROUNDS)


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET, 3600)


@pytest.fixture
def auth_service(session, hasher, token_service):
    return AuthService(UserRepository(session), hasher, token_service, password_min_length=10)


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        jwt_secret=TEST_SECRET,
        jwt_expiration_seconds=3600,
        password_hash_rounds=TEST_ROUNDS,
        finnhub_api_key="test-key",
    )


@pytest.fixture
def client(settings, engine, fake_provider):
    app = create_app(settings, quote_provider=fake_provider, engine=engine)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """Register a user through the API; returns (request body, response json)."""
    body = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "password": "analytical-engine",
    }
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201
    return body, response.json()
