"""FastAPI dependency injection: app.state holds singletons; Depends() resolves them.

No external DI container. create_app() (main.py) creates the engine, token
service, password hasher and quotes service once in the lifespan and attaches
them to app.state; these getters are used by Depends().
"""
from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from bullion_gateway.db import UserRepository, get_session
from bullion_gateway.exceptions import InvalidTokenError
from bullion_gateway.security import TokenService
from bullion_gateway.services import AuthService, QuotesService

_bearer = HTTPBearer(auto_error=False, description="Session token from /api/auth/login")


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield one database session per request."""
    with get_session(request.app.state.engine) as session:
        yield session


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_auth_service(
    request: Request,
    session: Annotated[Session, Depends(get_db_session)],
) -> AuthService:
    """Build an AuthService bound to this request's DB session."""
    state = request.app.state
    return AuthService(
        UserRepository(session),
        state.password_hasher,
        state.token_service,
        password_min_length=state.settings.password_min_length,
    )


def get_quotes_service(request: Request) -> QuotesService:
    """Resolve the shared QuotesService (one cache per app) from app.state."""
    return request.app.state.quotes_service


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> int:
    """Validate the bearer token and return the user id it carries."""
    if credentials is None:
        raise InvalidTokenError("Not authenticated")
    return tokens.validate(credentials.credentials)


# Type aliases for route injection
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
QuotesServiceDep = Annotated[QuotesService, Depends(get_quotes_service)]
CurrentUserId = Annotated[int, Depends(get_current_user_id)]
