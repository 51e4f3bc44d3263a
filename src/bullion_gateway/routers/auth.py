"""Registration and login routes.

Handlers are sync: AuthService works on a sync SQLModel session, so FastAPI
runs them in its threadpool.
"""
from fastapi import APIRouter, status

from bullion_gateway.deps import AuthServiceDep, CurrentUserId
from bullion_gateway.schemas import (AuthResponse, LoginRequest,
                                     RegisterRequest, UserResponse)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(body: RegisterRequest, auth: AuthServiceDep) -> UserResponse:
    """Create an account.

    Returns the public user fields. 400 on invalid input or an email that is
    already registered.
    """
    return auth.register(body)


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, auth: AuthServiceDep) -> AuthResponse:
    """Exchange email and password for a bearer token.

    401 with the same message whether the email is unknown or the password wrong.
    """
    return auth.login(body)


@router.get("/me", response_model=UserResponse)
def me(user_id: CurrentUserId, auth: AuthServiceDep) -> UserResponse:
    """Current user (same as GET /api/users/me)."""
    return auth.get_current_user(user_id)
