"""User routes (bearer token required)."""
from fastapi import APIRouter

from bullion_gateway.deps import AuthServiceDep, CurrentUserId
from bullion_gateway.schemas import UserResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_me(user_id: CurrentUserId, auth: AuthServiceDep) -> UserResponse:
    """Return the authenticated user.

    401 if the token is missing or invalid; 404 if the account no longer exists.
    """
    return auth.get_current_user(user_id)
