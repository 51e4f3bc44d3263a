"""API routers.

Includes routes for:
- /api/auth - Registration, login, current user
- /api/users - Current user (bearer token)
- /api/quotes, /api/search - Cached Finnhub quote proxy and symbol search
"""
from bullion_gateway.routers.auth import router as auth_router
from bullion_gateway.routers.quotes import router as quotes_router
from bullion_gateway.routers.users import router as users_router

__all__ = [
    "auth_router",
    "quotes_router",
    "users_router",
]
