"""Password hashing and session tokens."""
from bullion_gateway.security.passwords import PasswordHasher
from bullion_gateway.security.tokens import TokenService

__all__ = ["PasswordHasher", "TokenService"]
