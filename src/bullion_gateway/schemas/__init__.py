"""Pydantic schemas for API and runtime use. Not persisted to DB."""
from bullion_gateway.schemas.auth import (AuthResponse, LoginRequest,
                                          RegisterRequest, UserResponse)
from bullion_gateway.schemas.quotes import (QuotePayload, QuoteResult,
                                            QuotesResponse, QuoteStatus,
                                            SymbolMatch)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "QuotePayload",
    "QuoteResult",
    "QuoteStatus",
    "QuotesResponse",
    "RegisterRequest",
    "SymbolMatch",
    "UserResponse",
]
