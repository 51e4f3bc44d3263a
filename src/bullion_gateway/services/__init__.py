"""Service layer: auth, quote caching/throttling and upstream error mapping."""
from bullion_gateway.services.auth_service import AuthService
from bullion_gateway.services.quote_cache import (CacheDecision, CachedQuote,
                                                  QuoteCache)
from bullion_gateway.services.quotes_factory import create_quotes_service
from bullion_gateway.services.quotes_service import QuotesService

__all__ = [
    "AuthService",
    "CacheDecision",
    "CachedQuote",
    "QuoteCache",
    "QuotesService",
    "create_quotes_service",
]
