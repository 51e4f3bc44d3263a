"""Core provider abstractions."""
from bullion_gateway.providers.core.error_mapper import (PROVIDER_EXCEPTIONS,
                                                         ProviderErrorMapper)
from bullion_gateway.providers.core.quote_provider_abc import QuoteProviderABC
from bullion_gateway.providers.core.utils import (normalize_stock_symbol,
                                                  parse_symbols)

__all__ = [
    "PROVIDER_EXCEPTIONS",
    "ProviderErrorMapper",
    "QuoteProviderABC",
    "normalize_stock_symbol",
    "parse_symbols",
]
