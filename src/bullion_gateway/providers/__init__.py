"""Upstream stock quote providers.

All providers implement QuoteProviderABC and return QuotePayload and
SymbolMatch objects; caching and throttling live in the service layer.

Example:
    async with FinnhubProvider(api_key="...") as provider:
        quote = await provider.get_quote("AAPL")
        print(f"AAPL: ${quote.price}")
"""
from bullion_gateway.providers.core import (PROVIDER_EXCEPTIONS,
                                            ProviderErrorMapper,
                                            QuoteProviderABC)
from bullion_gateway.providers.finnhub import FinnhubProvider

__all__ = [
    "FinnhubProvider",
    "PROVIDER_EXCEPTIONS",
    "ProviderErrorMapper",
    "QuoteProviderABC",
]
