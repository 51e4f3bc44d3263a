"""Factory for creating QuotesService instances with different provider configurations."""
from bullion_gateway.providers.core import (ProviderErrorMapper,
                                            QuoteProviderABC)
from bullion_gateway.services.quote_cache import QuoteCache
from bullion_gateway.services.quotes_service import QuotesService


def create_quotes_service(
    provider: QuoteProviderABC,
    cache: QuoteCache,
    resource_name: str = "Stock",
    api_name: str = "Finnhub",
) -> QuotesService:
    """Create a QuotesService with the given provider, cache and error mapping config.

    Args:
        provider: The upstream quote provider (e.g. FinnhubProvider).
        cache: Cache and throttle state, one per application.
        resource_name: Label for not-found messages (e.g. "Stock").
        api_name: Label for upstream errors (e.g. "Finnhub").

    Returns:
        A configured QuotesService instance.
    """
    error_mapper = ProviderErrorMapper(resource_name=resource_name, api_name=api_name)
    return QuotesService(provider, cache, error_mapper)
