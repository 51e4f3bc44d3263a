"""Quote proxy service: cache, throttle, stale fallback and symbol search.

QuotesService wraps a QuoteProviderABC with a shared QuoteCache and maps
provider failures to UpstreamError via ProviderErrorMapper.
"""
import logging

from bullion_gateway.exceptions import (InputValidationError,
                                        UpstreamThrottledError)
from bullion_gateway.providers.core import (PROVIDER_EXCEPTIONS,
                                            ProviderErrorMapper,
                                            QuoteProviderABC,
                                            normalize_stock_symbol,
                                            parse_symbols)
from bullion_gateway.schemas import (QuoteResult, QuotesResponse, QuoteStatus,
                                     SymbolMatch)
from bullion_gateway.services.quote_cache import CacheDecision, QuoteCache

logger = logging.getLogger(__name__)


class QuotesService:
    """Answers quote requests while keeping upstream calls under the throttle.

    A quotes response always succeeds as a whole; each symbol carries its own
    status (fresh, cached, stale, throttled or error).
    """

    def __init__(
        self,
        provider: QuoteProviderABC,
        cache: QuoteCache,
        error_mapper: ProviderErrorMapper,
    ) -> None:
        """Initialize with provider, shared cache and error mapping config.

        Args:
            provider: Upstream quote provider (e.g. FinnhubProvider).
            cache: Cache and throttle state shared by all requests.
            error_mapper: Maps provider exceptions to UpstreamError (resource_name, api_name).
        """
        self._provider = provider
        self._cache = cache
        self._error_mapper = error_mapper

    @property
    def cache(self) -> QuoteCache:
        return self._cache

    async def get_quotes(self, symbols: str | list[str]) -> QuotesResponse:
        """Resolve a comma-separated (or listed) set of symbols.

        Symbols are uppercased and de-duplicated, so "AAPL,aapl" yields one entry.
        Empty tokens are skipped.
        """
        raw = symbols if isinstance(symbols, str) else ",".join(symbols)
        quotes: dict[str, QuoteResult] = {}
        for sym in parse_symbols(raw):
            quotes[sym] = await self.get_quote(sym)
        return QuotesResponse(quotes=quotes)

    async def get_quote(self, symbol: str) -> QuoteResult:
        """Resolve one symbol from cache or upstream. Never raises for upstream failures."""
        sym = normalize_stock_symbol(symbol)
        if not sym:
            raise InputValidationError("Symbol must not be empty")

        decision, entry = self._cache.resolve(sym)
        if decision is CacheDecision.HIT:
            return QuoteResult.from_payload(entry.payload, QuoteStatus.CACHED)
        if decision is CacheDecision.STALE:
            logger.info("Upstream throttle closed; serving stale quote for %s", sym)
            return QuoteResult.from_payload(entry.payload, QuoteStatus.STALE)
        if decision is CacheDecision.THROTTLED:
            logger.info("Upstream throttle closed; no cached quote for %s", sym)
            return QuoteResult.failed(
                UpstreamThrottledError.default_message, QuoteStatus.THROTTLED
            )

        try:
            payload = await self._provider.get_quote(sym)
        except PROVIDER_EXCEPTIONS as e:
            error = self._error_mapper.to_upstream_error(e, symbol=sym)
            if isinstance(error, UpstreamThrottledError):
                logger.warning("Upstream rate-limited quote for %s", sym)
                if entry is not None:
                    return QuoteResult.from_payload(entry.payload, QuoteStatus.STALE)
                return QuoteResult.failed(error.message, QuoteStatus.THROTTLED)
            logger.warning("Quote fetch for %s failed: %s", sym, error.message)
            return QuoteResult.failed(error.message)

        self._cache.store(sym, payload)
        return QuoteResult.from_payload(payload, QuoteStatus.FRESH)

    async def search(self, query: str) -> list[SymbolMatch]:
        """Proxy a symbol search upstream (no cache, no throttle).

        Raises:
            InputValidationError: empty query.
            UpstreamError: any upstream failure (rendered as 502).
        """
        query = query.strip()
        if not query:
            raise InputValidationError("Query must not be empty")
        try:
            return await self._provider.search(query)
        except PROVIDER_EXCEPTIONS as e:
            error = self._error_mapper.to_upstream_error(e)
            logger.warning("Symbol search failed: %s", error.message)
            if error is e:
                raise
            raise error from e

    async def close(self) -> None:
        """Release the provider's resources."""
        await self._provider.close()
