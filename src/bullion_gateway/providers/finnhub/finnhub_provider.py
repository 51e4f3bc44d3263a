"""Finnhub market data provider for stock quotes and symbol search."""
import httpx

from bullion_gateway.providers.core import (QuoteProviderABC,
                                            normalize_stock_symbol)
from bullion_gateway.providers.finnhub.models import (FinnhubQuote,
                                                      FinnhubSearchResponse)
from bullion_gateway.schemas import QuotePayload, SymbolMatch


class FinnhubProvider(QuoteProviderABC):
    """Quote provider backed by the Finnhub REST API.

    The API key travels in the X-Finnhub-Token header, never in the URL, so it
    cannot leak through error messages or access logs that include URLs.
    Every request is bounded by the client timeout.
    """

    BASE_URL = "https://finnhub.io/api/v1"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = 5.0,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Finnhub provider.

        Args:
            api_key: Finnhub API token.
            base_url: API root; overridable for tests and proxies.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests pass httpx.MockTransport).
        """
        headers = {"Accept": "application/json", "X-Finnhub-Token": api_key}
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def get_quote(self, symbol: str) -> QuotePayload:
        """Fetch the current quote for a stock symbol.

        Raises:
            ValueError: Finnhub has no price data for the symbol.
            httpx.HTTPError: transport failure, timeout or non-2xx status.
        """
        sym = normalize_stock_symbol(symbol)
        response = await self._client.get("/quote", params={"symbol": sym})
        response.raise_for_status()
        quote = FinnhubQuote.model_validate(response.json())
        if quote.is_empty:
            raise ValueError(f"Stock '{sym}' not found or has no price data")
        return QuotePayload(
            price=quote.current,
            change=quote.change,
            change_pct=quote.percent_change,
        )

    async def search(self, query: str) -> list[SymbolMatch]:
        """Search symbols; only symbol and description are passed through."""
        response = await self._client.get("/search", params={"q": query})
        response.raise_for_status()
        data = FinnhubSearchResponse.model_validate(response.json())
        return [
            SymbolMatch(symbol=item.symbol, description=item.description)
            for item in data.result
        ]

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
