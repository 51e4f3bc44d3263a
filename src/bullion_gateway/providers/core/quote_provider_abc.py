"""Abstract base class for upstream quote providers."""
from abc import ABC, abstractmethod

from bullion_gateway.schemas import QuotePayload, SymbolMatch


class QuoteProviderABC(ABC):
    """Base interface for upstream stock-quote APIs.

    Implementations do no caching or throttling of their own; QuotesService
    decides when an upstream call is allowed.
    """

    @abstractmethod
    async def get_quote(self, symbol: str) -> QuotePayload:
        """Fetch the current quote for a symbol.

        Args:
            symbol: Normalized (uppercase) ticker, e.g. "AAPL".

        Returns:
            A QuotePayload with price, change and percent change.
        """

    @abstractmethod
    async def search(self, query: str) -> list[SymbolMatch]:
        """Search upstream symbols matching a free-text query.

        Returns:
            Matches reduced to symbol and description.
        """

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "QuoteProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
