"""Domain concept for mapping provider exceptions to application errors."""
import asyncio
from dataclasses import dataclass

import httpx

from bullion_gateway.exceptions import UpstreamError, UpstreamThrottledError

# Exceptions from providers we convert; all others propagate (e.g. bugs, BaseException).
# pydantic's ValidationError (malformed upstream payload) is a ValueError.
PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    OSError,
    asyncio.TimeoutError,
    httpx.HTTPError,
    UpstreamError,
)


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Maps provider/backend exceptions to UpstreamError with a client-safe message.

    Inject this into services so every upstream failure, per-symbol or
    gateway-level, is described the same way.
    """

    resource_name: str = "Resource"
    api_name: str = "API"

    def to_upstream_error(
        self,
        exc: Exception,
        symbol: str | None = None,
    ) -> UpstreamError:
        """Map a provider exception to UpstreamError (or UpstreamThrottledError for 429).

        Args:
            exc: The exception raised by the provider.
            symbol: Optional symbol to include in the message (e.g. "AAPL").
        """
        if isinstance(exc, UpstreamError):
            return exc
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            if status == 429:
                return UpstreamThrottledError()
            if status == 404:
                return UpstreamError(self._not_found(symbol))
            if status in (401, 403):
                return UpstreamError(f"{self.api_name} rejected the request ({status})")
            return UpstreamError(f"{self.api_name} error ({status})")
        if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
            detail = f"Request to {self.api_name} timed out"
            if symbol is not None:
                detail = f"{detail} for '{symbol}'"
            return UpstreamError(detail)
        if isinstance(exc, (httpx.HTTPError, OSError)):
            return UpstreamError(f"{self.api_name} unreachable: {exc}")
        if isinstance(exc, ValueError):
            return UpstreamError(str(exc) or self._not_found(symbol))
        if isinstance(exc, (KeyError, TypeError)):
            return UpstreamError(f"Malformed response from {self.api_name}")
        return UpstreamError(f"{self.api_name} error")

    def _not_found(self, symbol: str | None) -> str:
        if symbol is None:
            return f"{self.resource_name} not found"
        return f"{self.resource_name} '{symbol}' not found"
