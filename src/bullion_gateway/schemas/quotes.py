"""Quote and symbol-search schemas for API and runtime use. Not persisted to DB."""
from enum import Enum

from pydantic import ConfigDict

from bullion_gateway.schemas.base import CamelModel


class QuoteStatus(str, Enum):
    """How a symbol's entry in a quotes response was produced."""

    FRESH = "fresh"  # fetched from upstream during this request
    CACHED = "cached"  # cache entry younger than the TTL
    STALE = "stale"  # expired cache entry served while the throttle is closed
    THROTTLED = "throttled"  # throttle closed and nothing cached
    ERROR = "error"  # upstream call failed


class QuotePayload(CamelModel):
    """Fields kept from an upstream quote: last price, absolute and percent change."""

    model_config = ConfigDict(frozen=True)

    price: float | None = None
    change: float | None = None
    change_pct: float | None = None


class QuoteResult(CamelModel):
    """One symbol in a quotes response: either payload fields or an error."""

    status: QuoteStatus
    price: float | None = None
    change: float | None = None
    change_pct: float | None = None
    error: str | None = None

    @classmethod
    def from_payload(cls, payload: QuotePayload, status: QuoteStatus) -> "QuoteResult":
        return cls(
            status=status,
            price=payload.price,
            change=payload.change,
            change_pct=payload.change_pct,
        )

    @classmethod
    def failed(cls, message: str, status: QuoteStatus = QuoteStatus.ERROR) -> "QuoteResult":
        return cls(status=status, error=message)


class QuotesResponse(CamelModel):
    quotes: dict[str, QuoteResult]


class SymbolMatch(CamelModel):
    """Reduced projection of an upstream symbol-search hit."""

    symbol: str
    description: str
