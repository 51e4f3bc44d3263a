"""Stock quote proxy routes (Finnhub behind a cache and throttle)."""
from fastapi import APIRouter, Query

from bullion_gateway.deps import QuotesServiceDep
from bullion_gateway.schemas import QuotesResponse, SymbolMatch

router = APIRouter(prefix="/api", tags=["quotes"])


@router.get(
    "/quotes",
    response_model=QuotesResponse,
    response_model_exclude_none=True,
)
async def get_quotes(
    quotes: QuotesServiceDep,
    symbols: str = Query(..., description="Comma-separated tickers, e.g. AAPL,MSFT"),
) -> QuotesResponse:
    """Get quotes for several symbols.

    Always 200. Each symbol maps to {price, change, changePct, status} or
    {error, status}; status is one of fresh, cached, stale, throttled, error.
    """
    return await quotes.get_quotes(symbols)


@router.get("/search", response_model=list[SymbolMatch])
async def search_symbols(
    quotes: QuotesServiceDep,
    q: str = Query(..., min_length=1, description="Free-text symbol or company query"),
) -> list[SymbolMatch]:
    """Search symbols upstream. Returns [{symbol, description}]; 502 if upstream fails."""
    return await quotes.search(q)
