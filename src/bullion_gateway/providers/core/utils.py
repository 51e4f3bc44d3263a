"""Shared utilities for quote providers."""


def normalize_stock_symbol(symbol: str) -> str:
    """Normalize a stock symbol (strip, uppercase). Used for cache keys and upstream calls."""
    return symbol.strip().upper()


def parse_symbols(raw: str | None) -> list[str]:
    """Split a comma-separated symbol list into unique normalized symbols.

    Empty and whitespace-only tokens are dropped; order of first appearance is kept,
    so "aapl, MSFT,,AAPL" gives ["AAPL", "MSFT"].
    """
    symbols: list[str] = []
    for part in (raw or "").split(","):
        sym = normalize_stock_symbol(part)
        if sym and sym not in symbols:
            symbols.append(sym)
    return symbols
