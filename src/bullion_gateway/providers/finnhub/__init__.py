"""Finnhub stock quote provider."""
from bullion_gateway.providers.finnhub.finnhub_provider import FinnhubProvider

__all__ = ["FinnhubProvider"]
