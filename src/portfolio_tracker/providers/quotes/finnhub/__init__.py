"""Finnhub quote provider."""
from portfolio_tracker.providers.quotes.finnhub.finnhub_provider import \
    FinnhubProvider

__all__ = ["FinnhubProvider"]
