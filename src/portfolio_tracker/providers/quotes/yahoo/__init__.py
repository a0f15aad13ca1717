"""Yahoo Finance quote provider."""
from portfolio_tracker.providers.quotes.yahoo.yahoo_provider import \
    YahooFinanceProvider

__all__ = ["YahooFinanceProvider"]
