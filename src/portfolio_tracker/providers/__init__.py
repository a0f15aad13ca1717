"""Quote and history providers for the tracked stock.

Every quote provider implements QuoteProviderABC and returns the canonical
Quote, or raises a ProviderError subclass. Providers never retry or fall
back; the QuoteService fallback chain does.

Example:
    async with YahooFinanceProvider() as provider:
        quote = await provider.get_quote("UWMC")
        print(f"{quote.symbol}: ${quote.price} ({quote.source})")
"""
from portfolio_tracker.providers.core import QuoteProviderABC
from portfolio_tracker.providers.history import YFinanceHistoryProvider
from portfolio_tracker.providers.quotes import (AlphaVantageProvider,
                                                FinnhubProvider,
                                                TwelveDataProvider,
                                                YahooFinanceProvider)
from portfolio_tracker.providers.synthetic import SyntheticQuoteGenerator

__all__ = [
    "AlphaVantageProvider",
    "FinnhubProvider",
    "QuoteProviderABC",
    "SyntheticQuoteGenerator",
    "TwelveDataProvider",
    "YFinanceHistoryProvider",
    "YahooFinanceProvider",
]
