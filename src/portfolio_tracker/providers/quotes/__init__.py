"""Quote providers, one per external data source."""
from portfolio_tracker.providers.quotes.alphavantage import AlphaVantageProvider
from portfolio_tracker.providers.quotes.finnhub import FinnhubProvider
from portfolio_tracker.providers.quotes.twelvedata import TwelveDataProvider
from portfolio_tracker.providers.quotes.yahoo import YahooFinanceProvider

__all__ = [
    "AlphaVantageProvider",
    "FinnhubProvider",
    "TwelveDataProvider",
    "YahooFinanceProvider",
]
