"""Alpha Vantage quote provider."""
from portfolio_tracker.providers.quotes.alphavantage.alpha_vantage_provider import \
    AlphaVantageProvider

__all__ = ["AlphaVantageProvider"]
