"""Twelve Data quote provider."""
from portfolio_tracker.providers.quotes.twelvedata.twelve_data_provider import \
    TwelveDataProvider

__all__ = ["TwelveDataProvider"]
