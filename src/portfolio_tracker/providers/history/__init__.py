"""Price history providers."""
from portfolio_tracker.providers.history.yfinance_history import \
    YFinanceHistoryProvider

__all__ = ["YFinanceHistoryProvider"]
