"""Service layer: fallback chain, derived metrics and polling."""
from portfolio_tracker.services.dashboard import DashboardService
from portfolio_tracker.services.history_service import HistoryService
from portfolio_tracker.services.poller import PollerRegistry, QuotePoller
from portfolio_tracker.services.quote_service import FallbackPolicy, QuoteService

__all__ = [
    "DashboardService",
    "FallbackPolicy",
    "HistoryService",
    "PollerRegistry",
    "QuotePoller",
    "QuoteService",
]
