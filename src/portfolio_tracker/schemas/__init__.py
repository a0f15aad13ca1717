"""Pydantic schemas for API and runtime use. Not persisted anywhere."""
from portfolio_tracker.schemas.history import (HistoryPoint, HistoryResponse,
                                               TechnicalIndicators)
from portfolio_tracker.schemas.portfolio import (HoldingsConfig, Milestone,
                                                 PortfolioMetrics,
                                                 PortfolioSummary, Projection)
from portfolio_tracker.schemas.quote import (CamelModel, ErrorResponse,
                                             Quote, QuoteSource,
                                             ReferenceData)
from portfolio_tracker.schemas.vesting import (TaxConfig, VestingAnalytics,
                                               VestingEvent,
                                               VestingEventAnalytics)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "HistoryPoint",
    "HistoryResponse",
    "HoldingsConfig",
    "Milestone",
    "PortfolioMetrics",
    "PortfolioSummary",
    "Projection",
    "Quote",
    "QuoteSource",
    "ReferenceData",
    "TaxConfig",
    "TechnicalIndicators",
    "VestingAnalytics",
    "VestingEvent",
    "VestingEventAnalytics",
]
