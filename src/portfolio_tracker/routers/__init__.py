"""API routers.

Includes routes for:
- /quote - Canonical quote through the provider fallback chain
- /quote/stream - WebSocket quote stream (market-hours cadence)
- /portfolio - Holding valuation, projections and milestones
- /vesting - RSU vesting analytics
- /history - Daily bars and technical indicators
"""
from portfolio_tracker.routers.history import router as history_router
from portfolio_tracker.routers.portfolio import router as portfolio_router
from portfolio_tracker.routers.quote import router as quote_router

__all__ = [
    "history_router",
    "portfolio_router",
    "quote_router",
]
