"""FastAPI dependency injection: app.state holds singletons; Depends() resolves them.

No external DI container. Lifespan (main.py) creates providers and services once
and attaches them to app.state; these getters are used by Depends().
"""
from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request, WebSocket

from portfolio_tracker.config import Settings, get_settings
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.services import (DashboardService, HistoryService,
                                        PollerRegistry, QuotePoller,
                                        QuoteService)


def get_quote_service(request: Request) -> QuoteService:
    """Resolve the fallback-chain QuoteService from app.state (created at startup)."""
    return request.app.state.quote_service


def get_dashboard_service(request: Request) -> DashboardService:
    """Resolve the DashboardService from app.state."""
    return request.app.state.dashboard_service


def get_history_service(request: Request) -> HistoryService:
    """Resolve the HistoryService from app.state."""
    return request.app.state.history_service


async def get_poller_ws(websocket: WebSocket) -> AsyncIterator[QuotePoller]:
    """Lease the shared poller for ?symbol= (default: configured symbol) for one connection."""
    app = websocket.scope["app"]
    settings: Settings = app.state.settings
    symbol = normalize_stock_symbol(websocket.query_params.get("symbol") or settings.symbol)
    pollers: PollerRegistry = app.state.pollers
    with pollers.lease(symbol) as poller:
        yield poller


# Type aliases for route injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
HistoryServiceDep = Annotated[HistoryService, Depends(get_history_service)]
PollerWs = Annotated[QuotePoller, Depends(get_poller_ws)]
