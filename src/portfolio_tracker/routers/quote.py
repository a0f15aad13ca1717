"""Quote routes: one-shot quote and a WebSocket stream driven by the poller."""
from fastapi import APIRouter, Query, Response, WebSocket

from portfolio_tracker.deps import PollerWs, QuoteServiceDep, SettingsDep
from portfolio_tracker.market_hours import poll_interval
from portfolio_tracker.providers.core.error_mapper import NO_CACHE_HEADERS
from portfolio_tracker.schemas import ErrorResponse, Quote
from portfolio_tracker.services import FallbackPolicy
from portfolio_tracker.services.stream_handler import handle_websocket_stream

router = APIRouter(prefix="/quote", tags=["quote"])


def policy_override(allow_synthetic: bool | None) -> FallbackPolicy | None:
    """Per-request policy from the query string; None keeps the configured default."""
    if allow_synthetic is None:
        return None
    return FallbackPolicy(allow_synthetic=allow_synthetic)


@router.get(
    "",
    response_model=Quote,
    responses={503: {"model": ErrorResponse, "description": "Every quote source failed"}},
)
async def get_quote(
    response: Response,
    service: QuoteServiceDep,
    settings: SettingsDep,
    symbol: str | None = Query(default=None, description="Ticker, defaults to the tracked symbol"),
    allow_synthetic: bool | None = Query(
        default=None, description="Override the synthetic-fallback policy for this request"
    ),
) -> Quote:
    """Get the current quote through the provider fallback chain.

    Never cached. `X-Next-Update-Ms` tells the client when to poll again
    (short while the market is open, long otherwise).
    """
    quote = await service.get_quote(symbol or settings.symbol, policy_override(allow_synthetic))
    response.headers.update(NO_CACHE_HEADERS)
    interval = poll_interval(
        quote.is_market_open,
        settings.poll_interval_open_seconds,
        settings.poll_interval_closed_seconds,
    )
    response.headers["X-Next-Update-Ms"] = str(int(interval * 1000))
    return quote


@router.websocket("/stream")
async def stream_quote(websocket: WebSocket, poller: PollerWs) -> None:
    """Stream quotes over WebSocket: /quote/stream?symbol=UWMC.

    Each message is a Quote JSON. Cadence follows market hours.
    """
    await handle_websocket_stream(websocket, poller)
