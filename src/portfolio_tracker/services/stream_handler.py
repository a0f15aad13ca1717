"""WebSocket stream handling: push quotes from a poller until the client leaves."""
import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect

from portfolio_tracker.services.poller import QuotePoller

logger = logging.getLogger(__name__)


async def _watch_disconnect(websocket: WebSocket, stop_event: asyncio.Event) -> None:
    # Clients never send anything; the only message that matters is the close.
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
    finally:
        stop_event.set()


async def handle_websocket_stream(websocket: WebSocket, poller: QuotePoller) -> None:
    """Accept the WebSocket, then send each polled Quote as camelCase JSON.

    Uses a per-connection stop_event so one client disconnecting does not stop
    other clients sharing the same poller. The stop_event is also set as soon
    as the client closes, so a closed-market wait does not outlive the socket.
    """
    await websocket.accept()
    stop_event = asyncio.Event()
    watcher = asyncio.create_task(_watch_disconnect(websocket, stop_event))
    try:
        async for quote in poller.stream(stop_event=stop_event):
            await websocket.send_json(quote.model_dump(mode="json", by_alias=True))
    except WebSocketDisconnect:
        logger.debug("Quote stream client disconnected (%s)", poller.symbol)
    except Exception as exc:
        logger.exception("Quote stream error for %s: %s", poller.symbol, exc)
        try:
            await websocket.close(code=1011, reason="Stream error")
        except RuntimeError:
            logger.debug("WebSocket already closed")
    finally:
        stop_event.set()
        watcher.cancel()
        # wait() collects the watcher without raising its outcome
        await asyncio.wait([watcher])
        if not watcher.cancelled() and watcher.exception() is not None:
            logger.debug(
                "Disconnect watcher for %s ended: %r", poller.symbol, watcher.exception()
            )
