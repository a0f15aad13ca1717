"""Single-flight quote polling on a market-hours cadence."""
import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Iterator
from contextlib import contextmanager
from datetime import datetime

from portfolio_tracker.market_hours import (DEFAULT_CLOSED_INTERVAL,
                                            DEFAULT_OPEN_INTERVAL, NYSE,
                                            ExchangeCalendar, is_market_open,
                                            poll_interval)
from portfolio_tracker.providers.core import AllSourcesUnavailable
from portfolio_tracker.providers.core.quote_provider_abc import utc_now
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.schemas import Quote
from portfolio_tracker.services.quote_service import FallbackPolicy, QuoteService

logger = logging.getLogger(__name__)


class QuotePoller:
    """Refreshes one symbol through the fallback chain, never twice at once.

    A refresh requested while another is in flight awaits the in-flight one
    instead of starting a second chain, so a stale response can never
    overwrite a fresher one. `current` is replaced wholesale on each success.
    """

    def __init__(
        self,
        service: QuoteService,
        symbol: str,
        *,
        policy: FallbackPolicy | None = None,
        calendar: ExchangeCalendar = NYSE,
        open_interval: float = DEFAULT_OPEN_INTERVAL,
        closed_interval: float = DEFAULT_CLOSED_INTERVAL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._service = service
        self._symbol = normalize_stock_symbol(symbol)
        self._policy = policy
        self._calendar = calendar
        self._open_interval = open_interval
        self._closed_interval = closed_interval
        self._clock = clock
        self._current: Quote | None = None
        self._inflight: asyncio.Task[Quote] | None = None

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def current(self) -> Quote | None:
        """Latest successfully fetched quote, or None before the first refresh."""
        return self._current

    async def _run_refresh(self) -> Quote:
        quote = await self._service.get_quote(self._symbol, self._policy)
        self._current = quote
        return quote

    async def refresh(self) -> Quote:
        """Fetch a new quote, joining the in-flight refresh if there is one.

        Raises:
            AllSourcesUnavailable: propagated from the fallback chain.
        """
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.create_task(self._run_refresh())
        # shield: a cancelled waiter must not cancel the refresh others share
        return await asyncio.shield(self._inflight)

    def next_interval(self) -> float:
        """Seconds until the next poll, from the last quote's session state."""
        if self._current is not None:
            market_open = self._current.is_market_open
        else:
            market_open = is_market_open(self._clock(), self._calendar)
        return poll_interval(market_open, self._open_interval, self._closed_interval)

    async def stream(
        self,
        *,
        stop_event: asyncio.Event,
        dedup_by_value: bool = False,
    ) -> AsyncIterator[Quote]:
        """Poll until stop_event is set, yielding each new quote.

        Exhausted chains are logged and the loop carries on at the normal
        cadence. With dedup_by_value, a quote whose price did not move is skipped.

        Args:
            stop_event: When set, the loop exits. Use one per stream so one
                client disconnecting does not stop the others.
            dedup_by_value: Skip quotes whose price equals the last one yielded.
        """
        last_price: float | None = None
        while not stop_event.is_set():
            try:
                quote = await self.refresh()
            except AllSourcesUnavailable as exc:
                logger.warning("Poll for %s failed: %s", self._symbol, exc)
            else:
                if not (dedup_by_value and quote.price == last_price):
                    last_price = quote.price
                    yield quote
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.next_interval())
            except asyncio.TimeoutError:
                pass


class PollerRegistry:
    """One shared QuotePoller per symbol, kept only while a stream uses it.

    Streams take a lease; the poller is created on the first lease for a
    symbol and dropped when the last lease for it is released, so requests
    for many distinct symbols do not accumulate pollers.
    """

    def __init__(self, factory: Callable[[str], QuotePoller]) -> None:
        self._factory = factory
        self._pollers: dict[str, QuotePoller] = {}
        self._leases: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._pollers)

    def get(self, symbol: str) -> QuotePoller | None:
        return self._pollers.get(normalize_stock_symbol(symbol))

    @contextmanager
    def lease(self, symbol: str) -> Iterator[QuotePoller]:
        symbol = normalize_stock_symbol(symbol)
        if symbol not in self._pollers:
            self._pollers[symbol] = self._factory(symbol)
            self._leases[symbol] = 0
            logger.debug("Created poller for %s", symbol)
        self._leases[symbol] += 1
        try:
            yield self._pollers[symbol]
        finally:
            self._leases[symbol] -= 1
            if self._leases[symbol] == 0:
                del self._leases[symbol]
                del self._pollers[symbol]
                logger.debug("Dropped poller for %s", symbol)
