"""Tests for the single-flight quote poller."""
import asyncio

import pytest

from portfolio_tracker.providers.core import AllSourcesUnavailable, HttpError
from portfolio_tracker.services import PollerRegistry, QuotePoller, QuoteService
from tests.conftest import WEEKEND_AT, StubProvider, make_quote


def _poller(provider: StubProvider, clock, **kwargs) -> QuotePoller:
    kwargs.setdefault("open_interval", 0.01)
    kwargs.setdefault("closed_interval", 0.01)
    return QuotePoller(QuoteService([provider]), "uwmc", clock=clock, **kwargs)


@pytest.mark.asyncio
async def test_concurrent_refreshes_share_one_fetch(clock):
    provider = StubProvider("yahoo", make_quote(), delay=0.05)
    poller = _poller(provider, clock)

    first, second = await asyncio.gather(poller.refresh(), poller.refresh())

    assert provider.calls == 1
    assert first is second
    assert poller.current is first


@pytest.mark.asyncio
async def test_sequential_refreshes_fetch_again(clock):
    provider = StubProvider("yahoo", make_quote(price=5.25), make_quote(price=5.30))
    poller = _poller(provider, clock)

    await poller.refresh()
    latest = await poller.refresh()

    assert provider.calls == 2
    assert poller.current is latest
    assert poller.current.price == 5.30


@pytest.mark.asyncio
async def test_cancelled_waiter_does_not_cancel_shared_refresh(clock):
    provider = StubProvider("yahoo", make_quote(), delay=0.05)
    poller = _poller(provider, clock)

    waiter = asyncio.create_task(poller.refresh())
    await asyncio.sleep(0)
    waiter.cancel()
    quote = await poller.refresh()

    assert provider.calls == 1
    assert quote.price == 5.25


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_quote(clock):
    provider = StubProvider("yahoo", make_quote(), HttpError("yahoo", 500))
    poller = _poller(provider, clock)
    good = await poller.refresh()

    with pytest.raises(AllSourcesUnavailable):
        await poller.refresh()

    assert poller.current is good


def test_next_interval_follows_session(clock):
    provider = StubProvider("yahoo", make_quote())
    open_poller = _poller(provider, clock, open_interval=5.0, closed_interval=60.0)
    closed_poller = _poller(provider, lambda: WEEKEND_AT, open_interval=5.0, closed_interval=60.0)

    assert open_poller.symbol == "UWMC"
    assert open_poller.next_interval() == 5.0
    assert closed_poller.next_interval() == 60.0


@pytest.mark.asyncio
async def test_next_interval_uses_last_quote_session(clock):
    provider = StubProvider("yahoo", make_quote(is_market_open=False))
    poller = _poller(provider, clock, open_interval=5.0, closed_interval=60.0)

    await poller.refresh()

    assert poller.next_interval() == 60.0


@pytest.mark.asyncio
async def test_stream_stops_on_event(clock):
    provider = StubProvider("yahoo", make_quote())
    poller = _poller(provider, clock)
    stop_event = asyncio.Event()

    received = []
    async for quote in poller.stream(stop_event=stop_event):
        received.append(quote)
        if len(received) == 2:
            stop_event.set()

    assert len(received) == 2


@pytest.mark.asyncio
async def test_stream_survives_exhausted_chain(clock):
    provider = StubProvider("yahoo", HttpError("yahoo", 503), make_quote())
    poller = _poller(provider, clock)
    stop_event = asyncio.Event()

    async for quote in poller.stream(stop_event=stop_event):
        stop_event.set()

    assert provider.calls == 2
    assert quote.price == 5.25


@pytest.mark.asyncio
async def test_stream_dedup_by_value_skips_unchanged_prices(clock):
    provider = StubProvider(
        "yahoo", make_quote(price=5.25), make_quote(price=5.25), make_quote(price=5.30)
    )
    poller = _poller(provider, clock)
    stop_event = asyncio.Event()

    prices = []
    async for quote in poller.stream(stop_event=stop_event, dedup_by_value=True):
        prices.append(quote.price)
        if len(prices) == 2:
            stop_event.set()

    assert prices == [5.25, 5.30]
    assert provider.calls == 3


class TestPollerRegistry:
    @staticmethod
    def _registry(clock) -> PollerRegistry:
        service = QuoteService([StubProvider("yahoo", make_quote())])
        return PollerRegistry(lambda symbol: QuotePoller(service, symbol, clock=clock))

    def test_leases_for_one_symbol_share_a_poller(self, clock):
        registry = self._registry(clock)

        with registry.lease("uwmc") as first, registry.lease("UWMC") as second:
            assert first is second
            assert len(registry) == 1
            assert registry.get("uwmc") is first

    def test_poller_dropped_after_last_lease(self, clock):
        registry = self._registry(clock)

        with registry.lease("UWMC") as first:
            with registry.lease("UWMC"):
                pass
            assert registry.get("UWMC") is first
        assert len(registry) == 0

        with registry.lease("UWMC") as again:
            assert again is not first

    def test_distinct_symbols_do_not_accumulate(self, clock):
        registry = self._registry(clock)

        for symbol in ("AAA", "BBB", "CCC"):
            with registry.lease(symbol):
                assert len(registry) == 1

        assert len(registry) == 0

    def test_lease_released_when_stream_raises(self, clock):
        registry = self._registry(clock)

        with pytest.raises(RuntimeError):
            with registry.lease("UWMC"):
                raise RuntimeError("client went away")

        assert registry.get("UWMC") is None
