"""Tests for the quote fallback chain."""
import logging
import random

import httpx
import pytest

from portfolio_tracker.providers import (SyntheticQuoteGenerator,
                                         YahooFinanceProvider)
from portfolio_tracker.providers.core import (AllSourcesUnavailable, HttpError,
                                              MalformedResponse,
                                              ProviderTimeout)
from portfolio_tracker.schemas import QuoteSource
from portfolio_tracker.services import FallbackPolicy, QuoteService
from tests.conftest import MARKET_OPEN_AT, StubProvider, make_quote, mock_client


def _synthetic() -> SyntheticQuoteGenerator:
    return SyntheticQuoteGenerator(rng=random.Random(7), clock=lambda: MARKET_OPEN_AT)


@pytest.mark.asyncio
async def test_primary_success_short_circuits():
    primary = StubProvider("yahoo", make_quote(source=QuoteSource.YAHOO))
    secondary = StubProvider("finnhub", make_quote(source=QuoteSource.FINNHUB))
    service = QuoteService([primary, secondary])

    quote = await service.get_quote("uwmc")

    assert quote.source is QuoteSource.YAHOO
    assert quote.symbol == "UWMC"
    assert primary.calls == 1
    assert secondary.calls == 0


@pytest.mark.asyncio
async def test_falls_back_in_priority_order(caplog):
    primary = StubProvider("yahoo", HttpError("yahoo", 500))
    secondary = StubProvider("finnhub", MalformedResponse("finnhub", "zeros"))
    tertiary = StubProvider("twelvedata", make_quote(source=QuoteSource.TWELVE_DATA))
    service = QuoteService([primary, secondary, tertiary])

    with caplog.at_level(logging.WARNING):
        quote = await service.get_quote("UWMC")

    assert quote.source is QuoteSource.TWELVE_DATA
    assert [p.calls for p in (primary, secondary, tertiary)] == [1, 1, 1]
    assert "yahoo failed" in caplog.text
    assert "finnhub failed" in caplog.text


@pytest.mark.asyncio
async def test_exhaustion_raises_with_every_attempt():
    providers = [
        StubProvider("yahoo", HttpError("yahoo", 503)),
        StubProvider("finnhub", MalformedResponse("finnhub", "zeros")),
        StubProvider("alphavantage", MalformedResponse("alphavantage", "Note: throttled")),
    ]
    service = QuoteService(providers, policy=FallbackPolicy(allow_synthetic=False))

    with pytest.raises(AllSourcesUnavailable) as exc_info:
        await service.get_quote("UWMC")

    exc = exc_info.value
    assert exc.symbol == "UWMC"
    assert [a.provider for a in exc.attempts] == ["yahoo", "finnhub", "alphavantage"]
    assert exc.attempts[0].error.kind == "http_error"


@pytest.mark.asyncio
async def test_synthetic_only_when_allowed():
    failing = StubProvider("yahoo", HttpError("yahoo", 500))
    service = QuoteService(
        [failing], synthetic=_synthetic(), policy=FallbackPolicy(allow_synthetic=True)
    )

    quote = await service.get_quote("UWMC")

    assert quote.source is QuoteSource.SYNTHETIC
    assert 5.10 <= quote.price <= 5.40


@pytest.mark.asyncio
async def test_per_call_policy_overrides_default():
    failing = StubProvider("yahoo", HttpError("yahoo", 500))
    service = QuoteService(
        [failing], synthetic=_synthetic(), policy=FallbackPolicy(allow_synthetic=True)
    )

    with pytest.raises(AllSourcesUnavailable):
        await service.get_quote("UWMC", FallbackPolicy(allow_synthetic=False))

    strict = QuoteService([failing], synthetic=_synthetic())
    quote = await strict.get_quote("UWMC", FallbackPolicy(allow_synthetic=True))
    assert quote.source is QuoteSource.SYNTHETIC


@pytest.mark.asyncio
async def test_slow_provider_times_out_and_chain_continues():
    slow = StubProvider("yahoo", make_quote(), delay=0.5)
    fast = StubProvider("finnhub", make_quote(source=QuoteSource.FINNHUB))
    service = QuoteService([slow, fast], provider_timeout=0.05)

    quote = await service.get_quote("UWMC")

    assert quote.source is QuoteSource.FINNHUB


@pytest.mark.asyncio
async def test_timeout_recorded_as_timeout_attempt():
    slow = StubProvider("yahoo", make_quote(), delay=0.5)
    service = QuoteService([slow], provider_timeout=0.05)

    with pytest.raises(AllSourcesUnavailable) as exc_info:
        await service.get_quote("UWMC")

    assert isinstance(exc_info.value.attempts[0].error, ProviderTimeout)


@pytest.mark.asyncio
async def test_empty_chain_without_synthetic():
    with pytest.raises(AllSourcesUnavailable) as exc_info:
        await QuoteService([]).get_quote("UWMC")
    assert exc_info.value.attempts == []


@pytest.mark.asyncio
async def test_close_closes_every_provider():
    providers = [StubProvider("yahoo", make_quote()), StubProvider("finnhub", make_quote())]
    await QuoteService(providers).close()
    assert all(p.closed for p in providers)


@pytest.mark.asyncio
async def test_unexpected_provider_exception_falls_through(caplog):
    broken = StubProvider("yahoo", RuntimeError("bug in parser"))
    backup = StubProvider("finnhub", make_quote(source=QuoteSource.FINNHUB))
    service = QuoteService([broken, backup])

    with caplog.at_level(logging.ERROR):
        quote = await service.get_quote("UWMC")

    assert quote.source is QuoteSource.FINNHUB
    assert "raised unexpectedly" in caplog.text


@pytest.mark.asyncio
async def test_unexpected_exceptions_count_as_attempts():
    service = QuoteService(
        [StubProvider("yahoo", KeyError("meta")), StubProvider("finnhub", ValueError("nan"))]
    )

    with pytest.raises(AllSourcesUnavailable) as exc_info:
        await service.get_quote("UWMC")

    assert [a.error.kind for a in exc_info.value.attempts] == ["provider_error"] * 2


@pytest.mark.asyncio
async def test_unencodable_symbol_reaches_next_provider_and_synthetic():
    yahoo = YahooFinanceProvider(
        client=mock_client(lambda r: httpx.Response(200, json={}), YahooFinanceProvider.BASE_URL),
        clock=lambda: MARKET_OPEN_AT,
    )
    backup = StubProvider("finnhub", make_quote(source=QuoteSource.FINNHUB))
    service = QuoteService([yahoo, backup], synthetic=_synthetic())

    quote = await service.get_quote("UW\x00MC")
    assert quote.source is QuoteSource.FINNHUB

    failing = StubProvider("finnhub", HttpError("finnhub", 500))
    service = QuoteService([yahoo, failing], synthetic=_synthetic())
    quote = await service.get_quote("UW\x00MC", FallbackPolicy(allow_synthetic=True))
    assert quote.source is QuoteSource.SYNTHETIC
    await yahoo.close()
