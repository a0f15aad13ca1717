"""Tests for the history service and synthetic history bars."""
import random
from datetime import date

import pytest

from portfolio_tracker.providers import SyntheticQuoteGenerator
from portfolio_tracker.providers.core import (AllSourcesUnavailable,
                                              MalformedResponse, ProviderError)
from portfolio_tracker.schemas import HistoryPoint, QuoteSource, ReferenceData
from portfolio_tracker.services import FallbackPolicy, HistoryService

TODAY = date(2025, 8, 6)


class FakeHistoryProvider:
    name = "yfinance"

    def __init__(self, points=None, error: ProviderError | None = None) -> None:
        self._points = points or []
        self._error = error
        self.requests: list[tuple[str, date, date]] = []

    async def get_history(self, symbol, start, end):
        self.requests.append((symbol, start, end))
        if self._error:
            raise self._error
        return self._points


def _bars(closes: list[float]) -> list[HistoryPoint]:
    return [
        HistoryPoint(date=date(2025, 7, 1 + i), open=c, high=c, low=c, close=c, volume=1000)
        for i, c in enumerate(closes)
    ]


def _service(provider, **kwargs) -> HistoryService:
    return HistoryService(
        provider,
        synthetic=SyntheticQuoteGenerator(rng=random.Random(3)),
        today=lambda: TODAY,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_history_with_indicators():
    closes = [5.0 + 0.05 * i for i in range(25)]
    provider = FakeHistoryProvider(_bars(closes))

    result = await _service(provider).get_history("uwmc", 30)

    assert provider.requests == [("UWMC", date(2025, 7, 7), TODAY)]
    assert result.symbol == "UWMC"
    assert result.source is QuoteSource.YAHOO
    assert len(result.points) == 25
    assert len(result.indicators.sma) == 25 - 20 + 1
    assert len(result.indicators.rsi) == 25 - 14
    assert result.indicators.rsi[-1] == 100.0
    assert result.indicators.volatility is not None


@pytest.mark.asyncio
async def test_failure_without_synthetic_raises():
    provider = FakeHistoryProvider(error=MalformedResponse("yfinance", "no history"))

    with pytest.raises(AllSourcesUnavailable) as exc_info:
        await _service(provider).get_history("UWMC", 30)

    assert exc_info.value.attempts[0].provider == "yfinance"


@pytest.mark.asyncio
async def test_failure_with_synthetic_allowed():
    provider = FakeHistoryProvider(error=ProviderError("yfinance", "boom"))

    result = await _service(provider).get_history(
        "UWMC", 30, FallbackPolicy(allow_synthetic=True)
    )

    assert result.source is QuoteSource.SYNTHETIC
    assert result.points
    assert result.points[-1].date == TODAY


def test_synthetic_history_skips_weekends_and_stays_in_range():
    ref = ReferenceData()
    generator = SyntheticQuoteGenerator(ref, rng=random.Random(11))

    points = generator.history(14, TODAY)

    assert len(points) == 10
    assert all(p.date.weekday() < 5 for p in points)
    assert all(ref.week52_low <= p.close <= ref.week52_high for p in points)
    assert [p.date for p in points] == sorted(p.date for p in points)


def test_synthetic_quote_is_tagged(clock):
    quote = SyntheticQuoteGenerator(rng=random.Random(5), clock=clock).quote("uwmc")
    assert quote.symbol == "UWMC"
    assert quote.source is QuoteSource.SYNTHETIC
    assert quote.bid < quote.ask
    assert quote.is_market_open is True


def test_synthetic_quotes_keep_change_percent_consistent(clock):
    generator = SyntheticQuoteGenerator(rng=random.Random(9), clock=clock)
    for _ in range(50):
        quote = generator.quote("UWMC")
        assert quote.change_percent == pytest.approx(100 * quote.change / quote.previous_close)
        assert 5.10 <= quote.price <= 5.40
