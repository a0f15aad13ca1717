"""Shared fixtures: fixed clock, quote builders and stub providers."""
import asyncio
from collections.abc import Callable
from datetime import datetime, timezone

import httpx
import pytest

from portfolio_tracker.providers.core import QuoteFields, normalize_quote
from portfolio_tracker.schemas import Quote, QuoteSource, ReferenceData

# Wednesday 2025-08-06 10:00 in New York (EDT): market open
MARKET_OPEN_AT = datetime(2025, 8, 6, 14, 0, tzinfo=timezone.utc)
# Saturday 2025-08-09 noon in New York
WEEKEND_AT = datetime(2025, 8, 9, 16, 0, tzinfo=timezone.utc)


def make_quote(
    price: float = 5.25,
    previous_close: float = 5.10,
    source: QuoteSource = QuoteSource.YAHOO,
    symbol: str = "UWMC",
    is_market_open: bool = True,
) -> Quote:
    return normalize_quote(
        symbol,
        QuoteFields(price=price, previous_close=previous_close),
        source=source,
        reference=ReferenceData(),
        captured_at=MARKET_OPEN_AT,
        is_market_open=is_market_open,
    )


class StubProvider:
    """Provider double: returns/raises the given outcomes in order, repeating the last."""

    def __init__(self, name: str, *outcomes: Quote | Exception, delay: float = 0.0) -> None:
        self.name = name
        self._outcomes = list(outcomes)
        self._delay = delay
        self.calls = 0
        self.closed = False

    async def get_quote(self, symbol: str) -> Quote:
        outcome = self._outcomes[min(self.calls, len(self._outcomes) - 1)]
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome.model_copy(update={"symbol": symbol})

    async def close(self) -> None:
        self.closed = True


def mock_client(
    handler: Callable[[httpx.Request], httpx.Response], base_url: str
) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=base_url)


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: MARKET_OPEN_AT

