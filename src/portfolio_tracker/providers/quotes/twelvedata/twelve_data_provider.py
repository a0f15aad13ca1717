"""Twelve Data quote provider (secondary source)."""
from portfolio_tracker.providers.core import (HttpError, MalformedResponse,
                                              QuoteFields, QuoteProviderABC)
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.providers.quotes.twelvedata.models import (
    TwelveDataQuotePayload, TwelveDataRange)
from portfolio_tracker.schemas import Quote, QuoteSource


class TwelveDataProvider(QuoteProviderABC):
    """Quote provider for the Twelve Data REST API. Requires an API key."""

    source = QuoteSource.TWELVE_DATA
    BASE_URL = "https://api.twelvedata.com"

    def __init__(self, api_key: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api_key = api_key

    async def get_quote(self, symbol: str) -> Quote:
        sym = normalize_stock_symbol(symbol)
        data = await self._get_json("/quote", params={"symbol": sym, "apikey": self._api_key})
        payload: TwelveDataQuotePayload = self._parse(TwelveDataQuotePayload, data)
        if payload.status == "error":
            if payload.code is not None and payload.code >= 400:
                raise HttpError(self.name, payload.code)
            raise MalformedResponse(self.name, payload.message or "error payload")
        week52 = payload.fifty_two_week or TwelveDataRange()
        return self._build_quote(
            sym,
            QuoteFields(
                price=payload.close,
                previous_close=payload.previous_close,
                change=payload.change,
                day_high=payload.high,
                day_low=payload.low,
                open=payload.open,
                volume=payload.volume,
                avg_volume=payload.average_volume,
                week52_high=week52.high,
                week52_low=week52.low,
            ),
        )
