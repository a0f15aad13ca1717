"""Alpha Vantage quote provider (secondary source)."""
import logging

from portfolio_tracker.providers.core import (MalformedResponse, QuoteFields,
                                              QuoteProviderABC)
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.providers.quotes.alphavantage.models import (
    AlphaVantageGlobalQuote, AlphaVantageQuoteParams)
from portfolio_tracker.schemas import Quote, QuoteSource

logger = logging.getLogger(__name__)

# Keys Alpha Vantage uses for throttling and error notices (HTTP 200 bodies).
_NOTICE_KEYS = ("Note", "Information", "Error Message")


class AlphaVantageProvider(QuoteProviderABC):
    """Quote provider for Alpha Vantage. Requires an API key (5 calls/min on free tier)."""

    source = QuoteSource.ALPHA_VANTAGE
    BASE_URL = "https://www.alphavantage.co"

    def __init__(self, api_key: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api_key = api_key

    async def get_quote(self, symbol: str) -> Quote:
        sym = normalize_stock_symbol(symbol)
        params = AlphaVantageQuoteParams().model_dump() | {
            "symbol": sym,
            "apikey": self._api_key,
        }
        data = await self._get_json("/query", params=params)
        if isinstance(data, dict):
            for key in _NOTICE_KEYS:
                if key in data:
                    raise MalformedResponse(self.name, f"{key}: {data[key]}")
        block = data.get("Global Quote") if isinstance(data, dict) else None
        if not block:
            raise MalformedResponse(self.name, f"no quote for '{sym}'")
        quote: AlphaVantageGlobalQuote = self._parse(AlphaVantageGlobalQuote, block)
        result = self._build_quote(
            sym,
            QuoteFields(
                price=quote.price,
                previous_close=quote.previous_close,
                change=quote.change,
                day_high=quote.high,
                day_low=quote.low,
                open=quote.open,
                volume=quote.volume,
            ),
        )
        if (
            quote.change_percent is not None
            and abs(quote.change_percent - result.change_percent) > 0.01
        ):
            logger.debug(
                "Alpha Vantage reported %.4f%% for %s, recomputed %.4f%%",
                quote.change_percent,
                sym,
                result.change_percent,
            )
        return result
