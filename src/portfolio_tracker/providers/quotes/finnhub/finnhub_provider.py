"""Finnhub quote provider (secondary source)."""
from portfolio_tracker.providers.core import QuoteFields, QuoteProviderABC
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.providers.quotes.finnhub.models import \
    FinnhubQuotePayload
from portfolio_tracker.schemas import Quote, QuoteSource


class FinnhubProvider(QuoteProviderABC):
    """Quote provider for Finnhub's REST API. Requires an API token.

    Finnhub only reports price, change and the day range; everything else
    falls back to the normalizer defaults.
    """

    source = QuoteSource.FINNHUB
    BASE_URL = "https://finnhub.io/api/v1"

    def __init__(self, api_key: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._api_key = api_key

    async def get_quote(self, symbol: str) -> Quote:
        sym = normalize_stock_symbol(symbol)
        data = await self._get_json("/quote", params={"symbol": sym, "token": self._api_key})
        payload: FinnhubQuotePayload = self._parse(FinnhubQuotePayload, data)
        return self._build_quote(
            sym,
            QuoteFields(
                price=payload.c,
                previous_close=payload.pc,
                change=payload.d,
                day_high=payload.h,
                day_low=payload.l,
                open=payload.o,
            ),
        )
