"""Yahoo Finance quote provider (primary source)."""
from portfolio_tracker.providers.core import (MalformedResponse, QuoteFields,
                                              QuoteProviderABC)
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.providers.quotes.yahoo.models import (YahooChartMeta,
                                                             YahooChartParams)
from portfolio_tracker.schemas import Quote, QuoteSource

# Yahoo rejects requests that do not look like a browser.
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class YahooFinanceProvider(QuoteProviderABC):
    """Quote provider backed by Yahoo's public chart endpoint.

    No API key required. The chart response carries the quote in
    `chart.result[0].meta`; the previous close is `previousClose`, or
    `chartPreviousClose` when the former is absent.
    """

    source = QuoteSource.YAHOO
    BASE_URL = "https://query1.finance.yahoo.com"
    DEFAULT_HEADERS = {"Accept": "application/json", "User-Agent": BROWSER_USER_AGENT}

    async def get_quote(self, symbol: str) -> Quote:
        """Fetch the current quote for a stock symbol."""
        sym = normalize_stock_symbol(symbol)
        data = await self._get_json(
            f"/v8/finance/chart/{sym}", params=YahooChartParams().model_dump()
        )
        try:
            raw_meta = data["chart"]["result"][0]["meta"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponse(self.name, "chart result missing") from e
        meta: YahooChartMeta = self._parse(YahooChartMeta, raw_meta)
        return self._build_quote(sym, self._fields_from_meta(meta))

    @staticmethod
    def _fields_from_meta(meta: YahooChartMeta) -> QuoteFields:
        previous_close = (
            meta.previousClose
            if meta.previousClose is not None
            else meta.chartPreviousClose
        )
        return QuoteFields(
            price=meta.regularMarketPrice,
            previous_close=previous_close,
            day_high=meta.regularMarketDayHigh,
            day_low=meta.regularMarketDayLow,
            open=meta.regularMarketOpen,
            volume=meta.regularMarketVolume,
            avg_volume=meta.averageDailyVolume3Month or meta.averageDailyVolume10Day,
            market_cap=meta.marketCap,
            pe_ratio=meta.trailingPE,
            week52_high=meta.fiftyTwoWeekHigh,
            week52_low=meta.fiftyTwoWeekLow,
            bid=meta.bid,
            ask=meta.ask,
            bid_size=meta.bidSize,
            ask_size=meta.askSize,
        )
