"""Models for the Yahoo Finance chart endpoint (query params and meta block)."""
from pydantic import BaseModel, ConfigDict


class YahooChartParams(BaseModel):
    """Params for /v8/finance/chart/{symbol} (get_quote)."""

    range: str = "1d"
    interval: str = "1m"
    includePrePost: str = "false"


class YahooChartMeta(BaseModel):
    """The `chart.result[0].meta` block. Every field may be missing."""

    model_config = ConfigDict(extra="ignore")

    regularMarketPrice: float | None = None
    previousClose: float | None = None
    chartPreviousClose: float | None = None
    regularMarketDayHigh: float | None = None
    regularMarketDayLow: float | None = None
    regularMarketOpen: float | None = None
    regularMarketVolume: float | None = None
    averageDailyVolume3Month: float | None = None
    averageDailyVolume10Day: float | None = None
    marketCap: float | None = None
    trailingPE: float | None = None
    fiftyTwoWeekHigh: float | None = None
    fiftyTwoWeekLow: float | None = None
    bid: float | None = None
    ask: float | None = None
    bidSize: float | None = None
    askSize: float | None = None
