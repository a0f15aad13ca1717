"""Price history bars and indicators derived from them."""
import datetime

from portfolio_tracker.schemas.quote import CamelModel, QuoteSource


class HistoryPoint(CamelModel):
    """One daily OHLCV bar."""

    date: datetime.date
    open: float
    high: float
    low: float
    close: float
    volume: int


class TechnicalIndicators(CamelModel):
    sma: list[float]
    rsi: list[float]
    volatility: float | None = None


class HistoryResponse(CamelModel):
    symbol: str
    source: QuoteSource
    points: list[HistoryPoint]
    indicators: TechnicalIndicators
