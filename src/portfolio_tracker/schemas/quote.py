"""Canonical quote schema shared by every provider."""
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys for the dashboard frontend."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuoteSource(str, Enum):
    """Provenance of a quote. Always present so synthetic data can be told apart."""

    YAHOO = "yahoo"
    FINNHUB = "finnhub"
    TWELVE_DATA = "twelvedata"
    ALPHA_VANTAGE = "alphavantage"
    SYNTHETIC = "synthetic"


class Quote(CamelModel):
    """Provider-agnostic market snapshot for one ticker."""

    symbol: str
    price: float
    change: float
    change_percent: float
    day_high: float
    day_low: float
    open: float
    previous_close: float
    # None: the source does not report it (Finnhub never does); 0 is a real reading
    volume: int | None = Field(default=None, ge=0)
    avg_volume: int = Field(ge=0)
    market_cap: float
    pe_ratio: float | None = None  # None means unavailable, not a P/E of zero
    week52_high: float
    week52_low: float
    bid: float
    ask: float
    bid_size: int | None = Field(default=None, ge=0)
    ask_size: int | None = Field(default=None, ge=0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_market_open: bool
    source: QuoteSource


class ReferenceData(BaseModel):
    """Static facts about the tracked security used to fill gaps in provider data."""

    shares_outstanding: float = Field(default=1_590_000_000, gt=0)
    avg_volume: int = Field(default=7_500_000, ge=0)
    week52_high: float = Field(default=8.54, gt=0)
    week52_low: float = Field(default=3.36, gt=0)
    # Anchor for synthetic quotes
    price: float = Field(default=5.25, gt=0)
    previous_close: float = Field(default=5.10, gt=0)


class ErrorResponse(BaseModel):
    """JSON error body returned when no quote can be produced."""

    error: str
    message: str
    details: list[dict] = Field(default_factory=list)
