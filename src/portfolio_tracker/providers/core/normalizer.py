"""Map provider fields onto the canonical Quote.

Providers parse their payloads into QuoteFields (None = not reported) and
hand them to normalize_quote, which owns the defaults and derived values so
every source fills gaps the same way.
"""
import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from portfolio_tracker.providers.core.exceptions import MalformedResponse
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.schemas import Quote, QuoteSource, ReferenceData


def parse_number(value: Any) -> float | None:
    """Parse a provider numeric: numbers, numeric strings, or percent strings ("1.2%").

    Returns None for missing, empty, non-numeric or non-finite values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("%").replace(",", "")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def compute_change_percent(change: float, previous_close: float) -> float:
    """Percent change relative to the previous close; 0 when there is no close."""
    if previous_close == 0:
        return 0.0
    return change / previous_close * 100


class QuoteFields(BaseModel):
    """Provider values already mapped to canonical names. None = not reported."""

    price: float | None = None
    previous_close: float | None = None
    change: float | None = None
    day_high: float | None = None
    day_low: float | None = None
    open: float | None = None
    volume: float | None = None
    avg_volume: float | None = None
    market_cap: float | None = None
    pe_ratio: float | None = None
    week52_high: float | None = None
    week52_low: float | None = None
    bid: float | None = None
    ask: float | None = None
    bid_size: float | None = None
    ask_size: float | None = None


def _count(value: float | None, default: int | None = None) -> int | None:
    if value is None or value < 0:
        return default
    return int(round(value))


def _positive(value: float | None, default: float) -> float:
    # Providers report 0 for "unknown" on prices; a real price is never 0.
    return value if value is not None and value > 0 else default


def normalize_quote(
    symbol: str,
    fields: QuoteFields,
    *,
    source: QuoteSource,
    reference: ReferenceData,
    captured_at: datetime,
    is_market_open: bool,
) -> Quote:
    """Build a Quote from provider fields, applying the documented defaults.

    Defaults for unreported fields:
        day_high, day_low, bid, ask -> price
        open                        -> previous close
        change                      -> price - previous close
        avg_volume, week52_*        -> reference data
        market_cap                  -> price * reference shares outstanding
        volume, bid/ask sizes       -> None (not reported)
        pe_ratio                    -> None

    Raises:
        MalformedResponse: price or previous close is missing or not positive.
    """
    price = fields.price
    previous_close = fields.previous_close
    if price is None or previous_close is None:
        raise MalformedResponse(source.value, "missing price or previous close")
    if price <= 0 or previous_close < 0:
        raise MalformedResponse(
            source.value, f"implausible price {price} / previous close {previous_close}"
        )

    change = fields.change if fields.change is not None else price - previous_close
    return Quote(
        symbol=normalize_stock_symbol(symbol),
        price=price,
        change=change,
        change_percent=compute_change_percent(change, previous_close),
        day_high=_positive(fields.day_high, price),
        day_low=_positive(fields.day_low, price),
        open=_positive(fields.open, previous_close),
        previous_close=previous_close,
        volume=_count(fields.volume),
        avg_volume=_count(fields.avg_volume, reference.avg_volume),
        market_cap=_positive(fields.market_cap, price * reference.shares_outstanding),
        pe_ratio=fields.pe_ratio,
        week52_high=_positive(fields.week52_high, reference.week52_high),
        week52_low=_positive(fields.week52_low, reference.week52_low),
        bid=_positive(fields.bid, price),
        ask=_positive(fields.ask, price),
        bid_size=_count(fields.bid_size),
        ask_size=_count(fields.ask_size),
        timestamp=captured_at,
        is_market_open=is_market_open,
        source=source,
    )
