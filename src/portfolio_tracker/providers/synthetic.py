"""Synthetic placeholder data for when every real source is down.

Only used when the fallback policy allows it; every value produced here is
tagged source=synthetic.
"""
import random
from collections.abc import Callable
from datetime import date, datetime, timedelta

from portfolio_tracker.market_hours import NYSE, ExchangeCalendar, is_market_open
from portfolio_tracker.providers.core import (QuoteFields, normalize_quote,
                                              round2)
from portfolio_tracker.providers.core.quote_provider_abc import utc_now
from portfolio_tracker.schemas import (HistoryPoint, Quote, QuoteSource,
                                       ReferenceData)


class SyntheticQuoteGenerator:
    """Random-walk quotes and history anchored on the configured reference price."""

    def __init__(
        self,
        reference: ReferenceData | None = None,
        *,
        calendar: ExchangeCalendar = NYSE,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
        max_step: float = 0.15,
    ) -> None:
        self._reference = reference or ReferenceData()
        self._calendar = calendar
        self._rng = rng or random.Random()
        self._clock = clock
        self._max_step = max_step

    def quote(self, symbol: str) -> Quote:
        """Return a plausible quote within +/- max_step of the reference price."""
        ref = self._reference
        variation = (self._rng.random() - 0.5) * 2 * self._max_step
        price = round2(max(0.01, ref.price + variation))
        captured_at = self._clock()
        return normalize_quote(
            symbol,
            QuoteFields(
                price=price,
                previous_close=ref.previous_close,
                change=round2(price - ref.previous_close),
                day_high=round2(price * 1.02),
                day_low=round2(price * 0.98),
                open=round2(ref.previous_close + 0.05),
                volume=self._rng.randint(5_000_000, 10_000_000),
                bid=round2(price - 0.01),
                ask=round2(price + 0.01),
                bid_size=self._rng.randint(100, 600),
                ask_size=self._rng.randint(100, 600),
            ),
            source=QuoteSource.SYNTHETIC,
            reference=ref,
            captured_at=captured_at,
            is_market_open=is_market_open(captured_at, self._calendar),
        )

    def history(
        self,
        days: int,
        end: date,
        *,
        trend: float = 0.001,
        volatility: float = 0.02,
    ) -> list[HistoryPoint]:
        """Daily bars for trading days in (end - days, end], walking toward the reference price."""
        ref = self._reference
        low, high = ref.week52_low, ref.week52_high
        price = ref.previous_close
        points: list[HistoryPoint] = []
        for offset in range(days - 1, -1, -1):
            day = end - timedelta(days=offset)
            if day.weekday() not in self._calendar.trading_weekdays:
                continue
            if day in self._calendar.holidays:
                continue
            price *= 1 + trend + (self._rng.random() - 0.5) * volatility
            price = min(high, max(low, price))
            points.append(
                HistoryPoint(
                    date=day,
                    open=round2(price * (1 - volatility / 4)),
                    high=round2(price * (1 + volatility / 2)),
                    low=round2(price * (1 - volatility / 2)),
                    close=round2(price),
                    volume=self._rng.randint(2_000_000, 10_000_000),
                )
            )
        return points
