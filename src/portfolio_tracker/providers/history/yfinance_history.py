"""Daily price history via the yfinance library."""
import asyncio
from datetime import date, timedelta

import yfinance as yf

from portfolio_tracker.providers.core import (MalformedResponse,
                                              ProviderError, round2)
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.schemas import HistoryPoint


class YFinanceHistoryProvider:
    """History bars from Yahoo Finance through yfinance. No API key required.

    yfinance is synchronous, so calls run in a worker thread.
    """

    name = "yfinance"

    def _fetch_history_sync(self, symbol: str, start: date, end: date) -> list[HistoryPoint]:
        # yfinance treats `end` as exclusive
        df = yf.Ticker(symbol).history(
            start=start, end=end + timedelta(days=1), interval="1d"
        )
        if df.empty:
            return []
        return [
            HistoryPoint(
                date=ts.date(),
                open=round2(float(row["Open"])),
                high=round2(float(row["High"])),
                low=round2(float(row["Low"])),
                close=round2(float(row["Close"])),
                volume=int(row["Volume"]),
            )
            for ts, row in df.iterrows()
            if not row.isna().any()
        ]

    async def get_history(self, symbol: str, start: date, end: date) -> list[HistoryPoint]:
        """Fetch daily bars for `symbol` between start and end (inclusive)."""
        sym = normalize_stock_symbol(symbol)
        try:
            points = await asyncio.to_thread(self._fetch_history_sync, sym, start, end)
        except Exception as e:
            raise ProviderError(self.name, f"history request failed for '{sym}': {e}") from e
        if not points:
            raise MalformedResponse(self.name, f"no history for '{sym}'")
        return points

    async def close(self) -> None:
        """Nothing to release; yfinance manages its own session."""
