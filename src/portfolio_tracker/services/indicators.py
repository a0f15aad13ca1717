"""Technical indicators over a series of closing prices."""
from collections.abc import Sequence

import numpy as np
import pandas as pd

TRADING_DAYS_PER_YEAR = 252


def _closes(values: Sequence[float]) -> pd.Series:
    return pd.Series(values, dtype="float64")


def sma(values: Sequence[float], period: int) -> list[float]:
    """Simple moving average; one value per full window."""
    if period <= 0:
        return []
    return _closes(values).rolling(window=period).mean().dropna().tolist()


def rsi(values: Sequence[float], period: int = 14) -> list[float]:
    """Relative strength index with Wilder smoothing (EWM, alpha = 1/period).

    One value per close after the first `period`; a window with no losses is 100.
    """
    if period <= 0 or len(values) <= period:
        return []
    delta = _closes(values).diff().dropna()
    gain = pd.Series(np.where(delta > 0, delta, 0.0), index=delta.index)
    loss = pd.Series(np.where(delta < 0, -delta, 0.0), index=delta.index)
    avg_gain = gain.ewm(alpha=1 / period, adjust=False).mean()
    avg_loss = loss.ewm(alpha=1 / period, adjust=False).mean()
    with np.errstate(divide="ignore", invalid="ignore"):
        rs = avg_gain / avg_loss
    rsi_series = (100 - 100 / (1 + rs)).where(avg_loss != 0, 100.0)
    return rsi_series.iloc[period - 1:].tolist()


def volatility(values: Sequence[float]) -> float | None:
    """Annualized volatility of daily returns, in percent. None with fewer than 2 prices."""
    closes = _closes(values)
    returns = (closes / closes.shift(1) - 1).replace([np.inf, -np.inf], np.nan).dropna()
    if returns.empty:
        return None
    return float(returns.std(ddof=0) * np.sqrt(TRADING_DAYS_PER_YEAR) * 100)
