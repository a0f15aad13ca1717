"""Shared utilities for quote providers."""

DECIMALS = 2


def normalize_stock_symbol(symbol: str) -> str:
    """Normalize a stock symbol (strip, uppercase)."""
    return symbol.strip().upper()


def round2(x: float | None) -> float | None:
    """Round a value to 2 decimal places; preserve None."""
    if x is None:
        return None
    return round(float(x), DECIMALS)
