"""Valuation, projections and return milestones for the stock holding.

All functions are pure: the quote is passed in, nothing is read from shared
state, and percentages fall back to 0 instead of dividing by zero.
"""
from collections.abc import Sequence
from datetime import date

from portfolio_tracker.schemas import (HoldingsConfig, Milestone,
                                       PortfolioMetrics, Projection, Quote)

DAYS_PER_YEAR = 365
SHORT_PERIOD_DAYS = 30
# Compounding a few days of gains to a year overflows quickly; cap the figure.
MAX_ANNUALIZED_RETURN = 1_000_000.0

DEFAULT_PROJECTION_HORIZONS = (30, 90, 365)
DEFAULT_MILESTONES = (10.0, 25.0, 50.0, 100.0)


def _percent(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return 100 * numerator / denominator


def days_held(purchase_date: date, as_of: date) -> int:
    """Whole days since purchase; 0 for a purchase date in the future."""
    return max((as_of - purchase_date).days, 0)


def annualized_return(total_value: float, total_cost: float, days: int) -> float:
    """Compound annual growth rate in percent.

    years_held = max(days, 1) / 365, so a same-day purchase is treated as one
    day held. Holdings shorter than a month produce extreme figures; callers
    should label them (see PortfolioMetrics.annualized_is_short_period).
    """
    if total_cost <= 0:
        return 0.0
    growth = total_value / total_cost
    if growth <= 0:
        return -100.0
    years_held = max(days, 1) / DAYS_PER_YEAR
    try:
        result = 100 * (growth ** (1 / years_held) - 1)
    except OverflowError:
        return MAX_ANNUALIZED_RETURN
    return min(result, MAX_ANNUALIZED_RETURN)


def compute_metrics(holdings: HoldingsConfig, quote: Quote, as_of: date) -> PortfolioMetrics:
    """Value the holding at `quote`."""
    shares = holdings.shares
    total_cost = shares * holdings.cost_basis
    total_value = shares * quote.price
    total_gain = total_value - total_cost
    day_gain = shares * (quote.price - quote.previous_close)
    held = days_held(holdings.purchase_date, as_of)
    return PortfolioMetrics(
        total_value=total_value,
        total_cost=total_cost,
        total_gain=total_gain,
        total_gain_percent=_percent(total_gain, total_cost),
        day_gain=day_gain,
        day_gain_percent=_percent(day_gain, shares * quote.previous_close),
        annualized_return=annualized_return(total_value, total_cost, held),
        days_held=held,
        annualized_is_short_period=held < SHORT_PERIOD_DAYS,
    )


def project_values(
    holdings: HoldingsConfig,
    quote: Quote,
    as_of: date,
    horizons: Sequence[int] = DEFAULT_PROJECTION_HORIZONS,
) -> list[Projection]:
    """Extrapolate the position value linearly at the average daily gain so far."""
    total_cost = holdings.shares * holdings.cost_basis
    total_value = holdings.shares * quote.price
    daily_gain = (total_value - total_cost) / max(days_held(holdings.purchase_date, as_of), 1)
    return [
        Projection(horizon_days=h, projected_value=total_value + daily_gain * h)
        for h in horizons
    ]


def compute_milestones(
    holdings: HoldingsConfig,
    quote: Quote,
    targets: Sequence[float] = DEFAULT_MILESTONES,
) -> list[Milestone]:
    """Price needed to reach each return target on the cost basis."""
    total_cost = holdings.shares * holdings.cost_basis
    total_value = holdings.shares * quote.price
    milestones = []
    for pct in targets:
        target_value = total_cost * (1 + pct / 100)
        milestones.append(
            Milestone(
                return_percent=pct,
                target_value=target_value,
                price_needed=target_value / holdings.shares,
                achieved=total_value >= target_value,
                remaining_value=max(target_value - total_value, 0.0),
            )
        )
    return milestones
