"""Holdings configuration and derived portfolio metrics."""
from datetime import date

from pydantic import BaseModel, Field

from portfolio_tracker.schemas.quote import CamelModel, Quote


class HoldingsConfig(BaseModel):
    """Position held in the tracked stock."""

    shares: int = Field(gt=0)
    cost_basis: float = Field(gt=0)
    purchase_date: date


class PortfolioMetrics(CamelModel):
    """Valuation of a holding at a given quote. Recomputed on every refresh."""

    total_value: float
    total_cost: float
    total_gain: float
    total_gain_percent: float
    day_gain: float
    day_gain_percent: float
    annualized_return: float
    days_held: int
    # Annualizing a holding of a few days compounds noise into huge figures
    annualized_is_short_period: bool


class Projection(CamelModel):
    """Linear value projection at the average daily gain since purchase."""

    horizon_days: int
    projected_value: float


class Milestone(CamelModel):
    """A return target and what the share price must reach to hit it."""

    return_percent: float
    target_value: float
    price_needed: float
    achieved: bool
    remaining_value: float


class PortfolioSummary(CamelModel):
    """Everything the holdings panel renders for one refresh."""

    quote: Quote
    metrics: PortfolioMetrics
    projections: list[Projection]
    milestones: list[Milestone]
