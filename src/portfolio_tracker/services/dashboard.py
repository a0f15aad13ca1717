"""Holdings and vesting panels: fetch one quote, derive everything from it."""
from collections.abc import Callable, Sequence
from datetime import date

from portfolio_tracker.schemas import (HoldingsConfig, PortfolioSummary,
                                       TaxConfig, VestingAnalytics,
                                       VestingEvent)
from portfolio_tracker.services.portfolio import (compute_metrics,
                                                  compute_milestones,
                                                  project_values)
from portfolio_tracker.services.quote_service import FallbackPolicy, QuoteService
from portfolio_tracker.services.vesting import analyze_vesting


class DashboardService:
    """Combines the configured position and RSU schedule with a fresh quote."""

    def __init__(
        self,
        quote_service: QuoteService,
        *,
        symbol: str,
        holdings: HoldingsConfig,
        schedule: Sequence[VestingEvent],
        tax: TaxConfig,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._quotes = quote_service
        self._symbol = symbol
        self._holdings = holdings
        self._schedule = tuple(schedule)
        self._tax = tax
        self._today = today

    async def get_portfolio(self, policy: FallbackPolicy | None = None) -> PortfolioSummary:
        quote = await self._quotes.get_quote(self._symbol, policy)
        as_of = self._today()
        return PortfolioSummary(
            quote=quote,
            metrics=compute_metrics(self._holdings, quote, as_of),
            projections=project_values(self._holdings, quote, as_of),
            milestones=compute_milestones(self._holdings, quote),
        )

    async def get_vesting(self, policy: FallbackPolicy | None = None) -> VestingAnalytics:
        quote = await self._quotes.get_quote(self._symbol, policy)
        return analyze_vesting(self._schedule, quote.price, self._tax, self._today())
