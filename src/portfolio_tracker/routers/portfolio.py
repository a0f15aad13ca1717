"""Holdings and RSU vesting panels."""
from fastapi import APIRouter, Query

from portfolio_tracker.deps import DashboardServiceDep
from portfolio_tracker.routers.quote import policy_override
from portfolio_tracker.schemas import (ErrorResponse, PortfolioSummary,
                                       VestingAnalytics)

router = APIRouter(tags=["portfolio"])

_UNAVAILABLE = {503: {"model": ErrorResponse, "description": "Every quote source failed"}}


@router.get("/portfolio", response_model=PortfolioSummary, responses=_UNAVAILABLE)
async def get_portfolio(
    service: DashboardServiceDep,
    allow_synthetic: bool | None = Query(default=None),
) -> PortfolioSummary:
    """Valuation, gain/loss, annualized return, projections and milestones."""
    return await service.get_portfolio(policy_override(allow_synthetic))


@router.get("/vesting", response_model=VestingAnalytics, responses=_UNAVAILABLE)
async def get_vesting(
    service: DashboardServiceDep,
    allow_synthetic: bool | None = Query(default=None),
) -> VestingAnalytics:
    """RSU schedule valued at the current price, with tax withholding."""
    return await service.get_vesting(policy_override(allow_synthetic))
