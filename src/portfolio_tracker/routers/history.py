"""Price history route for the chart panel."""
from fastapi import APIRouter, Query

from portfolio_tracker.deps import HistoryServiceDep, SettingsDep
from portfolio_tracker.routers.quote import policy_override
from portfolio_tracker.schemas import ErrorResponse, HistoryResponse

router = APIRouter(prefix="/history", tags=["history"])


@router.get(
    "",
    response_model=HistoryResponse,
    responses={503: {"model": ErrorResponse, "description": "History source failed"}},
)
async def get_history(
    service: HistoryServiceDep,
    settings: SettingsDep,
    symbol: str | None = Query(default=None),
    days: int = Query(default=30, ge=1, le=365, description="Number of days of history"),
    allow_synthetic: bool | None = Query(default=None),
) -> HistoryResponse:
    """Daily bars plus SMA, RSI and annualized volatility of the closes."""
    return await service.get_history(
        symbol or settings.symbol, days, policy_override(allow_synthetic)
    )
