"""Price history with indicators, falling back to synthetic bars when allowed."""
import logging
from collections.abc import Callable
from datetime import date, timedelta

from portfolio_tracker.providers.core import (AllSourcesUnavailable,
                                              ProviderAttempt, ProviderError)
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.providers.history import YFinanceHistoryProvider
from portfolio_tracker.providers.synthetic import SyntheticQuoteGenerator
from portfolio_tracker.schemas import (HistoryResponse, QuoteSource,
                                       TechnicalIndicators)
from portfolio_tracker.services.indicators import rsi, sma, volatility
from portfolio_tracker.services.quote_service import FallbackPolicy

logger = logging.getLogger(__name__)


class HistoryService:
    """Daily bars for the chart panel plus SMA/RSI/volatility over the closes."""

    def __init__(
        self,
        provider: YFinanceHistoryProvider,
        *,
        synthetic: SyntheticQuoteGenerator | None = None,
        policy: FallbackPolicy = FallbackPolicy(),
        sma_period: int = 20,
        rsi_period: int = 14,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._provider = provider
        self._synthetic = synthetic or SyntheticQuoteGenerator()
        self._policy = policy
        self._sma_period = sma_period
        self._rsi_period = rsi_period
        self._today = today

    async def get_history(
        self, symbol: str, days: int, policy: FallbackPolicy | None = None
    ) -> HistoryResponse:
        """Return `days` calendar days of history ending today.

        Raises:
            AllSourcesUnavailable: yfinance failed and synthetic data is not allowed.
        """
        policy = policy or self._policy
        sym = normalize_stock_symbol(symbol)
        end = self._today()
        start = end - timedelta(days=days)
        try:
            points = await self._provider.get_history(sym, start, end)
            source = QuoteSource.YAHOO
        except ProviderError as e:
            if not policy.allow_synthetic:
                logger.error("History unavailable for %s: %s", sym, e)
                raise AllSourcesUnavailable(
                    sym, [ProviderAttempt(provider=e.provider, error=e)]
                ) from e
            logger.warning("History unavailable for %s (%s); serving synthetic data", sym, e)
            points = self._synthetic.history(days, end)
            source = QuoteSource.SYNTHETIC

        closes = [p.close for p in points]
        return HistoryResponse(
            symbol=sym,
            source=source,
            points=points,
            indicators=TechnicalIndicators(
                sma=sma(closes, self._sma_period),
                rsi=rsi(closes, self._rsi_period),
                volatility=volatility(closes),
            ),
        )
