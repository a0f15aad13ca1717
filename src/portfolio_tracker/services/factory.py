"""Factories wiring settings into providers and services (composition root helpers)."""
import logging

from portfolio_tracker.config import Settings
from portfolio_tracker.providers import (AlphaVantageProvider, FinnhubProvider,
                                         QuoteProviderABC,
                                         SyntheticQuoteGenerator,
                                         TwelveDataProvider,
                                         YahooFinanceProvider,
                                         YFinanceHistoryProvider)
from portfolio_tracker.services.dashboard import DashboardService
from portfolio_tracker.services.history_service import HistoryService
from portfolio_tracker.services.poller import QuotePoller
from portfolio_tracker.services.quote_service import QuoteService

logger = logging.getLogger(__name__)


def create_quote_providers(settings: Settings) -> list[QuoteProviderABC]:
    """Build the provider chain in priority order: Yahoo first, then keyed sources.

    Secondary providers whose API key is not configured are left out.
    """
    common = {
        "reference": settings.reference(),
        "calendar": settings.calendar(),
        "timeout": settings.provider_timeout_seconds,
    }
    providers: list[QuoteProviderABC] = [YahooFinanceProvider(**common)]
    keyed = (
        (FinnhubProvider, settings.finnhub_api_key),
        (TwelveDataProvider, settings.twelvedata_api_key),
        (AlphaVantageProvider, settings.alphavantage_api_key),
    )
    for provider_cls, api_key in keyed:
        if api_key:
            providers.append(provider_cls(api_key, **common))
        else:
            logger.info("%s disabled: no API key configured", provider_cls.__name__)
    return providers


def create_synthetic_generator(settings: Settings) -> SyntheticQuoteGenerator:
    return SyntheticQuoteGenerator(settings.reference(), calendar=settings.calendar())


def create_quote_service(settings: Settings) -> QuoteService:
    return QuoteService(
        create_quote_providers(settings),
        synthetic=create_synthetic_generator(settings),
        policy=settings.fallback_policy(),
        provider_timeout=settings.provider_timeout_seconds,
    )


def create_history_service(settings: Settings) -> HistoryService:
    return HistoryService(
        YFinanceHistoryProvider(),
        synthetic=create_synthetic_generator(settings),
        policy=settings.fallback_policy(),
    )


def create_dashboard_service(settings: Settings, quote_service: QuoteService) -> DashboardService:
    return DashboardService(
        quote_service,
        symbol=settings.symbol,
        holdings=settings.holdings(),
        schedule=settings.rsu_grants,
        tax=settings.tax(),
    )


def create_poller(settings: Settings, quote_service: QuoteService, symbol: str) -> QuotePoller:
    return QuotePoller(
        quote_service,
        symbol,
        calendar=settings.calendar(),
        open_interval=settings.poll_interval_open_seconds,
        closed_interval=settings.poll_interval_closed_seconds,
    )
