"""Fallback chain over quote providers.

Providers are tried one at a time in priority order so a slow secondary source
never races the primary. The first success wins; failures are logged and
recorded, and only total exhaustion reaches the caller.
"""
import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from portfolio_tracker.providers.core import (AllSourcesUnavailable,
                                              ProviderAttempt, ProviderError,
                                              ProviderTimeout,
                                              QuoteProviderABC)
from portfolio_tracker.providers.core.utils import normalize_stock_symbol
from portfolio_tracker.providers.synthetic import SyntheticQuoteGenerator
from portfolio_tracker.schemas import Quote

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackPolicy:
    """What to do when every provider fails.

    allow_synthetic=True returns a synthetic quote (tagged source=synthetic);
    False raises AllSourcesUnavailable.
    """

    allow_synthetic: bool = False


class QuoteService:
    """Fetches quotes through an ordered provider chain with an explicit fallback policy."""

    def __init__(
        self,
        providers: Sequence[QuoteProviderABC],
        *,
        synthetic: SyntheticQuoteGenerator | None = None,
        policy: FallbackPolicy = FallbackPolicy(),
        provider_timeout: float = 5.0,
    ) -> None:
        """Initialize the chain.

        Args:
            providers: Quote providers in priority order (primary first).
            synthetic: Generator used when the policy allows synthetic data.
            policy: Default fallback policy; get_quote may override it per call.
            provider_timeout: Upper bound in seconds for a single provider call.
        """
        self._providers = tuple(providers)
        self._synthetic = synthetic or SyntheticQuoteGenerator()
        self._policy = policy
        self._provider_timeout = provider_timeout

    @property
    def providers(self) -> tuple[QuoteProviderABC, ...]:
        return self._providers

    @property
    def policy(self) -> FallbackPolicy:
        return self._policy

    async def get_quote(self, symbol: str, policy: FallbackPolicy | None = None) -> Quote:
        """Return the first quote any provider produces.

        Raises:
            AllSourcesUnavailable: every provider failed and synthetic data is not allowed.
        """
        policy = policy or self._policy
        sym = normalize_stock_symbol(symbol)
        attempts: list[ProviderAttempt] = []
        for provider in self._providers:
            try:
                quote = await asyncio.wait_for(
                    provider.get_quote(sym), timeout=self._provider_timeout
                )
            except asyncio.TimeoutError:
                error: ProviderError = ProviderTimeout(
                    provider.name, f"no response within {self._provider_timeout}s"
                )
            except ProviderError as e:
                error = e
            except Exception as e:  # pylint: disable=broad-except
                logger.exception("Quote provider %s raised unexpectedly for %s", provider.name, sym)
                error = ProviderError(provider.name, f"unexpected error: {e!r}")
            else:
                if attempts:
                    logger.info(
                        "Quote for %s served by %s after %d failed source(s)",
                        sym,
                        provider.name,
                        len(attempts),
                    )
                return quote
            logger.warning("Quote provider %s failed for %s: %s", provider.name, sym, error)
            attempts.append(ProviderAttempt(provider=provider.name, error=error))

        if policy.allow_synthetic:
            logger.warning(
                "All %d quote sources failed for %s; serving synthetic data",
                len(attempts),
                sym,
            )
            return self._synthetic.quote(sym)
        logger.error("All %d quote sources failed for %s", len(attempts), sym)
        raise AllSourcesUnavailable(sym, attempts)

    async def close(self) -> None:
        """Close all providers. Call from app lifespan shutdown."""
        for provider in self._providers:
            try:
                await provider.close()
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Error closing provider %s: %s", provider.name, exc)
