"""Core provider abstractions."""
from portfolio_tracker.providers.core.error_mapper import ProviderErrorMapper
from portfolio_tracker.providers.core.exceptions import (AllSourcesUnavailable,
                                                         HttpError,
                                                         MalformedResponse,
                                                         ProviderAttempt,
                                                         ProviderError,
                                                         ProviderTimeout)
from portfolio_tracker.providers.core.normalizer import (QuoteFields,
                                                         compute_change_percent,
                                                         normalize_quote,
                                                         parse_number)
from portfolio_tracker.providers.core.quote_provider_abc import QuoteProviderABC
from portfolio_tracker.providers.core.utils import round2

__all__ = [
    "AllSourcesUnavailable",
    "HttpError",
    "MalformedResponse",
    "ProviderAttempt",
    "ProviderError",
    "ProviderErrorMapper",
    "ProviderTimeout",
    "QuoteFields",
    "QuoteProviderABC",
    "compute_change_percent",
    "normalize_quote",
    "parse_number",
    "round2",
]
