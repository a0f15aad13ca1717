"""Abstract base class for quote providers."""
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from portfolio_tracker.market_hours import NYSE, ExchangeCalendar, is_market_open
from portfolio_tracker.providers.core.exceptions import (HttpError,
                                                         MalformedResponse,
                                                         ProviderError,
                                                         ProviderTimeout)
from portfolio_tracker.providers.core.normalizer import (QuoteFields,
                                                         normalize_quote)
from portfolio_tracker.schemas import Quote, QuoteSource, ReferenceData


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QuoteProviderABC(ABC):
    """Base interface for all quote providers.

    A provider is a thin fetch-and-parse unit: one HTTP GET per get_quote call,
    no retries, no fallbacks. Failures surface as ProviderError subclasses and
    the fallback chain decides what to do next.

    Subclasses set `source` and `BASE_URL` and implement get_quote.
    """

    source: QuoteSource
    BASE_URL: str = ""
    DEFAULT_HEADERS: dict[str, str] = {"Accept": "application/json"}

    def __init__(
        self,
        *,
        reference: ReferenceData | None = None,
        calendar: ExchangeCalendar = NYSE,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize provider.

        Args:
            reference: Static data used to fill fields the provider omits.
            calendar: Exchange calendar used to annotate quotes with is_market_open.
            client: Preconfigured httpx client (tests inject a MockTransport client).
            timeout: httpx timeout in seconds for a single request.
            clock: Source of the capture timestamp.
        """
        self._reference = reference or ReferenceData()
        self._calendar = calendar
        self._clock = clock
        self._client = client or httpx.AsyncClient(base_url=self.BASE_URL, timeout=timeout)

    @property
    def name(self) -> str:
        return self.source.value

    @abstractmethod
    async def get_quote(self, symbol: str) -> Quote:
        """Fetch the current quote for a symbol.

        Raises:
            HttpError, MalformedResponse, ProviderTimeout, ProviderError.
        """

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "QuoteProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET `path` and decode JSON, translating transport failures to ProviderError."""
        try:
            response = await self._client.get(
                path, params=params, headers=self.DEFAULT_HEADERS
            )
        except httpx.TimeoutException as e:
            raise ProviderTimeout(self.name, "request timed out") from e
        except httpx.InvalidURL as e:
            raise ProviderError(self.name, f"invalid request URL: {e}") from e
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"request failed: {e}") from e
        if not response.is_success:
            raise HttpError(self.name, response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(self.name, "response body is not JSON") from e

    def _parse(self, model: type[BaseModel], data: Any) -> Any:
        """Validate a payload fragment against `model`; schema drift -> MalformedResponse."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedResponse(
                self.name, f"unexpected payload shape: {e.error_count()} errors"
            ) from e

    def _build_quote(self, symbol: str, fields: QuoteFields) -> Quote:
        """Normalize fields into a Quote stamped with capture time and session state."""
        captured_at = self._clock()
        return normalize_quote(
            symbol,
            fields,
            source=self.source,
            reference=self._reference,
            captured_at=captured_at,
            is_market_open=is_market_open(captured_at, self._calendar),
        )
