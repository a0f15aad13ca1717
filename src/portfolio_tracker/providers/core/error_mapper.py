"""Domain concept for mapping chain failures to HTTP responses."""
from dataclasses import dataclass

from fastapi.responses import JSONResponse

from portfolio_tracker.providers.core.exceptions import AllSourcesUnavailable
from portfolio_tracker.schemas import ErrorResponse

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Maps exceptions reaching a route to HTTP (status_code, ErrorResponse).

    Single-provider errors never get this far: QuoteService and HistoryService
    fold them into AllSourcesUnavailable. The handler is registered for that
    exception only, so every route shares one error shape:
    {"error", "message", "details"}.
    """

    resource_name: str = "Quote"

    def to_http(self, exc: Exception) -> tuple[int, ErrorResponse]:
        """Map an exception to (status_code, body)."""
        if isinstance(exc, AllSourcesUnavailable):
            return (
                503,
                ErrorResponse(
                    error="all_sources_unavailable",
                    message=f"{self.resource_name} for '{exc.symbol}' is unavailable: "
                    f"every source failed",
                    details=[a.error.to_dict() for a in exc.attempts],
                ),
            )
        return (
            500,
            ErrorResponse(error="internal_error", message="Internal server error"),
        )

    def to_response(self, exc: Exception) -> JSONResponse:
        status_code, body = self.to_http(exc)
        return JSONResponse(
            status_code=status_code,
            content=body.model_dump(mode="json"),
            headers=NO_CACHE_HEADERS,
        )
