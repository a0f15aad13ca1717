"""Typed errors raised by quote providers and the fallback chain."""
from dataclasses import dataclass


class ProviderError(Exception):
    """A single provider failed to produce a quote."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message

    @property
    def kind(self) -> str:
        return "provider_error"

    def to_dict(self) -> dict:
        return {"provider": self.provider, "kind": self.kind, "message": self.message}


class HttpError(ProviderError):
    """Provider answered with a non-2xx status."""

    def __init__(self, provider: str, status: int) -> None:
        super().__init__(provider, f"HTTP {status}")
        self.status = status

    @property
    def kind(self) -> str:
        return "http_error"

    def to_dict(self) -> dict:
        return super().to_dict() | {"status": self.status}


class MalformedResponse(ProviderError):
    """Body could not be decoded or lacks the fields a quote requires."""

    @property
    def kind(self) -> str:
        return "malformed_response"


class ProviderTimeout(ProviderError):
    """Provider did not answer within the allotted time."""

    @property
    def kind(self) -> str:
        return "timeout"


@dataclass(frozen=True)
class ProviderAttempt:
    """Outcome of one failed provider call within a fallback chain."""

    provider: str
    error: ProviderError


class AllSourcesUnavailable(Exception):
    """Every provider in the chain failed and synthetic fallback was not allowed."""

    def __init__(self, symbol: str, attempts: list[ProviderAttempt]) -> None:
        names = ", ".join(a.provider for a in attempts) or "no providers configured"
        super().__init__(f"No quote source available for '{symbol}' ({names})")
        self.symbol = symbol
        self.attempts = attempts
