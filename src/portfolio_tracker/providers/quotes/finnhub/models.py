"""Models for the Finnhub /quote endpoint."""
from pydantic import BaseModel, ConfigDict


class FinnhubQuotePayload(BaseModel):
    """Finnhub quote: single-letter keys. Unknown symbols come back as all zeros."""

    model_config = ConfigDict(extra="ignore")

    c: float | None = None  # current price
    d: float | None = None  # change
    dp: float | None = None  # percent change
    h: float | None = None
    l: float | None = None  # noqa: E741
    o: float | None = None
    pc: float | None = None  # previous close
