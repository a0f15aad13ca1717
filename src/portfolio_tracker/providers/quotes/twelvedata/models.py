"""Models for the Twelve Data /quote endpoint."""
from pydantic import BaseModel, ConfigDict


class TwelveDataRange(BaseModel):
    model_config = ConfigDict(extra="ignore")

    low: float | None = None
    high: float | None = None


class TwelveDataQuotePayload(BaseModel):
    """Twelve Data quote. Numbers arrive as strings; `close` is the latest price.

    Errors come back with HTTP 200 and {"status": "error", "code", "message"}.
    """

    model_config = ConfigDict(extra="ignore")

    status: str | None = None
    code: int | None = None
    message: str | None = None
    close: float | None = None
    previous_close: float | None = None
    change: float | None = None
    open: float | None = None
    high: float | None = None
    low: float | None = None
    volume: float | None = None
    average_volume: float | None = None
    fifty_two_week: TwelveDataRange | None = None
