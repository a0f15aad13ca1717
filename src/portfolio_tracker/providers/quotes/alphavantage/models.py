"""Models for the Alpha Vantage GLOBAL_QUOTE function."""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from portfolio_tracker.providers.core.normalizer import parse_number


class AlphaVantageQuoteParams(BaseModel):
    """Params for /query (get_quote). Merge with 'symbol' and 'apikey' at call site."""

    function: str = "GLOBAL_QUOTE"


class AlphaVantageGlobalQuote(BaseModel):
    """The "Global Quote" block. Keys are numbered strings; values are strings.

    "10. change percent" arrives as e.g. "2.9412%".
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    open: float | None = Field(default=None, alias="02. open")
    high: float | None = Field(default=None, alias="03. high")
    low: float | None = Field(default=None, alias="04. low")
    price: float | None = Field(default=None, alias="05. price")
    volume: float | None = Field(default=None, alias="06. volume")
    previous_close: float | None = Field(default=None, alias="08. previous close")
    change: float | None = Field(default=None, alias="09. change")
    change_percent: float | None = Field(default=None, alias="10. change percent")

    @field_validator("*", mode="before")
    @classmethod
    def _parse_numeric_strings(cls, value):
        return parse_number(value)
