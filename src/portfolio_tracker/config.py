"""Application configuration loaded from the environment (or a .env file).

Invalid holdings, tax rates or grant tables fail here, at startup, rather
than surfacing later as divide-by-zero or negative values.
"""
from datetime import date
from functools import lru_cache
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from portfolio_tracker.market_hours import NYSE, ExchangeCalendar
from portfolio_tracker.schemas import (HoldingsConfig, ReferenceData,
                                       TaxConfig, VestingEvent)
from portfolio_tracker.services.quote_service import FallbackPolicy


class Settings(BaseSettings):
    """Configuration options for the portfolio tracker."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    symbol: str = Field(default="UWMC")
    shares: int = Field(default=9876, gt=0)
    purchase_price: float = Field(default=4.05, gt=0)
    purchase_date: date = Field(default=date(2025, 7, 30))
    rsu_grants: list[VestingEvent] = Field(
        default_factory=list,
        description="JSON list of vesting events (grantId, grantDate, grantPrice, vestDate, shares).",
    )

    federal_rate: float = Field(default=0.22, ge=0, lt=1)
    state_rate: float = Field(default=0.09, ge=0, lt=1)
    fica_rate: float = Field(default=0.0765, ge=0, lt=1)

    allow_synthetic: bool = Field(
        default=False,
        description="Serve synthetic placeholder quotes when every provider fails.",
    )
    provider_timeout_seconds: float = Field(default=5.0, gt=0)
    poll_interval_open_seconds: float = Field(default=5.0, gt=0)
    poll_interval_closed_seconds: float = Field(default=60.0, gt=0)

    finnhub_api_key: str | None = Field(default=None)
    twelvedata_api_key: str | None = Field(default=None)
    alphavantage_api_key: str | None = Field(default=None)

    shares_outstanding: float = Field(default=1_590_000_000, gt=0)
    avg_volume: int = Field(default=7_500_000, ge=0)
    week52_high: float = Field(default=8.54, gt=0)
    week52_low: float = Field(default=3.36, gt=0)
    reference_price: float = Field(default=5.25, gt=0)
    reference_previous_close: float = Field(default=5.10, gt=0)

    exchange_timezone: str = Field(default=NYSE.timezone)
    market_holidays: list[date] = Field(default_factory=list)

    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def _check_tax_rates(self) -> "Settings":
        total = self.federal_rate + self.state_rate + self.fica_rate
        if total >= 1:
            raise ValueError(f"combined tax rate must be below 100%, got {total:.2%}")
        return self

    def holdings(self) -> HoldingsConfig:
        return HoldingsConfig(
            shares=self.shares,
            cost_basis=self.purchase_price,
            purchase_date=self.purchase_date,
        )

    def tax(self) -> TaxConfig:
        return TaxConfig(
            federal_rate=self.federal_rate,
            state_rate=self.state_rate,
            fica_rate=self.fica_rate,
        )

    def reference(self) -> ReferenceData:
        return ReferenceData(
            shares_outstanding=self.shares_outstanding,
            avg_volume=self.avg_volume,
            week52_high=self.week52_high,
            week52_low=self.week52_low,
            price=self.reference_price,
            previous_close=self.reference_previous_close,
        )

    def calendar(self) -> ExchangeCalendar:
        return ExchangeCalendar(
            timezone=self.exchange_timezone,
            holidays=frozenset(self.market_holidays),
        )

    def fallback_policy(self) -> FallbackPolicy:
        return FallbackPolicy(allow_synthetic=self.allow_synthetic)

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""
        hidden = {"finnhub_api_key", "twelvedata_api_key", "alphavantage_api_key"}
        return {
            k: ("***" if k in hidden and v else v)
            for k, v in self.model_dump(exclude={"rsu_grants"}).items()
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
