"""RSU schedule, tax configuration and derived vesting analytics."""
from datetime import date

from pydantic import BaseModel, Field, computed_field, model_validator

from portfolio_tracker.schemas.quote import CamelModel


class VestingEvent(CamelModel):
    """One tranche of an RSU grant. Tranches of one award share grant_id."""

    grant_id: str
    grant_date: date
    grant_price: float = Field(gt=0)
    vest_date: date
    shares: int = Field(gt=0)


class TaxConfig(BaseModel):
    """Withholding rates applied to vesting income."""

    federal_rate: float = Field(default=0.22, ge=0, lt=1)
    state_rate: float = Field(default=0.09, ge=0, lt=1)
    fica_rate: float = Field(default=0.0765, ge=0, lt=1)

    @computed_field
    @property
    def total_rate(self) -> float:
        return self.federal_rate + self.state_rate + self.fica_rate

    @model_validator(mode="after")
    def _check_total_rate(self) -> "TaxConfig":
        if self.total_rate >= 1:
            raise ValueError(
                f"combined tax rate must be below 100%, got {self.total_rate:.2%}"
            )
        return self


class VestingEventAnalytics(VestingEvent):
    """A vesting event valued at the current price."""

    is_vested: bool
    days_until_vest: int  # negative once the vest date has passed
    gross_value: float
    tax_withholding: float
    net_value: float
    shares_withheld: int
    net_shares: int


class VestingAnalytics(CamelModel):
    """Per-event values plus vested/unvested subtotals and overall totals."""

    events: list[VestingEventAnalytics]
    vested_events: list[VestingEventAnalytics]
    unvested_events: list[VestingEventAnalytics]
    next_vesting: VestingEventAnalytics | None = None
    total_vested: int
    total_unvested: int
    total_shares: int
    total_gross_value: float
    total_net_value: float
    total_taxes: float
    total_tax_rate: float
    vested_gross_value: float
    vested_net_value: float
    unvested_gross_value: float
    unvested_net_value: float
