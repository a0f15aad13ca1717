"""RSU vesting analytics at the current share price."""
import math
from collections.abc import Sequence
from datetime import date

from portfolio_tracker.schemas import (TaxConfig, VestingAnalytics,
                                       VestingEvent, VestingEventAnalytics)

# Quotients within this many decimals of an integer are treated as exact, so
# float noise in gross * rate does not cost the holder an extra share.
_QUOTIENT_DECIMALS = 9


def shares_to_withhold(tax_withholding: float, price: float, shares: int) -> int:
    """Whole shares sold to cover `tax_withholding`, rounded up and capped at `shares`."""
    if price <= 0 or tax_withholding <= 0:
        return 0
    withheld = math.ceil(round(tax_withholding / price, _QUOTIENT_DECIMALS))
    return min(withheld, shares)


def analyze_event(
    event: VestingEvent, price: float, tax_rate: float, as_of: date
) -> VestingEventAnalytics:
    gross_value = event.shares * price
    tax_withholding = gross_value * tax_rate
    withheld = shares_to_withhold(tax_withholding, price, event.shares)
    return VestingEventAnalytics(
        **event.model_dump(),
        is_vested=event.vest_date <= as_of,
        days_until_vest=(event.vest_date - as_of).days,
        gross_value=gross_value,
        tax_withholding=tax_withholding,
        net_value=gross_value - tax_withholding,
        shares_withheld=withheld,
        net_shares=event.shares - withheld,
    )


def analyze_vesting(
    schedule: Sequence[VestingEvent],
    price: float,
    tax: TaxConfig,
    as_of: date,
) -> VestingAnalytics:
    """Value every vesting event at `price` and total them.

    Events are ordered by vest date, then grant id, then schedule position,
    so next_vesting is deterministic when tranches share a date.
    """
    ordered = [
        event
        for _, event in sorted(
            enumerate(schedule),
            key=lambda item: (item[1].vest_date, item[1].grant_id, item[0]),
        )
    ]
    rate = tax.total_rate
    events = [analyze_event(e, price, rate, as_of) for e in ordered]
    vested = [e for e in events if e.is_vested]
    unvested = [e for e in events if not e.is_vested]

    total_gross = sum(e.gross_value for e in events)
    total_net = sum(e.net_value for e in events)
    return VestingAnalytics(
        events=events,
        vested_events=vested,
        unvested_events=unvested,
        next_vesting=unvested[0] if unvested else None,
        total_vested=sum(e.shares for e in vested),
        total_unvested=sum(e.shares for e in unvested),
        total_shares=sum(e.shares for e in events),
        total_gross_value=total_gross,
        total_net_value=total_net,
        total_taxes=total_gross - total_net,
        total_tax_rate=rate,
        vested_gross_value=sum(e.gross_value for e in vested),
        vested_net_value=sum(e.net_value for e in vested),
        unvested_gross_value=sum(e.gross_value for e in unvested),
        unvested_net_value=sum(e.net_value for e in unvested),
    )
