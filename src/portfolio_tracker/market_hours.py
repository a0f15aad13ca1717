"""Exchange trading-hours checks and the polling cadence derived from them."""
from dataclasses import dataclass, field
from datetime import date, datetime
from zoneinfo import ZoneInfo

DEFAULT_OPEN_INTERVAL = 5.0
DEFAULT_CLOSED_INTERVAL = 60.0


@dataclass(frozen=True)
class ExchangeCalendar:
    """Regular session of an exchange, expressed in the exchange's own timezone.

    open_minute/close_minute are minutes after local midnight; the session is
    the half-open window [open, close). Holidays are a static list of local dates.
    """

    timezone: str = "America/New_York"
    open_minute: int = 9 * 60 + 30
    close_minute: int = 16 * 60
    trading_weekdays: frozenset[int] = frozenset({0, 1, 2, 3, 4})
    holidays: frozenset[date] = field(default_factory=frozenset)


NYSE = ExchangeCalendar()


def is_market_open(instant: datetime, calendar: ExchangeCalendar = NYSE) -> bool:
    """Return True if the exchange's regular session is open at `instant`.

    The instant is converted to the exchange timezone first; the caller's local
    clock is never used. Naive datetimes are rejected because their timezone is
    ambiguous.
    """
    if instant.tzinfo is None:
        raise ValueError("instant must be timezone-aware")
    local = instant.astimezone(ZoneInfo(calendar.timezone))
    if local.weekday() not in calendar.trading_weekdays:
        return False
    if local.date() in calendar.holidays:
        return False
    seconds = local.hour * 3600 + local.minute * 60 + local.second
    return calendar.open_minute * 60 <= seconds < calendar.close_minute * 60


def poll_interval(
    market_open: bool,
    open_interval: float = DEFAULT_OPEN_INTERVAL,
    closed_interval: float = DEFAULT_CLOSED_INTERVAL,
) -> float:
    """Seconds to wait before the next refresh: short while trading, long otherwise."""
    return open_interval if market_open else closed_interval
