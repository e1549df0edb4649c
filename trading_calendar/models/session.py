"""
Trading calendar data models.

This module defines the immutable value types exchanged by the calendar
engine: calendar date keys for the holiday tables, trading sessions, lookback
spans and the request windows and status snapshots built from them.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from dateutil.relativedelta import relativedelta

from ..utils.time import format_countdown


@dataclass(frozen=True, order=True)
class CalendarDate:
    """Exchange-local (year, month, day) key used by the holiday tables."""
    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        """Build a key from a date (datetimes contribute only their date fields)."""
        return cls(value.year, value.month, value.day)

    @classmethod
    def parse(cls, value: str) -> "CalendarDate":
        """
        Parse an ISO ``YYYY-MM-DD`` string.

        Raises:
            ValueError: If the string is not a valid calendar date
        """
        return cls.from_date(date.fromisoformat(value))

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class TradingSession:
    """One trading day's open and close instants in the exchange timezone."""
    open: datetime
    close: datetime

    def __post_init__(self) -> None:
        if self.open.date() != self.close.date():
            raise ValueError(
                f"Session open {self.open.isoformat()} and close "
                f"{self.close.isoformat()} fall on different dates"
            )
        if self.open >= self.close:
            raise ValueError(
                f"Session open {self.open.isoformat()} is not before close {self.close.isoformat()}"
            )

    @property
    def date(self) -> date:
        """Exchange-local calendar date of the session."""
        return self.open.date()

    @property
    def duration(self) -> timedelta:
        return self.close - self.open

    def contains(self, instant: datetime) -> bool:
        """True if the market is open at ``instant`` (close is exclusive)."""
        return self.open <= instant < self.close


class LookbackSpan(str, Enum):
    """Named lookback durations for historical data windows."""
    DAY = "1D"
    WEEK = "1W"
    MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    YEAR = "1Y"
    TWO_YEARS = "2Y"
    FIVE_YEARS = "5Y"
    TEN_YEARS = "10Y"

    @property
    def offset(self) -> relativedelta:
        """Calendar offset applied to the latest session's date (negative)."""
        return _SPAN_OFFSETS[self]

    @property
    def resolution(self) -> str:
        """Candle resolution tag requested upstream for this span."""
        return _SPAN_RESOLUTIONS[self]


_SPAN_OFFSETS = {
    LookbackSpan.DAY: relativedelta(),
    LookbackSpan.WEEK: relativedelta(days=-7),
    LookbackSpan.MONTH: relativedelta(months=-1),
    LookbackSpan.THREE_MONTHS: relativedelta(months=-3),
    LookbackSpan.SIX_MONTHS: relativedelta(months=-6),
    LookbackSpan.YEAR: relativedelta(years=-1),
    LookbackSpan.TWO_YEARS: relativedelta(years=-2),
    LookbackSpan.FIVE_YEARS: relativedelta(years=-5),
    LookbackSpan.TEN_YEARS: relativedelta(years=-10),
}

# Minutes for intraday spans, then daily / weekly / monthly candles
_SPAN_RESOLUTIONS = {
    LookbackSpan.DAY: "5",
    LookbackSpan.WEEK: "15",
    LookbackSpan.MONTH: "60",
    LookbackSpan.THREE_MONTHS: "D",
    LookbackSpan.SIX_MONTHS: "D",
    LookbackSpan.YEAR: "D",
    LookbackSpan.TWO_YEARS: "W",
    LookbackSpan.FIVE_YEARS: "W",
    LookbackSpan.TEN_YEARS: "M",
}


@dataclass(frozen=True)
class HistoryWindow:
    """Historical data request window for the upstream candle endpoint."""
    span: LookbackSpan
    resolution: str
    start: datetime
    end: datetime

    @property
    def is_empty(self) -> bool:
        """True when the window has no width, as at the very open of a session."""
        return self.start >= self.end

    @property
    def from_timestamp(self) -> int:
        return int(self.start.timestamp())

    @property
    def to_timestamp(self) -> int:
        return int(self.end.timestamp())

    def as_query_params(self) -> dict[str, str]:
        """Query parameters in the shape the candle endpoint expects."""
        return {
            "resolution": self.resolution,
            "from": str(self.from_timestamp),
            "to": str(self.to_timestamp),
        }


@dataclass(frozen=True)
class MarketStatus:
    """Snapshot of open/closed state and countdowns for a single instant."""
    as_of: datetime
    is_open: bool
    latest_session: TradingSession
    next_session: TradingSession
    time_until_open: timedelta
    time_until_close: timedelta

    @property
    def countdown(self) -> str:
        """Time remaining until the next open or close, formatted for display."""
        if self.is_open:
            return format_countdown(self.time_until_close)
        return format_countdown(self.time_until_open)
