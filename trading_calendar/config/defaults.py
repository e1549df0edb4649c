"""Default configuration parameters for the trading calendar."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionParams:
    """Exchange timezone and session clock times (exchange-local)."""
    timezone: str = "America/New_York"               # IANA zone, DST-aware
    open_time: str = "09:30"                         # Regular open
    close_time: str = "16:00"                        # Regular close
    early_close_time: str = "13:00"                  # Close on early-close days


@dataclass(frozen=True)
class HolidayParams:
    """Entries added on top of the static NYSE tables (ISO dates)."""
    extra_holidays: tuple[str, ...] = ()
    extra_early_closes: tuple[str, ...] = ()


@dataclass(frozen=True)
class CalendarConfig:
    """Complete calendar configuration."""
    session: SessionParams
    holidays: HolidayParams


def get_default_config() -> CalendarConfig:
    """Get the default configuration instance."""
    return CalendarConfig(
        session=SessionParams(),
        holidays=HolidayParams(),
    )
