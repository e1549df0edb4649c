"""
Time handling utilities for the calendar engine.

This module provides the injectable clocks that stand in for the wall clock,
UTC-safe duration arithmetic between exchange-local instants, and the
parsing and formatting helpers shared by the configuration layer and the
status snapshot.
"""

from datetime import datetime, time, timedelta, timezone
from typing import Callable, Union

Clock = Callable[[], datetime]


class SystemClock:
    """Wall-clock time source returning timezone-aware UTC instants."""

    def __call__(self) -> datetime:
        return datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Clock pinned to a single instant, for deterministic evaluation and tests."""

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None or instant.utcoffset() is None:
            raise ValueError(f"FixedClock requires a timezone-aware instant, got {instant!r}")
        self._instant = instant

    def __call__(self) -> datetime:
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()})"


def is_aware(instant: datetime) -> bool:
    """True if ``instant`` carries a usable UTC offset."""
    return instant.tzinfo is not None and instant.utcoffset() is not None


def elapsed(start: datetime, end: datetime) -> timedelta:
    """
    Real elapsed time between two aware instants.

    Both instants are converted to UTC first; subtracting datetimes that
    share a tzinfo would otherwise yield the wall-clock difference and be
    off by an hour across a daylight saving transition.

    Args:
        start: Start instant
        end: End instant

    Returns:
        ``end - start`` as a timedelta (negative if end precedes start)
    """
    return end.astimezone(timezone.utc) - start.astimezone(timezone.utc)


def parse_clock_time(value: Union[str, time]) -> time:
    """
    Parse an ``HH:MM`` (or ``HH:MM:SS``) wall-clock time.

    Args:
        value: Time string or an existing time

    Returns:
        Parsed time with sub-second fields zeroed

    Raises:
        ValueError: If the string is not a valid clock time
    """
    if isinstance(value, time):
        return value.replace(microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise ValueError(f"Expected an HH:MM string, got {type(value).__name__}")

    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid clock time {value!r}, expected HH:MM")

    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    return time(hour, minute, second)


def format_countdown(duration: Union[timedelta, float]) -> str:
    """
    Format a duration as a countdown label.

    The value is rounded half-up to whole seconds. The day unit is omitted
    when zero: ``"05:04:03"`` or ``"2 Days, 05:04:03"``.

    Args:
        duration: Remaining time as a timedelta or a number of seconds

    Returns:
        Formatted countdown string
    """
    seconds = duration.total_seconds() if isinstance(duration, timedelta) else float(duration)
    total_seconds = int(seconds + 0.5) if seconds >= 0 else 0

    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    if days > 0:
        return f"{days} Days, {hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_exchange_time(instant: datetime) -> str:
    """
    Format an exchange-local instant for logging.

    Args:
        instant: Aware instant, already in the exchange timezone

    Returns:
        ISO8601 string including the UTC offset
    """
    return instant.isoformat()
