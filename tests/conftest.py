"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime
from zoneinfo import ZoneInfo

from trading_calendar.engine import TradingCalendar

NEW_YORK = ZoneInfo("America/New_York")


def _ny(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    """Exchange-local instant."""
    return datetime(year, month, day, hour, minute, second, tzinfo=NEW_YORK)


@pytest.fixture
def ny():
    """Factory for exchange-local instants."""
    return _ny


@pytest.fixture
def new_york() -> ZoneInfo:
    """Exchange timezone."""
    return NEW_YORK


@pytest.fixture
def calendar() -> TradingCalendar:
    """Calendar with the default NYSE configuration."""
    return TradingCalendar()


@pytest.fixture
def sample_calendar_yaml() -> str:
    """Calendar overrides as they would appear in calendar.yaml."""
    return (
        "session:\n"
        "  timezone: \"America/New_York\"\n"
        "  early_close_time: \"12:30\"\n"
        "holidays:\n"
        "  extra_holidays:\n"
        "    - 2023-05-10\n"
        "  extra_early_closes:\n"
        "    - \"2023-05-11\"\n"
    )
