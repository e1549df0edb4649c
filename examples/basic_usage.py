#!/usr/bin/env python3
"""
Basic Usage Example - Trading Calendar Engine

This script demonstrates the basic usage of the trading calendar engine.
It shows how to:
- Initialize the engine with a pinned clock
- Resolve the latest and next trading sessions
- Check market status and countdowns
- Build historical data request windows for each lookback span

Run: python examples/basic_usage.py
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from trading_calendar.engine import TradingCalendar
from trading_calendar.logging import configure_logging
from trading_calendar.models.session import LookbackSpan
from trading_calendar.utils.time import FixedClock

NEW_YORK = ZoneInfo("America/New_York")


def describe(calendar: TradingCalendar, label: str, now: datetime) -> None:
    """Print the calendar's view of a single instant."""
    status = calendar.market_status(now)
    print(f"\n🕒 {label}: {now.isoformat()}")
    print(f"   Market open:     {status.is_open}")
    print(f"   Latest session:  {status.latest_session.open.isoformat()} -> {status.latest_session.close.isoformat()}")
    print(f"   Next session:    {status.next_session.open.isoformat()}")
    print(f"   Countdown:       {status.countdown}")


def main() -> None:
    configure_logging(level="INFO")

    pinned = datetime(2023, 7, 3, 12, 15, tzinfo=NEW_YORK)
    calendar = TradingCalendar(clock=FixedClock(pinned))

    print("📅 Trading Calendar Demo")
    print("=" * 50)

    describe(calendar, "Early-close day, before 13:00", pinned)
    describe(calendar, "Independence Day", datetime(2023, 7, 4, 11, 0, tzinfo=NEW_YORK))
    describe(calendar, "Saturday", datetime(2023, 7, 8, 12, 0, tzinfo=NEW_YORK))
    describe(calendar, "Monday pre-market", datetime(2023, 7, 10, 8, 0, tzinfo=NEW_YORK))

    print("\n📈 History windows at the pinned instant")
    for span in LookbackSpan:
        window = calendar.history_window(span)
        print(f"   {span.value:>4}: {window.as_query_params()}  (from {window.start.date()})")


if __name__ == "__main__":
    main()
