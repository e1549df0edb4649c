"""Unit tests for the trading calendar engine."""

import pytest
from datetime import date, datetime, timedelta, timezone

from trading_calendar.config.defaults import CalendarConfig, HolidayParams, SessionParams
from trading_calendar.engine import TradingCalendar
from trading_calendar.models.session import CalendarDate, LookbackSpan, TradingSession
from trading_calendar.utils.time import FixedClock


class TestCalendarFacts:
    """Test suite for per-date calendar facts."""

    def test_standard_open_time(self, calendar, ny) -> None:
        """Open is 09:30 exchange-local with sub-second fields zeroed."""
        open_time = calendar.standard_open_time(date(2023, 3, 15))
        assert open_time == ny(2023, 3, 15, 9, 30)
        assert open_time.second == 0
        assert open_time.microsecond == 0
        assert open_time.tzinfo == calendar.timezone

    def test_standard_open_time_ignores_holidays(self, calendar, ny) -> None:
        """Open time is a pure function of the date."""
        assert calendar.standard_open_time(date(2023, 7, 4)) == ny(2023, 7, 4, 9, 30)
        assert calendar.standard_open_time(date(2023, 3, 18)) == ny(2023, 3, 18, 9, 30)

    def test_close_time_regular_day(self, calendar, ny) -> None:
        assert calendar.close_time(date(2023, 3, 15)) == ny(2023, 3, 15, 16, 0)

    def test_close_time_early_close_day(self, calendar, ny) -> None:
        """Early-close days close at 13:00."""
        assert calendar.close_time(date(2021, 11, 26)) == ny(2021, 11, 26, 13, 0)
        assert calendar.close_time(CalendarDate(2023, 7, 3)) == ny(2023, 7, 3, 13, 0)

    def test_close_time_ignores_holidays(self, calendar, ny) -> None:
        assert calendar.close_time(date(2023, 7, 4)) == ny(2023, 7, 4, 16, 0)

    def test_is_holiday(self, calendar) -> None:
        assert calendar.is_holiday(date(2023, 7, 4)) is True
        assert calendar.is_holiday(CalendarDate(2021, 11, 25)) is True
        assert calendar.is_holiday(date(2023, 7, 5)) is False
        # Early closes are trading days, not holidays
        assert calendar.is_holiday(date(2021, 11, 26)) is False

    def test_is_holiday_uses_exchange_local_date(self, calendar) -> None:
        """A UTC instant after midnight UTC is still July 4th in New York."""
        instant = datetime(2023, 7, 5, 2, 0, tzinfo=timezone.utc)
        assert calendar.exchange_date(instant) == date(2023, 7, 4)
        assert calendar.is_holiday(instant) is True

    def test_is_weekend(self, calendar) -> None:
        assert calendar.is_weekend(date(2023, 3, 18)) is True   # Saturday
        assert calendar.is_weekend(date(2023, 3, 19)) is True   # Sunday
        assert calendar.is_weekend(date(2023, 3, 17)) is False  # Friday
        assert calendar.is_weekend(date(2023, 3, 20)) is False  # Monday

    def test_is_trading_day(self, calendar) -> None:
        assert calendar.is_trading_day(date(2023, 3, 15)) is True
        assert calendar.is_trading_day(date(2023, 3, 18)) is False
        assert calendar.is_trading_day(date(2023, 4, 7)) is False
        assert calendar.is_trading_day(date(2021, 11, 26)) is True

    def test_is_before_open(self, calendar, ny) -> None:
        assert calendar.is_before_open(ny(2023, 3, 15, 9, 29, 59)) is True
        assert calendar.is_before_open(ny(2023, 3, 15, 9, 30)) is False
        assert calendar.is_before_open(ny(2023, 3, 15, 0, 0)) is True
        assert calendar.is_before_open(ny(2023, 3, 15, 23, 0)) is False

    def test_session_for(self, calendar, ny) -> None:
        session = calendar.session_for(date(2023, 11, 24))
        assert session == TradingSession(open=ny(2023, 11, 24, 9, 30), close=ny(2023, 11, 24, 13, 0))


class TestLatestTradingSession:
    """Test suite for latest session resolution."""

    def test_wednesday_during_session(self, calendar, ny) -> None:
        """Mid-session on a regular Wednesday resolves to that same day."""
        session = calendar.latest_trading_session(ny(2023, 3, 15, 10, 0))
        assert session.open == ny(2023, 3, 15, 9, 30)
        assert session.close == ny(2023, 3, 15, 16, 0)

    def test_after_close_resolves_to_today(self, calendar, ny) -> None:
        session = calendar.latest_trading_session(ny(2023, 3, 15, 20, 0))
        assert session.date == date(2023, 3, 15)

    def test_saturday_resolves_to_friday(self, calendar, ny) -> None:
        session = calendar.latest_trading_session(ny(2023, 3, 18, 12, 0))
        assert session.open == ny(2023, 3, 17, 9, 30)

    def test_saturday_after_holiday_friday_resolves_to_thursday(self, calendar, ny) -> None:
        """Good Friday 2023 was a holiday."""
        session = calendar.latest_trading_session(ny(2023, 4, 8, 12, 0))
        assert session.open == ny(2023, 4, 6, 9, 30)

    def test_pre_market_monday_resolves_to_previous_friday(self, calendar, ny) -> None:
        """Pre-market never resolves to today's not-yet-open session."""
        session = calendar.latest_trading_session(ny(2023, 3, 20, 8, 0))
        assert session.open == ny(2023, 3, 17, 9, 30)
        assert session.close == ny(2023, 3, 17, 16, 0)

    def test_exactly_at_open_resolves_to_today(self, calendar, ny) -> None:
        session = calendar.latest_trading_session(ny(2023, 3, 20, 9, 30))
        assert session.date == date(2023, 3, 20)

    def test_holiday_morning_steps_back_to_early_close_day(self, calendar, ny) -> None:
        """July 4th 2023 steps back to the July 3rd half day."""
        session = calendar.latest_trading_session(ny(2023, 7, 4, 8, 0))
        assert session.open == ny(2023, 7, 3, 9, 30)
        assert session.close == ny(2023, 7, 3, 13, 0)

    def test_accepts_utc_instants(self, calendar, ny) -> None:
        session = calendar.latest_trading_session(datetime(2023, 3, 15, 14, 0, tzinfo=timezone.utc))
        assert session.open == ny(2023, 3, 15, 9, 30)

    def test_new_year_steps_back_across_year_boundary(self, calendar, ny) -> None:
        session = calendar.latest_trading_session(ny(2024, 1, 1, 12, 0))
        assert session.date == date(2023, 12, 29)


class TestMarketOpen:
    """Test suite for open/closed status."""

    def test_open_on_regular_wednesday(self, calendar, ny) -> None:
        assert calendar.is_market_open(ny(2023, 3, 15, 10, 0)) is True

    def test_closed_on_saturday(self, calendar, ny) -> None:
        assert calendar.is_market_open(ny(2023, 3, 18, 12, 0)) is False

    def test_closed_after_early_close(self, calendar, ny) -> None:
        """Closed at 13:30 on an early-close day, before the regular 16:00 close."""
        assert calendar.is_market_open(ny(2021, 11, 26, 13, 30)) is False
        assert calendar.is_market_open(ny(2021, 11, 26, 12, 59)) is True

    def test_closed_on_thanksgiving(self, calendar, ny) -> None:
        assert calendar.is_market_open(ny(2021, 11, 25, 13, 30)) is False

    def test_open_boundary_inclusive_close_exclusive(self, calendar, ny) -> None:
        assert calendar.is_market_open(ny(2023, 3, 15, 9, 30)) is True
        assert calendar.is_market_open(ny(2023, 3, 15, 15, 59, 59)) is True
        assert calendar.is_market_open(ny(2023, 3, 15, 16, 0)) is False

    def test_closed_pre_market(self, calendar, ny) -> None:
        assert calendar.is_market_open(ny(2023, 3, 20, 8, 0)) is False


class TestNextTradingSession:
    """Test suite for next session resolution."""

    def test_pre_market_returns_today(self, calendar, ny) -> None:
        session = calendar.next_trading_session(ny(2023, 3, 20, 8, 0))
        assert session.open == ny(2023, 3, 20, 9, 30)

    def test_during_session_returns_tomorrow(self, calendar, ny) -> None:
        session = calendar.next_trading_session(ny(2023, 3, 15, 10, 0))
        assert session.open == ny(2023, 3, 16, 9, 30)

    def test_friday_evening_returns_monday(self, calendar, ny) -> None:
        session = calendar.next_trading_session(ny(2023, 3, 17, 18, 0))
        assert session.open == ny(2023, 3, 20, 9, 30)

    def test_skips_holiday(self, calendar, ny) -> None:
        """Thursday before Good Friday rolls to Monday."""
        session = calendar.next_trading_session(ny(2023, 4, 6, 17, 0))
        assert session.open == ny(2023, 4, 10, 9, 30)

    def test_holiday_pre_market_skips_today(self, calendar, ny) -> None:
        session = calendar.next_trading_session(ny(2023, 7, 4, 8, 0))
        assert session.open == ny(2023, 7, 5, 9, 30)

    def test_next_session_uses_early_close(self, calendar, ny) -> None:
        session = calendar.next_trading_session(ny(2021, 11, 25, 12, 0))
        assert session.close == ny(2021, 11, 26, 13, 0)


class TestCountdowns:
    """Test suite for time until open/close."""

    def test_time_until_open_is_zero_while_open(self, calendar, ny) -> None:
        assert calendar.time_until_open(ny(2023, 3, 15, 10, 0)) == timedelta(0)

    def test_time_until_close_while_open(self, calendar, ny) -> None:
        assert calendar.time_until_close(ny(2023, 3, 15, 15, 0)) == timedelta(hours=1)

    def test_time_until_close_on_early_close_day(self, calendar, ny) -> None:
        assert calendar.time_until_close(ny(2021, 11, 26, 12, 59)) == timedelta(minutes=1)

    def test_time_until_close_is_zero_while_closed(self, calendar, ny) -> None:
        assert calendar.time_until_close(ny(2023, 3, 18, 12, 0)) == timedelta(0)
        assert calendar.time_until_close(ny(2021, 11, 26, 13, 30)) == timedelta(0)

    def test_time_until_open_pre_market(self, calendar, ny) -> None:
        assert calendar.time_until_open(ny(2023, 3, 20, 8, 0)) == timedelta(hours=1, minutes=30)

    def test_time_until_open_over_weekend(self, calendar, ny) -> None:
        assert calendar.time_until_open(ny(2023, 3, 17, 16, 30)) == timedelta(hours=65)

    def test_time_until_open_across_spring_forward(self, calendar, ny) -> None:
        """The clock loses an hour on Sunday March 12th 2023."""
        assert calendar.time_until_open(ny(2023, 3, 10, 17, 0)) == timedelta(hours=63, minutes=30)

    def test_time_until_open_across_fall_back(self, calendar, ny) -> None:
        """The clock gains an hour on Sunday November 5th 2023."""
        assert calendar.time_until_open(ny(2023, 11, 3, 17, 0)) == timedelta(hours=65, minutes=30)


class TestFirstBoundaryForSpan:
    """Test suite for lookback span boundaries."""

    def test_day_span_is_latest_open(self, calendar, ny) -> None:
        now = ny(2023, 3, 18, 12, 0)
        assert calendar.first_boundary_for_span(LookbackSpan.DAY, now) == ny(2023, 3, 17, 9, 30)

    def test_week_span_is_seven_days_back(self, calendar, ny) -> None:
        now = ny(2023, 5, 10, 10, 0)
        boundary = calendar.first_boundary_for_span(LookbackSpan.WEEK, now)
        assert boundary == ny(2023, 5, 3, 9, 30)
        assert calendar.latest_trading_session(now).open - boundary == timedelta(days=7)

    def test_week_span_rolls_forward_over_holiday(self, calendar, ny) -> None:
        """Seven days before Tuesday July 11th is Independence Day."""
        boundary = calendar.first_boundary_for_span(LookbackSpan.WEEK, ny(2023, 7, 11, 10, 0))
        assert boundary == ny(2023, 7, 5, 9, 30)

    def test_month_span_clamps_to_month_end(self, calendar, ny) -> None:
        """One month before March 31st is February 28th."""
        boundary = calendar.first_boundary_for_span(LookbackSpan.MONTH, ny(2023, 3, 31, 10, 0))
        assert boundary == ny(2023, 2, 28, 9, 30)

    def test_month_span_rolls_forward_over_weekend(self, calendar, ny) -> None:
        """April 16th 2023 is a Sunday."""
        boundary = calendar.first_boundary_for_span(LookbackSpan.MONTH, ny(2023, 5, 16, 10, 0))
        assert boundary == ny(2023, 4, 17, 9, 30)

    def test_span_uses_previous_session_pre_market(self, calendar, ny) -> None:
        boundary = calendar.first_boundary_for_span(LookbackSpan.WEEK, ny(2023, 5, 15, 8, 0))
        assert boundary == ny(2023, 5, 5, 9, 30)

    def test_year_span_from_leap_day(self, calendar, ny) -> None:
        boundary = calendar.first_boundary_for_span(LookbackSpan.YEAR, ny(2024, 2, 29, 10, 0))
        assert boundary == ny(2023, 2, 28, 9, 30)

    def test_ten_year_span_outside_table_coverage(self, calendar, ny) -> None:
        """Dates before the table window are treated as regular trading days."""
        boundary = calendar.first_boundary_for_span(LookbackSpan.TEN_YEARS, ny(2023, 5, 16, 10, 0))
        assert boundary == ny(2013, 5, 16, 9, 30)
        assert calendar.covers(boundary) is False

    def test_accepts_span_value_strings(self, calendar, ny) -> None:
        now = ny(2023, 5, 10, 10, 0)
        assert calendar.first_boundary_for_span("1W", now) == calendar.first_boundary_for_span(LookbackSpan.WEEK, now)


class TestRollForward:
    """Test suite for the forward search used by span boundaries."""

    def test_returns_valid_day_unchanged(self, calendar) -> None:
        assert calendar.roll_forward(date(2023, 5, 3), limit=date(2023, 5, 10)) == date(2023, 5, 3)

    def test_skips_holiday_and_weekend(self, calendar) -> None:
        assert calendar.roll_forward(date(2023, 4, 7), limit=date(2023, 4, 20)) == date(2023, 4, 10)

    def test_stops_at_limit_even_when_limit_is_not_a_trading_day(self, calendar) -> None:
        """Reaching the limit ends the search even on a holiday or weekend."""
        assert calendar.roll_forward(date(2023, 4, 7), limit=date(2023, 4, 8)) == date(2023, 4, 8)
        assert calendar.roll_forward(date(2023, 4, 8), limit=date(2023, 4, 8)) == date(2023, 4, 8)
        assert calendar.is_trading_day(date(2023, 4, 8)) is False


class TestHistoryWindow:
    """Test suite for upstream request windows."""

    def test_window_while_market_open_ends_now(self, calendar, ny) -> None:
        now = ny(2023, 5, 10, 10, 0)
        window = calendar.history_window(LookbackSpan.WEEK, now)
        assert window.span is LookbackSpan.WEEK
        assert window.resolution == "15"
        assert window.start == ny(2023, 5, 3, 9, 30)
        assert window.end == now

    def test_window_while_closed_ends_at_latest_close(self, calendar, ny) -> None:
        window = calendar.history_window(LookbackSpan.DAY, ny(2023, 5, 13, 12, 0))
        assert window.start == ny(2023, 5, 12, 9, 30)
        assert window.end == ny(2023, 5, 12, 16, 0)
        assert window.as_query_params() == {
            "resolution": "5",
            "from": str(int(ny(2023, 5, 12, 9, 30).timestamp())),
            "to": str(int(ny(2023, 5, 12, 16, 0).timestamp())),
        }

    def test_intraday_window_spans_one_session(self, calendar, ny) -> None:
        window = calendar.history_window(LookbackSpan.DAY, ny(2023, 5, 13, 12, 0))
        assert window.to_timestamp - window.from_timestamp == 6 * 3600 + 30 * 60

    def test_day_window_at_the_open_is_empty(self, calendar, ny) -> None:
        now = ny(2023, 5, 10, 9, 30)
        window = calendar.history_window(LookbackSpan.DAY, now)
        assert window.start == window.end == now
        assert window.is_empty is True
        assert calendar.history_window(LookbackSpan.WEEK, now).is_empty is False

    def test_window_with_width_is_not_empty(self, calendar, ny) -> None:
        assert calendar.history_window(LookbackSpan.DAY, ny(2023, 5, 10, 9, 31)).is_empty is False


class TestMarketStatus:
    """Test suite for the status snapshot."""

    def test_status_while_open(self, calendar, ny) -> None:
        status = calendar.market_status(ny(2023, 3, 15, 15, 0))
        assert status.is_open is True
        assert status.time_until_open == timedelta(0)
        assert status.time_until_close == timedelta(hours=1)
        assert status.countdown == "01:00:00"
        assert status.next_session.date == date(2023, 3, 16)

    def test_status_on_weekend(self, calendar, ny) -> None:
        status = calendar.market_status(ny(2023, 3, 18, 12, 0))
        assert status.is_open is False
        assert status.latest_session.date == date(2023, 3, 17)
        assert status.time_until_open == timedelta(days=1, hours=21, minutes=30)
        assert status.countdown == "1 Days, 21:30:00"

    def test_status_matches_individual_queries(self, calendar, ny) -> None:
        now = ny(2021, 11, 26, 12, 30)
        status = calendar.market_status(now)
        assert status.is_open == calendar.is_market_open(now)
        assert status.time_until_open == calendar.time_until_open(now)
        assert status.time_until_close == calendar.time_until_close(now)
        assert status.latest_session == calendar.latest_trading_session(now)
        assert status.next_session == calendar.next_trading_session(now)


class TestClockInjection:
    """Test suite for queries evaluated against the injected clock."""

    def test_queries_default_to_clock(self, ny) -> None:
        calendar = TradingCalendar(clock=FixedClock(ny(2023, 3, 18, 12, 0)))
        assert calendar.is_market_open() is False
        assert calendar.latest_trading_session().date == date(2023, 3, 17)
        assert calendar.next_trading_session().date == date(2023, 3, 20)

    def test_now_is_exchange_local(self, new_york) -> None:
        clock = FixedClock(datetime(2023, 3, 15, 14, 0, tzinfo=timezone.utc))
        calendar = TradingCalendar(clock=clock)
        now = calendar.now()
        assert now.tzinfo == new_york
        assert (now.hour, now.minute) == (10, 0)
        assert calendar.is_market_open() is True

    def test_explicit_now_overrides_clock(self, ny) -> None:
        calendar = TradingCalendar(clock=FixedClock(ny(2023, 3, 18, 12, 0)))
        assert calendar.is_market_open(ny(2023, 3, 15, 10, 0)) is True


class TestConfiguredTables:
    """Test suite for holiday and early-close entries added through configuration."""

    def test_extra_holiday_closes_market(self, ny) -> None:
        config = CalendarConfig(
            session=SessionParams(),
            holidays=HolidayParams(extra_holidays=("2023-05-10",)),
        )
        calendar = TradingCalendar(config=config)
        assert calendar.is_holiday(date(2023, 5, 10)) is True
        assert calendar.is_market_open(ny(2023, 5, 10, 10, 0)) is False
        assert calendar.latest_trading_session(ny(2023, 5, 10, 10, 0)).date == date(2023, 5, 9)

    def test_extra_early_close_with_custom_time(self, ny) -> None:
        config = CalendarConfig(
            session=SessionParams(early_close_time="12:30"),
            holidays=HolidayParams(extra_early_closes=("2023-05-11",)),
        )
        calendar = TradingCalendar(config=config)
        assert calendar.close_time(date(2023, 5, 11)) == ny(2023, 5, 11, 12, 30)
        assert calendar.close_time(date(2021, 11, 26)) == ny(2021, 11, 26, 12, 30)
        assert calendar.is_market_open(ny(2023, 5, 11, 12, 45)) is False

    def test_built_in_tables_are_kept(self) -> None:
        config = CalendarConfig(
            session=SessionParams(),
            holidays=HolidayParams(extra_holidays=("2030-01-02",)),
        )
        calendar = TradingCalendar(config=config)
        assert calendar.is_holiday(date(2023, 7, 4)) is True
        assert calendar.is_holiday(date(2030, 1, 2)) is True
