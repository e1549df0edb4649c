"""
Trading calendar engine.

Answers session-boundary and open/closed questions for the exchange from a
reference instant and the static holiday tables. All queries are pure
functions of their input; the wall clock is consulted only through the
injected Clock when a query is called without an explicit instant.
"""

from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog

from .config.defaults import CalendarConfig, get_default_config
from .config.loader import ConfigLoader
from .data.holidays import COVERAGE_END, COVERAGE_START, NYSE_EARLY_CLOSES, NYSE_HOLIDAYS, is_covered
from .errors import CalendarConfigurationError, InstantConversionError
from .logging.config import get_calendar_logger, log_session_resolution
from .models.session import CalendarDate, HistoryWindow, LookbackSpan, MarketStatus, TradingSession
from .utils.time import Clock, SystemClock, elapsed, is_aware, parse_clock_time

logger = structlog.get_logger(__name__)
calendar_logger = get_calendar_logger(__name__)

DayLike = Union[date, CalendarDate]

ONE_DAY = timedelta(days=1)
ZERO = timedelta(0)


class TradingCalendar:
    """
    Session boundary engine for a single exchange.

    Instants are timezone-aware datetimes; results are expressed in the
    exchange timezone. Every query accepts an optional ``now`` and falls back
    to the injected clock when it is omitted.
    """

    def __init__(self, config: Optional[CalendarConfig] = None, clock: Optional[Clock] = None) -> None:
        """
        Initialize the calendar.

        Args:
            config: Calendar configuration, defaults to NYSE hours in America/New_York
            clock: Time source used when a query is called without ``now``

        Raises:
            CalendarConfigurationError: If the timezone cannot be resolved or a
                configured time or date is malformed
        """
        self.config = config or get_default_config()
        self.clock: Clock = clock or SystemClock()
        self.logger = logger

        session = self.config.session
        try:
            self.timezone = ZoneInfo(session.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise CalendarConfigurationError(
                f"Unresolvable exchange timezone {session.timezone!r}",
                field="timezone",
                value=session.timezone,
            ) from e

        try:
            self.open_time = parse_clock_time(session.open_time)
            self.regular_close_time = parse_clock_time(session.close_time)
            self.early_close_time = parse_clock_time(session.early_close_time)
            extra_holidays = {CalendarDate.parse(str(d)) for d in self.config.holidays.extra_holidays}
            extra_early_closes = {CalendarDate.parse(str(d)) for d in self.config.holidays.extra_early_closes}
        except ValueError as e:
            raise CalendarConfigurationError(f"Invalid calendar configuration: {e}") from e

        if not self.open_time < self.early_close_time <= self.regular_close_time:
            raise CalendarConfigurationError(
                "Session times must satisfy open < early close <= close",
                context={
                    "open_time": session.open_time,
                    "early_close_time": session.early_close_time,
                    "close_time": session.close_time,
                },
            )

        self.holidays: frozenset[CalendarDate] = NYSE_HOLIDAYS | extra_holidays
        self.early_closes: frozenset[CalendarDate] = NYSE_EARLY_CLOSES | extra_early_closes

        self.logger.info(
            "Trading calendar initialized",
            timezone=session.timezone,
            holidays=len(self.holidays),
            early_closes=len(self.early_closes),
            coverage_start=COVERAGE_START.isoformat(),
            coverage_end=COVERAGE_END.isoformat(),
        )

    @classmethod
    def from_config_dir(
        cls,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        clock: Optional[Clock] = None,
    ) -> "TradingCalendar":
        """Build a calendar from ``calendar.yaml`` in ``config_dir`` plus overrides."""
        config = ConfigLoader.create(config_dir).load(overrides)
        return cls(config=config, clock=clock)

    # Instant and date conversion

    def now(self) -> datetime:
        """Current instant from the injected clock, in the exchange timezone."""
        return self._localize(self.clock())

    def exchange_date(self, instant: datetime) -> date:
        """Exchange-local calendar date of ``instant``."""
        return self._localize(instant).date()

    def _localize(self, instant: datetime) -> datetime:
        if not isinstance(instant, datetime) or not is_aware(instant):
            raise InstantConversionError(
                f"Cannot place {instant!r} on the exchange calendar; a timezone-aware datetime is required",
                instant=instant if isinstance(instant, datetime) else None,
            )
        return instant.astimezone(self.timezone)

    def _reference(self, now: Optional[datetime]) -> datetime:
        return self.now() if now is None else self._localize(now)

    def _as_date(self, day: Union[DayLike, datetime]) -> date:
        if isinstance(day, datetime):
            return self.exchange_date(day)
        if isinstance(day, CalendarDate):
            return day.to_date()
        return day

    # Calendar facts

    def standard_open_time(self, day: Union[DayLike, datetime]) -> datetime:
        """Regular open (09:30 exchange-local) on ``day``; holidays are not checked."""
        return datetime.combine(self._as_date(day), self.open_time, tzinfo=self.timezone)

    def close_time(self, day: Union[DayLike, datetime]) -> datetime:
        """Close on ``day``: 13:00 on early-close days, otherwise 16:00."""
        local_day = self._as_date(day)
        close: time = self.early_close_time if self.is_early_close(local_day) else self.regular_close_time
        return datetime.combine(local_day, close, tzinfo=self.timezone)

    def is_holiday(self, day: Union[DayLike, datetime]) -> bool:
        return CalendarDate.from_date(self._as_date(day)) in self.holidays

    def is_early_close(self, day: Union[DayLike, datetime]) -> bool:
        return CalendarDate.from_date(self._as_date(day)) in self.early_closes

    def is_weekend(self, day: Union[DayLike, datetime]) -> bool:
        return self._as_date(day).weekday() >= 5  # Saturday=5, Sunday=6

    def is_trading_day(self, day: Union[DayLike, datetime]) -> bool:
        """True if ``day`` is neither a weekend day nor a holiday."""
        local_day = self._as_date(day)
        if not is_covered(local_day):
            self.logger.debug(
                "Date outside holiday table coverage",
                day=local_day.isoformat(),
                out_of_coverage=True,
            )
        return not (self.is_weekend(local_day) or self.is_holiday(local_day))

    def covers(self, day: Union[DayLike, datetime]) -> bool:
        """True if the holiday tables were compiled for ``day``."""
        return is_covered(self._as_date(day))

    def is_before_open(self, instant: datetime) -> bool:
        """True if ``instant`` precedes the regular open of its own calendar date."""
        local = self._localize(instant)
        return local < self.standard_open_time(local.date())

    def session_for(self, day: Union[DayLike, datetime]) -> TradingSession:
        """Session boundaries for ``day``; weekends and holidays are not checked."""
        local_day = self._as_date(day)
        return TradingSession(open=self.standard_open_time(local_day), close=self.close_time(local_day))

    # Session queries

    def latest_trading_session(self, now: Optional[datetime] = None) -> TradingSession:
        """
        Most recent session that has opened at or before ``now``.

        The search starts from today once today's open has passed and from
        yesterday otherwise, so a pre-market instant resolves to the previous
        session, never to today's session that has not opened yet.
        """
        reference = self._reference(now)
        day = reference.date()
        if self.is_before_open(reference):
            day -= ONE_DAY

        steps = 0
        while not self.is_trading_day(day):
            day -= ONE_DAY
            steps += 1

        log_session_resolution(calendar_logger, "latest_trading_session", reference, day, steps)
        return self.session_for(day)

    def next_trading_session(self, now: Optional[datetime] = None) -> TradingSession:
        """
        Next session that has not opened yet as of ``now``.

        Today's session if today is a trading day and its open is still
        ahead, otherwise the first trading day after today.
        """
        reference = self._reference(now)
        today = reference.date()
        if self.is_trading_day(today) and self.is_before_open(reference):
            log_session_resolution(calendar_logger, "next_trading_session", reference, today, 0)
            return self.session_for(today)

        day = today + ONE_DAY
        steps = 0
        while not self.is_trading_day(day):
            day += ONE_DAY
            steps += 1

        log_session_resolution(calendar_logger, "next_trading_session", reference, day, steps)
        return self.session_for(day)

    def is_market_open(self, now: Optional[datetime] = None) -> bool:
        reference = self._reference(now)
        return self.latest_trading_session(reference).contains(reference)

    def time_until_open(self, now: Optional[datetime] = None) -> timedelta:
        """Zero while the market is open, otherwise the time until the next open."""
        reference = self._reference(now)
        if self.is_market_open(reference):
            return ZERO
        return elapsed(reference, self.next_trading_session(reference).open)

    def time_until_close(self, now: Optional[datetime] = None) -> timedelta:
        """Time until the current session closes, zero while the market is closed."""
        reference = self._reference(now)
        session = self.latest_trading_session(reference)
        if not session.contains(reference):
            return ZERO
        return elapsed(reference, session.close)

    # Lookback windows

    def roll_forward(self, day: date, limit: date) -> date:
        """
        First trading day on or after ``day``, searching no further than ``limit``.

        When ``limit`` is reached the search stops and returns it even if it is
        itself a weekend day or holiday.
        """
        while day < limit and not self.is_trading_day(day):
            day += ONE_DAY
        return day

    def first_boundary_for_span(self, span: LookbackSpan, now: Optional[datetime] = None) -> datetime:
        """
        Open instant of the first session inside a lookback window.

        The span's calendar offset is applied to the latest session's date
        (month and year steps clamp to the end of shorter months), then the
        result is rolled forward over weekends and holidays, stopping at today.

        Args:
            span: Lookback window to compute the boundary for
            now: Reference instant, defaults to the clock

        Returns:
            Exchange-local open instant of the boundary date
        """
        reference = self._reference(now)
        latest = self.latest_trading_session(reference)
        span = LookbackSpan(span)

        if span is LookbackSpan.DAY:
            return latest.open

        unverified = latest.date + span.offset
        boundary = self.roll_forward(unverified, limit=reference.date())

        calendar_logger.debug(
            "Span boundary computed",
            span=span.value,
            latest_session_date=latest.date.isoformat(),
            unverified_date=unverified.isoformat(),
            boundary_date=boundary.isoformat(),
            covered=self.covers(boundary),
        )
        return self.standard_open_time(boundary)

    def history_window(self, span: LookbackSpan, now: Optional[datetime] = None) -> HistoryWindow:
        """
        Upstream candle request window for ``span``.

        Starts at the span boundary and ends at the latest session's close,
        or at ``now`` while that session is still trading. The end never lies
        after ``now``, so exactly at the open a ``DAY`` window is zero-width
        (``is_empty``) and callers should skip the upstream request.
        """
        reference = self._reference(now)
        span = LookbackSpan(span)
        latest = self.latest_trading_session(reference)
        end = reference if latest.contains(reference) else latest.close

        return HistoryWindow(
            span=span,
            resolution=span.resolution,
            start=self.first_boundary_for_span(span, reference),
            end=end,
        )

    def market_status(self, now: Optional[datetime] = None) -> MarketStatus:
        """Open/closed state and countdowns evaluated at a single instant."""
        reference = self._reference(now)
        latest = self.latest_trading_session(reference)
        upcoming = self.next_trading_session(reference)
        is_open = latest.contains(reference)

        return MarketStatus(
            as_of=reference,
            is_open=is_open,
            latest_session=latest,
            next_session=upcoming,
            time_until_open=ZERO if is_open else elapsed(reference, upcoming.open),
            time_until_close=elapsed(reference, latest.close) if is_open else ZERO,
        )
