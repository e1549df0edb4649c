"""
Centralized logging configuration for the trading calendar.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the package should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from datetime import date, datetime
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

from ..utils.time import format_exchange_time


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer(default=_json_default))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _json_default(value: Any) -> Any:
    """Serialize dates and instants bound into log events."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_calendar_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the calendar subsystem.

    The subsystem is passed as an initial value of the lazy proxy so that
    module-level loggers pick up a later ``configure_logging`` call.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for session resolution events
    """
    return structlog.get_logger(name, subsystem="trading_calendar")


def log_session_resolution(
    logger: FilteringBoundLogger,
    query: str,
    reference: datetime,
    session_date: date,
    steps: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a resolved trading session with standardized format.

    Args:
        logger: Structlog logger instance
        query: Name of the query that resolved the session
        reference: Reference instant the query was evaluated at
        session_date: Exchange-local date of the resolved session
        steps: Calendar days skipped over weekends and holidays
        context: Additional context data
    """
    bound_logger = logger.bind(
        query=query,
        reference=format_exchange_time(reference),
        session_date=session_date.isoformat(),
        steps=steps,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Trading session resolved")
