"""
System failure error classifications for unrecoverable errors.

The calendar engine is pure arithmetic, so the only failures are
configuration problems detected at construction and instants that cannot be
placed on the exchange-local calendar. Neither is retried.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable calendar failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class CalendarConfigurationError(SystemFailureError):
    """Invalid calendar configuration, such as an unresolvable timezone."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, errors: Optional[List[Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.errors = errors or []


class InstantConversionError(SystemFailureError):
    """Reference instant that cannot be converted to exchange-local time."""

    def __init__(self, message: str, instant: Optional[datetime] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.instant = instant
