"""
Error classification for the trading calendar engine.

Queries over well-formed instants never raise; these exceptions cover the
fatal cases detected at construction or on malformed input.
"""

from .system_failures import (
    SystemFailureError,
    CalendarConfigurationError,
    InstantConversionError,
)

__all__ = [
    "SystemFailureError",
    "CalendarConfigurationError",
    "InstantConversionError",
]
