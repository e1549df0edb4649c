"""
Logging configuration and utilities for the trading calendar.
"""
from .config import configure_logging, get_calendar_logger, get_logger

__all__ = ["configure_logging", "get_calendar_logger", "get_logger"]
