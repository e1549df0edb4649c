"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from datetime import date, datetime, time
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..utils.time import parse_clock_time
from .defaults import HolidayParams, SessionParams

_SESSION_FIELDS = {f.name for f in fields(SessionParams)}
_HOLIDAY_FIELDS = {f.name for f in fields(HolidayParams)}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_session_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate session parameters."""
        errors = []

        for key in params:
            if key not in _SESSION_FIELDS:
                errors.append(ValidationError(
                    field=f"session.{key}",
                    message="Unknown session parameter",
                    value=params[key]
                ))

        # Validate timezone
        if "timezone" in params:
            value = params["timezone"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="timezone",
                    message="Must be a non-empty IANA timezone name",
                    value=value
                ))
            else:
                try:
                    ZoneInfo(value)
                except (ZoneInfoNotFoundError, ValueError):
                    errors.append(ValidationError(
                        field="timezone",
                        message="Unknown timezone",
                        value=value
                    ))

        # Validate clock times
        parsed: dict[str, time] = {}
        for name in ("open_time", "close_time", "early_close_time"):
            if name not in params:
                continue
            value = params[name]
            if not isinstance(value, str):
                # Unquoted 09:30 is read by YAML as a base-60 integer
                errors.append(ValidationError(
                    field=name,
                    message="Must be a quoted HH:MM string",
                    value=value
                ))
                continue
            try:
                parsed[name] = parse_clock_time(value)
            except ValueError:
                errors.append(ValidationError(
                    field=name,
                    message="Must be a valid HH:MM clock time",
                    value=value
                ))

        # Validate session ordering
        open_t = parsed.get("open_time")
        close_t = parsed.get("close_time")
        early_t = parsed.get("early_close_time")
        if open_t is not None and close_t is not None and open_t >= close_t:
            errors.append(ValidationError(
                field="close_time",
                message="Must be later than open_time",
                value=params["close_time"]
            ))
        if open_t is not None and early_t is not None and early_t <= open_t:
            errors.append(ValidationError(
                field="early_close_time",
                message="Must be later than open_time",
                value=params["early_close_time"]
            ))
        if close_t is not None and early_t is not None and early_t > close_t:
            errors.append(ValidationError(
                field="early_close_time",
                message="Must not be later than close_time",
                value=params["early_close_time"]
            ))

        return errors

    @staticmethod
    def validate_holiday_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate extra holiday and early-close entries."""
        errors = []

        for key in params:
            if key not in _HOLIDAY_FIELDS:
                errors.append(ValidationError(
                    field=f"holidays.{key}",
                    message="Unknown holiday parameter",
                    value=params[key]
                ))

        for name in ("extra_holidays", "extra_early_closes"):
            if name not in params or params[name] is None:
                continue
            entries = params[name]
            if not isinstance(entries, (list, tuple)):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a list of YYYY-MM-DD dates",
                    value=entries
                ))
                continue
            for entry in entries:
                # PyYAML turns unquoted timestamps into datetimes, ISO dates into dates
                if isinstance(entry, datetime):
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a date without a time of day",
                        value=entry
                    ))
                    continue
                if isinstance(entry, date):
                    continue
                try:
                    date.fromisoformat(str(entry))
                except ValueError:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a valid YYYY-MM-DD date",
                        value=entry
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "session" in config:
            if isinstance(config["session"], dict):
                errors.extend(ConfigValidator.validate_session_params(config["session"]))
            else:
                errors.append(ValidationError(field="session", message="Must be a mapping", value=config["session"]))

        if "holidays" in config:
            if isinstance(config["holidays"], dict):
                errors.extend(ConfigValidator.validate_holiday_params(config["holidays"]))
            else:
                errors.append(ValidationError(field="holidays", message="Must be a mapping", value=config["holidays"]))

        for key in config:
            if key not in ("session", "holidays"):
                errors.append(ValidationError(field=key, message="Unknown configuration section", value=config[key]))

        return errors
