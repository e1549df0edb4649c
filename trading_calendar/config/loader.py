"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Union

import structlog
import yaml

from ..errors import CalendarConfigurationError
from .defaults import CalendarConfig, HolidayParams, SessionParams, get_default_config
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)

CALENDAR_FILE = "calendar.yaml"


def _iso_date(value: Any) -> str:
    """Render a configured holiday entry as YYYY-MM-DD."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: CalendarConfig

    @classmethod
    def create(cls, config_dir: Optional[Union[str, Path]] = None) -> "ConfigLoader":
        """
        Create a ConfigLoader instance.

        Without ``config_dir`` the repository-root ``config/`` directory of a
        source checkout is used. An installed package does not ship that
        directory, so pass ``config_dir`` explicitly there.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_calendar_file(self) -> dict[str, Any]:
        """
        Load overrides from ``calendar.yaml`` in the config directory.

        Returns:
            Parsed mapping, or an empty dict when the file does not exist

        Raises:
            CalendarConfigurationError: If the file is not valid YAML or not a mapping
        """
        calendar_file = self.config_dir / CALENDAR_FILE

        if not calendar_file.exists():
            logger.warning("Calendar file not found, using defaults", path=str(calendar_file))
            return {}

        try:
            with open(calendar_file) as f:
                file_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CalendarConfigurationError(
                f"Failed to parse {calendar_file}: {e}",
                context={"path": str(calendar_file)},
            ) from e

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise CalendarConfigurationError(
                f"{calendar_file} must contain a mapping, got {type(file_config).__name__}",
                context={"path": str(calendar_file)},
            )

        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call-site overrides (highest priority)
        2. ``calendar.yaml`` in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_calendar_file())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> CalendarConfig:
        """
        Merge, validate and build the calendar configuration.

        Raises:
            CalendarConfigurationError: If any merged value fails validation
        """
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value!r})" for err in errors]
            logger.error("Calendar configuration validation failed", errors=error_msgs)
            raise CalendarConfigurationError(
                "Invalid calendar configuration: " + "; ".join(error_msgs),
                field=errors[0].field,
                value=errors[0].value,
                errors=errors,
            )

        return self.build_config(merged)

    @staticmethod
    def build_config(config: dict[str, Any]) -> CalendarConfig:
        """Build a CalendarConfig from an already validated mapping."""
        session = config.get("session", {})
        holidays = config.get("holidays", {})

        return CalendarConfig(
            session=SessionParams(**session),
            holidays=HolidayParams(
                extra_holidays=tuple(_iso_date(d) for d in holidays.get("extra_holidays") or ()),
                extra_early_closes=tuple(_iso_date(d) for d in holidays.get("extra_early_closes") or ()),
            ),
        )

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
