#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from trading_calendar.config.loader import ConfigLoader
from trading_calendar.config.validation import ConfigValidator, ValidationError
from trading_calendar.engine import TradingCalendar
from trading_calendar.errors import CalendarConfigurationError


def validate_calendar_config(config_dir: Optional[str] = None) -> List[ValidationError]:
    """Validate the merged calendar configuration in ``config_dir``."""
    loader = ConfigLoader.create(config_dir)
    config = loader.merge_config()
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = sys.argv[1] if len(sys.argv) > 1 else None
    print("🔍 Validating trading calendar configuration...")

    try:
        errors = validate_calendar_config(config_dir)
    except CalendarConfigurationError as e:
        print(f"❌ Could not load configuration: {e}")
        return 1

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        return 1

    print("✅ Configuration is valid")

    # Build the engine to confirm the timezone and tables resolve
    try:
        calendar = TradingCalendar.from_config_dir(config_dir)
    except CalendarConfigurationError as e:
        print(f"❌ Calendar failed to initialize: {e}")
        return 1

    print(f"\n📅 Timezone: {calendar.config.session.timezone}")
    print(f"📅 Holidays: {len(calendar.holidays)}, early closes: {len(calendar.early_closes)}")
    print(f"📅 Market open now: {calendar.is_market_open()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
