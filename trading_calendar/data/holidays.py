"""
Static NYSE holiday and early-close tables.

Source: NYSE holidays and trading hours calendar
(https://www.nyse.com/markets/hours-calendars). The tables are literal data,
not computed rules. Dates outside COVERAGE_START..COVERAGE_END are treated
as regular trading days with standard hours.
"""

from datetime import date

from ..models.session import CalendarDate

COVERAGE_START = date(2021, 1, 1)
COVERAGE_END = date(2026, 12, 31)

# Full-day market closures
NYSE_HOLIDAYS: frozenset[CalendarDate] = frozenset({
    # 2021
    CalendarDate(2021, 1, 1),    # New Year's Day
    CalendarDate(2021, 1, 18),   # Martin Luther King Jr. Day
    CalendarDate(2021, 2, 15),   # Washington's Birthday
    CalendarDate(2021, 4, 2),    # Good Friday
    CalendarDate(2021, 5, 31),   # Memorial Day
    CalendarDate(2021, 7, 5),    # Independence Day (observed)
    CalendarDate(2021, 9, 6),    # Labor Day
    CalendarDate(2021, 11, 25),  # Thanksgiving Day
    CalendarDate(2021, 12, 24),  # Christmas Day (observed)
    # 2022
    CalendarDate(2022, 1, 17),
    CalendarDate(2022, 2, 21),
    CalendarDate(2022, 4, 15),
    CalendarDate(2022, 5, 30),
    CalendarDate(2022, 6, 20),   # Juneteenth (observed)
    CalendarDate(2022, 7, 4),
    CalendarDate(2022, 9, 5),
    CalendarDate(2022, 11, 24),
    CalendarDate(2022, 12, 26),  # Christmas Day (observed)
    # 2023
    CalendarDate(2023, 1, 2),    # New Year's Day (observed)
    CalendarDate(2023, 1, 16),
    CalendarDate(2023, 2, 20),
    CalendarDate(2023, 4, 7),
    CalendarDate(2023, 5, 29),
    CalendarDate(2023, 6, 19),
    CalendarDate(2023, 7, 4),
    CalendarDate(2023, 9, 4),
    CalendarDate(2023, 11, 23),
    CalendarDate(2023, 12, 25),
    # 2024
    CalendarDate(2024, 1, 1),
    CalendarDate(2024, 1, 15),
    CalendarDate(2024, 2, 19),
    CalendarDate(2024, 3, 29),
    CalendarDate(2024, 5, 27),
    CalendarDate(2024, 6, 19),
    CalendarDate(2024, 7, 4),
    CalendarDate(2024, 9, 2),
    CalendarDate(2024, 11, 28),
    CalendarDate(2024, 12, 25),
    # 2025
    CalendarDate(2025, 1, 1),
    CalendarDate(2025, 1, 9),    # National Day of Mourning
    CalendarDate(2025, 1, 20),
    CalendarDate(2025, 2, 17),
    CalendarDate(2025, 4, 18),
    CalendarDate(2025, 5, 26),
    CalendarDate(2025, 6, 19),
    CalendarDate(2025, 7, 4),
    CalendarDate(2025, 9, 1),
    CalendarDate(2025, 11, 27),
    CalendarDate(2025, 12, 25),
    # 2026
    CalendarDate(2026, 1, 1),
    CalendarDate(2026, 1, 19),
    CalendarDate(2026, 2, 16),
    CalendarDate(2026, 4, 3),
    CalendarDate(2026, 5, 25),
    CalendarDate(2026, 6, 19),
    CalendarDate(2026, 7, 3),    # Independence Day (observed)
    CalendarDate(2026, 9, 7),
    CalendarDate(2026, 11, 26),
    CalendarDate(2026, 12, 25),
})

# Sessions closing at 13:00 ET
NYSE_EARLY_CLOSES: frozenset[CalendarDate] = frozenset({
    CalendarDate(2021, 11, 26),  # Day after Thanksgiving
    CalendarDate(2022, 11, 25),
    CalendarDate(2023, 7, 3),    # Day before Independence Day
    CalendarDate(2023, 11, 24),
    CalendarDate(2024, 7, 3),
    CalendarDate(2024, 11, 29),
    CalendarDate(2024, 12, 24),  # Christmas Eve
    CalendarDate(2025, 7, 3),
    CalendarDate(2025, 11, 28),
    CalendarDate(2025, 12, 24),
    CalendarDate(2026, 11, 27),
    CalendarDate(2026, 12, 24),
})


def is_covered(day: date) -> bool:
    """True if ``day`` falls inside the window the tables were compiled for."""
    return COVERAGE_START <= day <= COVERAGE_END
