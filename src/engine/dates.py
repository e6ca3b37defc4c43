"""Month arithmetic on (month_index, year) pairs.

Months are 0-based (0 = January). An absolute month is year * 12 + month_index.
"""

import calendar


def absolute_month(month_index: int, year: int) -> int:
    return year * 12 + month_index


def from_absolute(month: int) -> tuple[int, int]:
    """Split an absolute month into (month_index, year)."""
    return month % 12, month // 12


def add_months(month_index: int, year: int, delta_months: int) -> tuple[int, int]:
    return from_absolute(absolute_month(month_index, year) + delta_months)


def clamp_month_index(month_index: int) -> int:
    return min(11, max(0, int(month_index)))


def month_short_name(month_index: int) -> str:
    if not 0 <= month_index <= 11:
        return ""
    return calendar.month_abbr[month_index + 1]


def format_month_year(month_index: int, year: int) -> str:
    """e.g. "Jan 2024"."""
    return f"{month_short_name(month_index)} {year}"
