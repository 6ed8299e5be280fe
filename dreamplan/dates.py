"""Fiscal calendar utilities for dreamplan.

Pure functions for the April-start fiscal year used throughout the timeline.
"""

from datetime import date

from dreamplan.domain.models import FY_MONTHS, TIMELINE_YEARS, FiscalYear

_FISCAL_MONTH_INDEX = {month: index for index, month in enumerate(FY_MONTHS)}


def fiscal_year_of(year: int, month: int) -> FiscalYear:
    """Return the fiscal year containing a calendar month.

    Args:
        year: Calendar year.
        month: Calendar month (1-12).

    Returns:
        Fiscal year; January to March belong to the previous year's fiscal year.
    """
    if month <= 3:
        return FiscalYear(year - 1)
    return FiscalYear(year)


def current_fiscal_year(today: date | None = None) -> FiscalYear:
    """Return the fiscal year of a date (defaults to today)."""
    if today is None:
        today = date.today()
    return fiscal_year_of(today.year, today.month)


def fiscal_month_index(month: int) -> int:
    """Position of a calendar month in fiscal order.

    Args:
        month: Calendar month.

    Returns:
        0 for April through 11 for March, or -1 for anything outside 1-12.
    """
    return _FISCAL_MONTH_INDEX.get(month, -1)


def fiscal_year_label(fy: int) -> str:
    """Format a fiscal year as its month span (e.g., "2024/04 - 2025/03")."""
    return f"{fy}/04 - {fy + 1}/03"


def fiscal_year_window(start_fy: int, years: int = TIMELINE_YEARS) -> range:
    """Fiscal years covered by a timeline starting at start_fy."""
    return range(start_fy, start_fy + years)


def in_window(fy: int, start_fy: int, years: int = TIMELINE_YEARS) -> bool:
    """Check whether fy lies in the half-open window [start_fy, start_fy + years)."""
    return start_fy <= fy < start_fy + years
