"""
Compact, human-readable date ranges.

Examples of the output:
  - "Dec. 3-5, 2010"                 same month and year
  - "Nov. 30 - Dec. 4, 2010"         same year
  - "Dec. 27, 2010 - Jan. 2, 2011"   different years
  - "June 3-5, 2010"                 March to July are spelled out by default
"""

from datetime import date, datetime
from typing import Union

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Months short enough that abbreviating them saves little (March-July)
SPELLED_OUT_MONTHS = frozenset({3, 4, 5, 6, 7})


def _month_label(month: int, always_abbreviate: bool, never_abbreviate: bool) -> str:
    full = MONTH_NAMES[month - 1]
    if never_abbreviate:
        return full
    if not always_abbreviate and month in SPELLED_OUT_MONTHS:
        return full
    return full[:3] + "."


def format_time_period(
    start: Union[date, datetime],
    end: Union[date, datetime],
    two_digit_year: bool = False,
    no_year: bool = False,
    always_abbreviate_months: bool = False,
    never_abbreviate_months: bool = False,
) -> str:
    """
    Format a date range compactly, collapsing the shared month and year.

    Args:
        start: First day of the period.
        end: Last day of the period.
        two_digit_year: Show years as "'10" instead of "2010". Takes
            precedence over no_year.
        no_year: Leave the year out entirely.
        always_abbreviate_months: Abbreviate March-July too ("Jun.").
        never_abbreviate_months: Spell out every month. Takes precedence
            over always_abbreviate_months.

    Returns:
        The formatted range, e.g. "Nov. 30 - Dec. 4, 2010".
    """
    from_month = _month_label(start.month, always_abbreviate_months, never_abbreviate_months)
    to_month = _month_label(end.month, always_abbreviate_months, never_abbreviate_months)

    show_year = two_digit_year or not no_year
    from_year = str(start.year) if show_year else ""
    to_year = str(end.year) if show_year else ""

    def year_label(year: str) -> str:
        return "'" + year[2:] if two_digit_year else year

    output = f"{from_month} {start.day}"
    if from_month == to_month and from_year == to_year:
        output += f"-{end.day}"
    elif from_year == to_year:
        output += f" - {to_month} {end.day}"
    else:
        output += f", {year_label(from_year)} - {to_month} {end.day}"

    if show_year:
        output += f", {year_label(to_year)}"
    return output
