"""
Parsing and validation of user-entered dates and times.

**Conceptual**: These functions double as validators. A date or time that a
user typed either parses into a value or is rejected with the INVALID
sentinel. INVALID is falsy, so UI code can write:

    parsed = parse_date(field_value, "dmy/")
    if not parsed:
        show_field_error("Please enter a valid date")

Data problems never raise. Only configuration problems (a malformed format
spec) raise ConfigurationError, and they do so before the data is looked at.

**Calendar rules**: Months have 31/28/31/30/31/30/31/31/30/31/30/31 days.
February has 29 days in years divisible by 4, except centurial years that
are not also divisible by 400 (2000 is a leap year, 1900 and 2001 are not).
"""

import logging
import re
from datetime import date, datetime, time
from functools import lru_cache
from typing import Optional, Union

from src.timekeeping.errors import ConfigurationError
from src.timekeeping.formats import (
    DateFormatLike,
    TimeFormatLike,
    TimeFormatSpec,
    as_date_format,
    as_time_format,
)
from src.utils.time import Clock, RealClock

logger = logging.getLogger(__name__)

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class Invalid:
    """
    Sentinel type for rejected user data.

    There is exactly one instance, INVALID. It is falsy and compares equal
    only to itself.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "INVALID"


INVALID = Invalid()

DateResult = Union[date, Invalid]
TimeResult = Union[datetime, Invalid]


def is_invalid(value: object) -> bool:
    """Return True if value is the INVALID sentinel."""
    return value is INVALID


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """
    Number of days in a month (1-12) of a given year.

    Raises:
        ValueError: If month is outside 1-12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1-12, got: {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


def check_date(month: int, day: int, year: int) -> bool:
    """
    Check that numeric month/day/year fields form a real calendar date.

    Years run from 1 to 32767.

    Example:
        >>> check_date(12, 31, 2000)
        True
        >>> check_date(2, 29, 2001)
        False
        >>> check_date(1, 390, 2000)
        False
    """
    if not (0 < month < 13 and 0 < year < 32768):
        return False
    return 0 < day <= days_in_month(year, month)


def _is_integer_string(value: str) -> bool:
    return value.isascii() and value.isdigit()


def parse_date(text: str, date_format: DateFormatLike) -> DateResult:
    """
    Parse and validate a date string in a caller-specified format.

    **Functionally**:
      - The format is checked first; a bad format raises ConfigurationError.
      - The text must split into exactly 3 parts on the delimiter.
      - Each part must be a non-negative integer string (no signs, no
        spaces). Zero-padding is optional: "2/4/2020" and "02/04/2020" are
        equivalent.
      - Month must be in 1-12 and day must fit in that month of that year.

    Args:
        text: The date as typed, e.g. "22/4/2020".
        date_format: DateFormatSpec or its string form, e.g. "dmy/".

    Returns:
        A datetime.date on success, INVALID otherwise. Empty text is
        INVALID, not an error.

    Raises:
        ConfigurationError: If date_format is malformed.

    Example:
        >>> parse_date("22/4/2020", "dmy/")
        datetime.date(2020, 4, 22)
        >>> parse_date("29.2.2001", "dmy.")
        INVALID
    """
    spec = as_date_format(date_format)
    if not text:
        return INVALID

    parts = text.split(spec.delimiter)
    if len(parts) != 3:
        logger.debug("Rejected date %r: expected 3 parts for format %s", text, spec)
        return INVALID

    year_str, month_str, day_str = spec.order.pick(parts)
    if not all(_is_integer_string(part) for part in (year_str, month_str, day_str)):
        logger.debug("Rejected date %r: non-numeric part", text)
        return INVALID

    year, month, day = int(year_str), int(month_str), int(day_str)
    if month > 12:
        logger.debug("Rejected date %r: month out of range", text)
        return INVALID

    # Month 0, day 0 and year 0 pass the range checks but have no calendar date
    if not check_date(month, day, year):
        logger.debug("Rejected date %r: day out of range for month", text)
        return INVALID

    try:
        return date(year, month, day)
    except ValueError:
        # Years beyond datetime.MAXYEAR
        return INVALID


@lru_cache(maxsize=32)
def _time_pattern(spec: TimeFormatSpec) -> re.Pattern:
    delimiter = re.escape(spec.delimiter)
    seconds = f"{delimiter}([0-9]{{1,2}})" if spec.has_seconds else "()"
    meridiem = "(am|pm)" if spec.twelve_hour else "()"
    return re.compile(
        f"^([0-9]{{1,2}}){delimiter}([0-9]{{1,2}}){seconds}{meridiem}$"
    )


def parse_time(
    text: str,
    time_format: TimeFormatLike,
    clock: Optional[Clock] = None,
) -> TimeResult:
    """
    Parse and validate a time string in a caller-specified format.

    **Functionally**:
      - All spaces are removed and the text is lower-cased, so "2:48 PM"
        and "2:48pm" are the same.
      - Hour, minute and second fields are 1-2 digits, not necessarily
        zero-padded.
      - 24-hour formats: hour 0-23. 12-hour formats: hour 1-12 and an
        "am"/"pm" suffix is mandatory.
      - Minutes and seconds must be 0-59. "hm" formats imply second 0.
      - 12am becomes hour 0, and any pm hour other than 12 gets +12.

    **Result anchoring**: Only the time of day is meaningful. It is placed on
    today's date as reported by clock (default: the real local clock).

    Args:
        text: The time as typed, e.g. "2:48pm" or "14.48.23".
        time_format: TimeFormatSpec or its string form, e.g. "Hm:".
        clock: Time source for today's date.

    Returns:
        A naive datetime with microsecond 0 on success, INVALID otherwise.

    Raises:
        ConfigurationError: If time_format is malformed.
    """
    spec = as_time_format(time_format)
    cleaned = text.replace(" ", "").lower()
    if not cleaned:
        return INVALID

    match = _time_pattern(spec).match(cleaned)
    if match is None:
        logger.debug("Rejected time %r: does not match format %s", text, spec)
        return INVALID

    hours_str, minutes_str, seconds_str, meridiem = match.groups()
    hours = int(hours_str)
    minutes = int(minutes_str)
    seconds = int(seconds_str) if seconds_str else 0

    if minutes > 59 or seconds > 59:
        logger.debug("Rejected time %r: minute/second out of range", text)
        return INVALID

    if spec.twelve_hour:
        if not 1 <= hours <= 12:
            logger.debug("Rejected time %r: hour out of 12-hour range", text)
            return INVALID
        if meridiem == "am" and hours == 12:
            hours = 0
        elif meridiem == "pm" and hours != 12:
            hours += 12
    elif hours > 23:
        logger.debug("Rejected time %r: hour out of 24-hour range", text)
        return INVALID

    today = (clock or RealClock()).now()
    return today.replace(hour=hours, minute=minutes, second=seconds, microsecond=0)


def merge_date_time(
    date_value: Union[date, datetime],
    time_value: Union[datetime, time],
) -> datetime:
    """
    Combine the calendar date of one value with the time of day of another.

    Typical use is joining the results of parse_date() and parse_time()
    from two separate form fields.

    Raises:
        ConfigurationError: If either argument has the wrong type (including
            INVALID).
    """
    if not isinstance(date_value, date) or not isinstance(time_value, (datetime, time)):
        raise ConfigurationError(
            "Invalid parameters for combining date and time: "
            f"{type(date_value).__name__}-{type(time_value).__name__}"
        )
    if isinstance(date_value, datetime):
        date_value = date_value.date()
    if isinstance(time_value, datetime):
        time_value = time_value.time()
    return datetime.combine(date_value, time_value.replace(tzinfo=None))
