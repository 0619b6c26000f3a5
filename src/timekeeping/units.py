"""
Time units, unit-name synonyms and millisecond conversions.

**Conceptual**: Callers name units the way people write them ("hrs",
"mins", "days"). This module is the only place that matches those strings;
everything else works with the TimeUnit enum, whose members carry their
length in milliseconds.

**Approximations**: A month is exactly 30 days and a year exactly 365 days.
Adding "1 month" therefore adds 2,592,000,000 ms regardless of the calendar.
This is deliberate and relied upon by callers (durations, period arithmetic).

Two unit families are accepted by different operations:
  - PERIOD_UNITS: what add_period() understands (second up to year, no week).
  - CONVERSION_UNITS: what the millisecond conversions understand
    (millisecond up to week, no month/year).
"""

from enum import Enum
from typing import Union

from src.timekeeping.errors import ConfigurationError

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR
MS_PER_WEEK = 7 * MS_PER_DAY
MS_PER_MONTH = 30 * MS_PER_DAY
MS_PER_YEAR = 365 * MS_PER_DAY


class TimeUnit(Enum):
    """Units of duration, from milliseconds to (365-day) years."""
    MILLISECOND = "milliseconds"
    SECOND = "seconds"
    MINUTE = "minutes"
    HOUR = "hours"
    DAY = "days"
    WEEK = "weeks"
    MONTH = "months"
    YEAR = "years"

    @property
    def milliseconds(self) -> int:
        """Length of one unit in milliseconds."""
        return _UNIT_LENGTHS[self]


_UNIT_LENGTHS = {
    TimeUnit.MILLISECOND: 1,
    TimeUnit.SECOND: MS_PER_SECOND,
    TimeUnit.MINUTE: MS_PER_MINUTE,
    TimeUnit.HOUR: MS_PER_HOUR,
    TimeUnit.DAY: MS_PER_DAY,
    TimeUnit.WEEK: MS_PER_WEEK,
    TimeUnit.MONTH: MS_PER_MONTH,
    TimeUnit.YEAR: MS_PER_YEAR,
}

UNIT_SYNONYMS = {
    "millisecond": TimeUnit.MILLISECOND,
    "milliseconds": TimeUnit.MILLISECOND,
    "msec": TimeUnit.MILLISECOND,
    "msecs": TimeUnit.MILLISECOND,
    "second": TimeUnit.SECOND,
    "seconds": TimeUnit.SECOND,
    "sec": TimeUnit.SECOND,
    "secs": TimeUnit.SECOND,
    "minute": TimeUnit.MINUTE,
    "minutes": TimeUnit.MINUTE,
    "min": TimeUnit.MINUTE,
    "mins": TimeUnit.MINUTE,
    "hour": TimeUnit.HOUR,
    "hours": TimeUnit.HOUR,
    "hr": TimeUnit.HOUR,
    "hrs": TimeUnit.HOUR,
    "day": TimeUnit.DAY,
    "days": TimeUnit.DAY,
    "week": TimeUnit.WEEK,
    "weeks": TimeUnit.WEEK,
    "wk": TimeUnit.WEEK,
    "wks": TimeUnit.WEEK,
    "month": TimeUnit.MONTH,
    "months": TimeUnit.MONTH,
    "year": TimeUnit.YEAR,
    "years": TimeUnit.YEAR,
    "yr": TimeUnit.YEAR,
    "yrs": TimeUnit.YEAR,
}

PERIOD_UNITS = frozenset({
    TimeUnit.SECOND,
    TimeUnit.MINUTE,
    TimeUnit.HOUR,
    TimeUnit.DAY,
    TimeUnit.MONTH,
    TimeUnit.YEAR,
})

CONVERSION_UNITS = frozenset({
    TimeUnit.MILLISECOND,
    TimeUnit.SECOND,
    TimeUnit.MINUTE,
    TimeUnit.HOUR,
    TimeUnit.DAY,
    TimeUnit.WEEK,
})

UnitLike = Union[TimeUnit, str]


def parse_unit(unit: UnitLike, allowed: frozenset = frozenset(TimeUnit)) -> TimeUnit:
    """
    Resolve a unit name (or TimeUnit) to a TimeUnit member.

    Args:
        unit: A TimeUnit, or a synonym such as "hr", "mins", "days".
        allowed: Units the calling operation supports.

    Returns:
        The matching TimeUnit.

    Raises:
        ConfigurationError: If the unit is empty, unknown or not in allowed.
    """
    if isinstance(unit, TimeUnit):
        resolved = unit
    else:
        resolved = UNIT_SYNONYMS.get(unit) if isinstance(unit, str) else None
    if resolved is None or resolved not in allowed:
        raise ConfigurationError(
            f"Configuration error. Interval has not been defined: {unit!r}"
        )
    return resolved


def convert_from_milliseconds(milliseconds: float, unit: UnitLike) -> float:
    """
    Express a millisecond count in another unit.

    The result may have decimals, e.g. 90 minutes -> 1.5 hours.

    Raises:
        ConfigurationError: If unit is not millisecond..week.
    """
    resolved = parse_unit(unit, CONVERSION_UNITS)
    if resolved is TimeUnit.MILLISECOND:
        return milliseconds
    return milliseconds / resolved.milliseconds


def convert_to_milliseconds(value: float, unit: UnitLike) -> float:
    """
    Express a value given in unit as milliseconds.

    Raises:
        ConfigurationError: If unit is not millisecond..week.
    """
    resolved = parse_unit(unit, CONVERSION_UNITS)
    return value * resolved.milliseconds
