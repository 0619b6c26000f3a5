"""
Period arithmetic, differences and ages.

**Conceptual**: Periods are added as fixed millisecond lengths, not calendar
steps. One month is always 30 days and one year always 365 days, so
add_period(jan_31, 1, "month") lands on March 2 (or 1 in a leap year), not
February 28. Callers that need calendar-aware month steps should not use
add_period().
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Union

from src.timekeeping.errors import ConfigurationError
from src.timekeeping.units import (
    PERIOD_UNITS,
    UnitLike,
    convert_from_milliseconds,
    parse_unit,
)
from src.utils.time import Clock, RealClock

_ONE_MILLISECOND = timedelta(milliseconds=1)


class BirthDayPolicy(Enum):
    """
    What to assume when only the birth year and month are known.

      - CHANCE_OF_BEING_OLDER: assume the 31st, so some people are actually
        older than the calculated age.
      - CHANCE_OF_BEING_YOUNGER: assume the 1st, so some people are actually
        younger than the calculated age.
    """
    CHANCE_OF_BEING_OLDER = "chance_of_being_older"
    CHANCE_OF_BEING_YOUNGER = "chance_of_being_younger"

    @property
    def assumed_day(self) -> int:
        return 31 if self is BirthDayPolicy.CHANCE_OF_BEING_OLDER else 1


_POLICY_VALUES = frozenset(policy.value for policy in BirthDayPolicy)


def add_period(instant: datetime, amount: int, unit: UnitLike) -> datetime:
    """
    Add (or subtract, with a negative amount) a period to an instant.

    Args:
        instant: Starting point.
        amount: Signed number of units. Zero is rejected.
        unit: TimeUnit or synonym: hour/hours/hr/hrs, minute/minutes/min/mins,
            second/seconds/sec/secs, day/days, month/months (30 days),
            year/years/yr/yrs (365 days).

    Returns:
        instant + amount * unit length.

    Raises:
        ConfigurationError: If amount is zero/missing, or unit is missing or
            unknown.

    Example:
        >>> add_period(datetime(2020, 4, 22, 14, 48), -2, "hrs")
        datetime.datetime(2020, 4, 22, 12, 48)
    """
    if not amount:
        raise ConfigurationError(
            f"Missing adjustment number for adding time: {instant}"
        )
    if not unit:
        raise ConfigurationError(f"Missing interval for adding time: {instant}")
    resolved = parse_unit(unit, PERIOD_UNITS)
    return instant + timedelta(milliseconds=amount * resolved.milliseconds)


def time_difference(
    start: datetime,
    end: datetime,
    unit: Optional[UnitLike] = None,
) -> float:
    """
    Difference end - start, in milliseconds or in a requested unit.

    Args:
        start: Beginning of the interval.
        end: End of the interval.
        unit: Optional target unit (millisecond up to week). The result may
            then have decimals.

    Returns:
        Milliseconds as an int when unit is None, otherwise a float in unit.
    """
    milliseconds = round((end - start) / _ONE_MILLISECOND)
    if unit:
        return convert_from_milliseconds(milliseconds, unit)
    return milliseconds


def time_since(instant: datetime, clock: Optional[Clock] = None) -> int:
    """Milliseconds from instant to now (negative if instant is in the future)."""
    return time_difference(instant, (clock or RealClock()).now())


def calculate_age(
    at: Union[date, datetime],
    birth_year: int,
    birth_month: int,
    birth_day: Union[int, str, BirthDayPolicy],
) -> int:
    """
    Determine a person's age at a given date.

    The person turns the new age ON their birthday: born 2000-06-15, they
    are 24 on 2024-06-15 and 23 on 2024-06-14.

    Args:
        at: Date at which to calculate the age.
        birth_year: Year of birth.
        birth_month: Month of birth (1-12).
        birth_day: Day of month, or a BirthDayPolicy (or its string value)
            when the day is unknown.

    Returns:
        Age in whole years.

    Raises:
        ConfigurationError: If birth_day is neither a day number nor a policy.
    """
    day = _resolve_birth_day(birth_day)
    age = at.year - birth_year
    if (at.month, at.day) < (birth_month, day):
        age -= 1
    return age


def _resolve_birth_day(birth_day: Union[int, str, BirthDayPolicy]) -> int:
    if isinstance(birth_day, BirthDayPolicy):
        return birth_day.assumed_day
    if isinstance(birth_day, int) and not isinstance(birth_day, bool):
        return birth_day
    if isinstance(birth_day, str):
        if birth_day.isascii() and birth_day.isdigit():
            return int(birth_day)
        if birth_day in _POLICY_VALUES:
            return BirthDayPolicy(birth_day).assumed_day
    raise ConfigurationError(
        f"Invalid day of month for calculating age: {birth_day!r}"
    )
