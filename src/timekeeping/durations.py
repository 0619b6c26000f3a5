"""
Human-readable "best-fit" duration descriptions.

**Conceptual**: A duration such as 93,600 seconds is more useful to a reader
as "1 day" than as "26 hrs" or "1560 min.". describe_duration() expresses a
duration in every unit and picks the coarsest unit in which the number is
still "human-sized". The result is a general guide, not an exact figure.

**Unit selection**, checked in this order:
  1. seconds  if |seconds| < 60
  2. minutes  if round(|minutes|) < 60
  3. hours    if round(|hours|) < 24
  4. days     if |round(days)| < 30, or < 7 when weeks are enabled
  5. weeks    if weeks are enabled and round(|weeks|) < 5 and |days| < 30
  6. months   if round(|months|) < 12          (30-day months)
  7. years    otherwise, shown as round(|years|) (365-day years)

Step 5 compares the *unrounded* day count, so 29.6 days with weeks enabled
is "4 weeks" while 30 days skips straight to "1 month". Step 7 always shows
a non-negative number of years, even for negative durations.

Rounding is half-up (2.5 -> 3, -2.5 -> -2) to the requested number of
decimals.
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional

from src.config.settings import get_settings
from src.timekeeping.errors import ConfigurationError
from src.timekeeping.units import TimeUnit

# text_lookup(tag, default_text, count_placeholder) -> label
TextLookup = Callable[[str, str, str], str]

COUNT_PLACEHOLDER = "#"

# unit -> (singular tag, singular default, plural tag, plural default)
SHORT_LABELS = {
    TimeUnit.SECOND: ("second_short", "sec.", "seconds_short", "sec."),
    TimeUnit.MINUTE: ("minute_short", "min.", "minutes_short", "min."),
    TimeUnit.HOUR: ("hour_short", "hr", "hours_short", "hrs"),
    TimeUnit.DAY: ("day_short", "day", "days_short", "days"),
    TimeUnit.WEEK: ("week_short", "week", "weeks_short", "weeks"),
    TimeUnit.MONTH: ("month_short", "month", "months_short", "months"),
    TimeUnit.YEAR: ("year_short", "year", "years_short", "yrs"),
}

LONG_LABELS = {
    TimeUnit.SECOND: ("second", "second", "seconds", "seconds"),
    TimeUnit.MINUTE: ("minute", "minute", "minutes", "minutes"),
    TimeUnit.HOUR: ("hour", "hour", "hours", "hours"),
    TimeUnit.DAY: ("day", "day", "days", "days"),
    TimeUnit.WEEK: ("week", "week", "weeks", "weeks"),
    TimeUnit.MONTH: ("month", "month", "months", "months"),
    TimeUnit.YEAR: ("year", "year", "years", "years"),
}

LABEL_SETS = {"short": SHORT_LABELS, "long": LONG_LABELS}


@dataclass(frozen=True)
class DurationBreakdown:
    """
    One duration expressed in every unit, plus the best-fit description.

    Attributes:
        seconds .. years: The duration in each unit (unrounded). Months are
            30 days and years 365 days.
        days_rounded: days rounded to the requested decimals.
        unit: The best-fit unit chosen for general_guide.
        general_guide: Rounded number and label, e.g. "3 hrs".
    """
    seconds: float
    minutes: float
    hours: float
    days: float
    days_rounded: float
    weeks: float
    months: float
    years: float
    unit: TimeUnit
    general_guide: str


def round_half_up(number: float, decimals: int = 0) -> float:
    """
    Round to a number of decimals, with halves going towards +infinity.

    Returns an int when decimals is 0. Trailing zeros are not kept:
    round_half_up(24.6001, 3) == 24.6.
    """
    if decimals == 0:
        return math.floor(number + 0.5)
    factor = 10 ** decimals
    return math.floor(number * factor + 0.5) / factor


def _format_number(number: float) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def _default_text_lookup(tag: str, default: str, placeholder: str) -> str:
    return default


def describe_duration(
    seconds: float,
    unit_names: Optional[str] = None,
    decimals: Optional[int] = None,
    include_weeks: Optional[bool] = None,
    text_lookup: Optional[TextLookup] = None,
) -> DurationBreakdown:
    """
    Describe a duration with a single, automatically chosen unit.

    Args:
        seconds: Duration in seconds (may be negative or fractional).
        unit_names: "short" ("3 hrs") or "long" ("3 hours").
        decimals: Decimals in the general_guide number.
        include_weeks: Whether weeks may be chosen. Most often days are
            more natural up to a month.
        text_lookup: Translation hook called as
            text_lookup(tag, default_text, "#"). Tags are e.g. "hour_short",
            "hours_short", "hour", "hours". Default returns default_text.

    Unspecified options fall back to the configured defaults (see
    src.config.settings).

    Returns:
        DurationBreakdown with the best-fit unit and phrase.

    Raises:
        ConfigurationError: If unit_names is not "short" or "long".

    Example:
        >>> describe_duration(3600).general_guide
        '1 hr'
        >>> describe_duration(90000, unit_names="long").general_guide
        '1 day'
    """
    if unit_names is None or decimals is None or include_weeks is None:
        settings = get_settings()
        unit_names = settings.unit_names if unit_names is None else unit_names
        decimals = settings.decimals if decimals is None else decimals
        include_weeks = settings.include_weeks if include_weeks is None else include_weeks

    labels = LABEL_SETS.get(unit_names)
    if labels is None:
        raise ConfigurationError(
            f"Configuration error. Unit format not defined: {unit_names!r}"
        )
    lookup = text_lookup or _default_text_lookup

    minutes = seconds / 60
    hours = minutes / 60
    days = hours / 24
    days_rounded = round_half_up(days, decimals)
    weeks = days / 7
    months = days / 30
    years = days / 365

    if abs(seconds) < 60:
        unit, rounded = TimeUnit.SECOND, round_half_up(seconds, decimals)
    elif round_half_up(abs(minutes), decimals) < 60:
        unit, rounded = TimeUnit.MINUTE, round_half_up(minutes, decimals)
    elif round_half_up(abs(hours), decimals) < 24:
        unit, rounded = TimeUnit.HOUR, round_half_up(hours, decimals)
    elif abs(days_rounded) < (7 if include_weeks else 30):
        unit, rounded = TimeUnit.DAY, days_rounded
    elif include_weeks and round_half_up(abs(weeks), decimals) < 5 and abs(days) < 30:
        unit, rounded = TimeUnit.WEEK, round_half_up(weeks, decimals)
    elif round_half_up(abs(months), decimals) < 12:
        unit, rounded = TimeUnit.MONTH, round_half_up(months, decimals)
    else:
        unit, rounded = TimeUnit.YEAR, round_half_up(abs(years), decimals)

    one_tag, one_default, more_tag, more_default = labels[unit]
    if rounded == 1:
        general_guide = "1 " + lookup(one_tag, one_default, COUNT_PLACEHOLDER)
    else:
        label = lookup(more_tag, more_default, COUNT_PLACEHOLDER)
        general_guide = f"{_format_number(rounded)} {label}"

    return DurationBreakdown(
        seconds=seconds,
        minutes=minutes,
        hours=hours,
        days=days,
        days_rounded=days_rounded,
        weeks=weeks,
        months=months,
        years=years,
        unit=unit,
        general_guide=general_guide,
    )
