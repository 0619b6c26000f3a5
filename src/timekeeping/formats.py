"""
Date and time format specifiers.

**Conceptual**: Callers describe how users type dates and times with two
compact mini-languages instead of strftime patterns:

  - Date format: 3 order letters + 1 delimiter, e.g. "dmy/" (22/4/2020),
    "mdy-" (4-22-2020) or "ymd." (2020.4.22). The delimiter can be any
    character except a digit.
  - Time format: "hm" or "hms" + 1 delimiter, e.g. "hm:" (14:48) or
    "hms." (14.48.23). A capital "H" switches to the 12-hour clock with a
    mandatory am/pm suffix, e.g. "Hm:" (2:48pm).

These strings are parsed once into frozen dataclasses so the parsing code
never has to re-inspect raw format strings. A malformed format string is a
developer mistake and raises ConfigurationError immediately.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from src.timekeeping.errors import ConfigurationError

DIGITS = "0123456789"

_TIME_FORMAT_PATTERN = re.compile(r"^([hH]ms?)([^hms0-9])$")


class DateOrder(Enum):
    """
    Order of the day, month and year fields in a date string.

    Each member knows the position of every field after splitting on the
    delimiter, so parsing code can pick fields without branching on order.
    """
    DMY = "dmy"
    MDY = "mdy"
    YMD = "ymd"

    @property
    def year_index(self) -> int:
        return self.value.index("y")

    @property
    def month_index(self) -> int:
        return self.value.index("m")

    @property
    def day_index(self) -> int:
        return self.value.index("d")

    def pick(self, parts: list[str]) -> tuple[str, str, str]:
        """Return (year, month, day) from the three split parts."""
        return parts[self.year_index], parts[self.month_index], parts[self.day_index]


class TimeFields(Enum):
    """Fields present in a time string."""
    HOUR_MINUTE = "hm"
    HOUR_MINUTE_SECOND = "hms"


@dataclass(frozen=True)
class DateFormatSpec:
    """
    Parsed date format: field order plus a single non-digit delimiter.

    Attributes:
        order: Field order (DMY, MDY or YMD).
        delimiter: Exactly one character, never a decimal digit.
    """
    order: DateOrder
    delimiter: str

    def __post_init__(self):
        """Validate the delimiter after initialization."""
        if len(self.delimiter) != 1:
            raise ConfigurationError(
                f"Configuration error. Date delimiter must be a single character, got: {self.delimiter!r}"
            )
        if self.delimiter in DIGITS:
            raise ConfigurationError(
                f"Configuration error. Date delimiter is invalid: {self.delimiter!r}"
            )

    @classmethod
    def from_string(cls, spec: str) -> "DateFormatSpec":
        """
        Parse a 4-character date format string such as "dmy/".

        Raises:
            ConfigurationError: If the string has the wrong length, an
                unknown field order or a digit delimiter.
        """
        if not isinstance(spec, str) or len(spec) != 4:
            raise ConfigurationError(
                f"Configuration error. Date format has incorrect length: {spec!r}"
            )
        if spec[3] in DIGITS:
            raise ConfigurationError(
                f"Configuration error. Date delimiter is invalid: {spec!r}"
            )
        try:
            order = DateOrder(spec[:3])
        except ValueError:
            raise ConfigurationError(
                f"Configuration error. Date format is invalid: {spec[:3]!r}"
            )
        return cls(order=order, delimiter=spec[3])

    def __str__(self) -> str:
        return f"{self.order.value}{self.delimiter}"


@dataclass(frozen=True)
class TimeFormatSpec:
    """
    Parsed time format: fields, clock mode and a single delimiter.

    Attributes:
        fields: HOUR_MINUTE or HOUR_MINUTE_SECOND.
        twelve_hour: True when am/pm is required and hours run 1-12.
        delimiter: Exactly one character, not a digit and not h/m/s.
    """
    fields: TimeFields
    twelve_hour: bool
    delimiter: str

    def __post_init__(self):
        """Validate the delimiter after initialization."""
        if len(self.delimiter) != 1 or self.delimiter in DIGITS or self.delimiter in "hms":
            raise ConfigurationError(
                f"Configuration error. Time delimiter is invalid: {self.delimiter!r}"
            )

    @property
    def has_seconds(self) -> bool:
        return self.fields is TimeFields.HOUR_MINUTE_SECOND

    @classmethod
    def from_string(cls, spec: str) -> "TimeFormatSpec":
        """
        Parse a time format string such as "hm:", "hms." or "Hm:".

        Raises:
            ConfigurationError: If the string doesn't match the
                mini-language.
        """
        match = _TIME_FORMAT_PATTERN.match(spec) if isinstance(spec, str) else None
        if match is None:
            raise ConfigurationError(
                f"Configuration error. Time format is invalid: {spec!r}"
            )
        order, delimiter = match.groups()
        return cls(
            fields=TimeFields(order.lower()),
            twelve_hour=order.startswith("H"),
            delimiter=delimiter,
        )

    def __str__(self) -> str:
        order = self.fields.value
        if self.twelve_hour:
            order = "H" + order[1:]
        return f"{order}{self.delimiter}"


DateFormatLike = Union[DateFormatSpec, str]
TimeFormatLike = Union[TimeFormatSpec, str]


def as_date_format(spec: DateFormatLike) -> DateFormatSpec:
    """Accept either a DateFormatSpec or its string form."""
    if isinstance(spec, DateFormatSpec):
        return spec
    return DateFormatSpec.from_string(spec)


def as_time_format(spec: TimeFormatLike) -> TimeFormatSpec:
    """Accept either a TimeFormatSpec or its string form."""
    if isinstance(spec, TimeFormatSpec):
        return spec
    return TimeFormatSpec.from_string(spec)
