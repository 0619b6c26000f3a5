"""
Conversion of user-entered dates and times to the storage format.

**Canonical format**:
  - Date and time: "YYYY-MM-DD HH:MM:SS"
  - Date only:     "YYYY-MM-DD"
  - Time only:     "HH:MM:SS"
Whichever parts the input holds are converted and joined with one space.
This is the format the external store expects; the same conversion exists
server-side and both must agree exactly.

**Failure policy**: to_storage_format() only checks *structure* (right number
of parts, digits where digits belong, am/pm present for 12-hour formats). It
does not range-check months, days or hours. Callers choose per call:
  - No fallback: a failure raises ConversionError with a descriptive message.
  - return_on_fail=<value>: that value is returned instead.
  - return_on_fail=SOURCE: the untouched input is returned.
A caller using a fallback MUST validate the value later (preferably with
the authoritative server-side check) before relying on it.
"""

import logging
import re
from datetime import date, datetime, time
from typing import Any, Optional, Union

from src.timekeeping.errors import ConfigurationError, ConversionError
from src.timekeeping.formats import (
    DateFormatLike,
    DateFormatSpec,
    TimeFormatLike,
    TimeFormatSpec,
    as_date_format,
    as_time_format,
)

logger = logging.getLogger(__name__)

STORAGE_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
STORAGE_DATE_FORMAT = "%Y-%m-%d"
STORAGE_TIME_FORMAT = "%H:%M:%S"


class _Marker:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name


# Fallback marker: return the original input unchanged when conversion fails.
SOURCE = _Marker("SOURCE")

# Default: no fallback, failures raise ConversionError.
NO_FALLBACK = _Marker("NO_FALLBACK")

_WHITESPACE_RUN = re.compile(r"\s+")
_SPACE_BEFORE_MERIDIEM = re.compile(r"\s(am|pm)", re.IGNORECASE)
_TRAILING_MERIDIEM = re.compile(r"^(.*?)(am|pm)$")


def format_for_storage(value: Union[datetime, date, time]) -> str:
    """
    Render a date, time or datetime in the storage format.

    A datetime gives "YYYY-MM-DD HH:MM:SS", a date "YYYY-MM-DD" and a time
    "HH:MM:SS". Microseconds are dropped.
    """
    if isinstance(value, datetime):
        return value.strftime(STORAGE_DATETIME_FORMAT)
    if isinstance(value, date):
        return value.strftime(STORAGE_DATE_FORMAT)
    if isinstance(value, time):
        return value.strftime(STORAGE_TIME_FORMAT)
    raise ConfigurationError(
        f"Cannot format {type(value).__name__} for storage"
    )


def to_storage_format(
    value: Optional[str],
    date_format: Optional[DateFormatLike],
    time_format: Optional[TimeFormatLike] = None,
    return_on_fail: Any = NO_FALLBACK,
) -> Any:
    """
    Convert a date and/or time typed in caller-specified formats to the
    storage format.

    **Functionally**:
      - Leading/trailing whitespace is trimmed, whitespace runs collapse to
        one space and a space before am/pm is removed ("2:48 PM" -> "2:48PM").
      - A value containing a space holds a date and a time, in that order.
      - A value without a space is a date if it contains the date delimiter,
        otherwise a time if it contains the time delimiter.
      - Year is zero-padded to 4 digits, month, day and hour to 2. Minutes
        and seconds are used as typed. "hm" formats get ":00" seconds.
      - 12-hour formats: pm adds 12 to hours 1-11 and 12am becomes 00.

    Args:
        value: Text to convert. None or "" returns "".
        date_format: Date format such as "dmy/". May be None when value only
            ever holds a time.
        time_format: Time format such as "Hm:". May be None when value only
            ever holds a date.
        return_on_fail: Returned when conversion fails. Pass SOURCE to get
            the untouched input back. Leave unset to raise instead.

    Returns:
        The storage-format string, "" for empty input, or the fallback.

    Raises:
        ConversionError: If conversion fails and no fallback was supplied.
        ConfigurationError: If a format spec is malformed, or a part of the
            value needs a format that was not given.

    Example:
        >>> to_storage_format("22/4/2020 2:48pm", "dmy/", "Hm:")
        '2020-04-22 14:48:00'
        >>> to_storage_format("22/4", "dmy/", return_on_fail=SOURCE)
        '22/4'
    """
    date_spec = as_date_format(date_format) if date_format else None
    time_spec = as_time_format(time_format) if time_format else None

    if not value:
        return ""

    try:
        return _convert(value, date_spec, time_spec)
    except ConversionError as e:
        if return_on_fail is NO_FALLBACK:
            raise
        logger.debug("Storage conversion failed, using fallback: %s", e)
        if return_on_fail is SOURCE:
            return value
        return return_on_fail


def _convert(
    value: str,
    date_spec: Optional[DateFormatSpec],
    time_spec: Optional[TimeFormatSpec],
) -> str:
    text = _WHITESPACE_RUN.sub(" ", value.strip())
    text = _SPACE_BEFORE_MERIDIEM.sub(r"\1", text)

    if " " in text:
        parts = text.split(" ")
        if len(parts) != 2:
            raise ConversionError(
                f"Invalid date/time to convert to database format: {value}", value
            )
        date_text, time_text = parts
    elif date_spec is not None and date_spec.delimiter in text:
        date_text, time_text = text, None
    elif time_spec is not None and time_spec.delimiter in text:
        date_text, time_text = None, text
    else:
        raise ConversionError(
            f"Could not determine if value was a date or a time: {value}", value
        )

    output = []
    if date_text is not None:
        if date_spec is None:
            raise ConfigurationError(
                f"Configuration error. Date format is required to convert: {value}"
            )
        output.append(_convert_date(date_text, date_spec, value))
    if time_text is not None:
        if time_spec is None:
            raise ConfigurationError(
                f"Configuration error. Time format is required to convert: {value}"
            )
        output.append(_convert_time(time_text, time_spec, value))
    return " ".join(output)


def _convert_date(text: str, spec: DateFormatSpec, original: str) -> str:
    parts = text.split(spec.delimiter)
    if len(parts) != 3 or not all(part.isascii() and part.isdigit() for part in parts):
        raise ConversionError(
            f"Invalid date format for converting to database format: {original}", original
        )
    year, month, day = spec.order.pick(parts)
    return f"{year.zfill(4)}-{month.zfill(2)}-{day.zfill(2)}"


def _convert_time(text: str, spec: TimeFormatSpec, original: str) -> str:
    text = text.replace(" ", "").lower()

    meridiem = None
    if spec.twelve_hour:
        match = _TRAILING_MERIDIEM.match(text)
        if match is None:
            raise ConversionError(f"Missing am/pm in: {original}", original)
        text, meridiem = match.groups()

    parts = text.split(spec.delimiter)
    expected = 3 if spec.has_seconds else 2
    if len(parts) != expected or not all(part.isascii() and part.isdigit() for part in parts):
        raise ConversionError(
            f"Invalid time format for converting to database format: {original}", original
        )

    hours, minutes = parts[0], parts[1]
    seconds = parts[2] if spec.has_seconds else "00"
    if meridiem == "pm" and int(hours) <= 11:
        hours = str(int(hours) + 12)
    elif meridiem == "am" and int(hours) == 12:
        hours = "00"
    return f"{hours.zfill(2)}:{minutes}:{seconds}"
