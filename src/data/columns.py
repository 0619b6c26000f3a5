"""
pandas helpers for applying the timekeeping functions to whole columns.

**Conceptual**: Imports and exports often carry dates the way users typed
them ("22/4/2020", "2:48pm"). These helpers run the same parsing and storage
conversion as the scalar functions, one column at a time, so batch code and
form handling stay consistent.

**Rule**: Format specs are checked once, before any row is touched, so a
configuration mistake raises immediately even for an empty column.
"""

from datetime import datetime
from typing import Any, Optional

import numpy as np
import pandas as pd

from src.timekeeping.formats import (
    DateFormatLike,
    TimeFormatLike,
    as_date_format,
    as_time_format,
)
from src.timekeeping.parsing import is_invalid, parse_date
from src.timekeeping.storage import NO_FALLBACK, to_storage_format
from src.timekeeping.units import UnitLike, convert_from_milliseconds


def to_storage_format_column(
    values: pd.Series,
    date_format: Optional[DateFormatLike],
    time_format: Optional[TimeFormatLike] = None,
    return_on_fail: Any = NO_FALLBACK,
) -> pd.Series:
    """
    Convert every value of a column to the storage format.

    Missing values (NaN/None) are left as they are. The failure policy is
    the same as to_storage_format(): without return_on_fail the first bad
    row raises ConversionError.

    Args:
        values: Column of date/time strings.
        date_format: Date format such as "dmy/", or None.
        time_format: Time format such as "Hm:", or None.
        return_on_fail: Per-row fallback (SOURCE keeps the original text).

    Returns:
        New Series of storage-format strings, same index as input.

    Example:
        >>> to_storage_format_column(pd.Series(["22/4/2020", "1/5/2020"]), "dmy/")
        0    2020-04-22
        1    2020-05-01
        dtype: object
    """
    date_spec = as_date_format(date_format) if date_format else None
    time_spec = as_time_format(time_format) if time_format else None

    return values.map(
        lambda value: to_storage_format(value, date_spec, time_spec, return_on_fail),
        na_action="ignore",
    )


def parse_date_column(values: pd.Series, date_format: DateFormatLike) -> pd.Series:
    """
    Parse a column of date strings into datetime64 values.

    Rows that parse_date() rejects (and missing values) become NaT, so
    callers can find them with .isna().

    Args:
        values: Column of date strings.
        date_format: Date format such as "dmy/".

    Returns:
        datetime64 Series, same index as input.
    """
    spec = as_date_format(date_format)

    def parse(value: Any) -> Any:
        if not isinstance(value, str):
            return None
        parsed = parse_date(value, spec)
        if is_invalid(parsed):
            return None
        return datetime(parsed.year, parsed.month, parsed.day)

    return pd.to_datetime(values.map(parse).astype("object"))


def time_difference_column(
    start: pd.Series,
    end: pd.Series,
    unit: Optional[UnitLike] = None,
) -> pd.Series:
    """
    Row-wise end - start, in milliseconds or in a requested unit.

    Args:
        start: Column of datetimes (or strings pandas can parse).
        end: Column of datetimes, aligned with start.
        unit: Optional target unit (millisecond up to week).

    Returns:
        float Series; NaN where either side is missing.
    """
    milliseconds = (pd.to_datetime(end) - pd.to_datetime(start)) / np.timedelta64(1, "ms")
    if unit:
        return convert_from_milliseconds(milliseconds, unit)
    return milliseconds
