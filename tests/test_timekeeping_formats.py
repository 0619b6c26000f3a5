"""
Tests for src/timekeeping/formats.py

Date and time format mini-languages: valid specs parse into dataclasses,
malformed specs raise ConfigurationError.
"""

import pytest

from src.timekeeping.errors import ConfigurationError
from src.timekeeping.formats import (
    DateFormatSpec,
    DateOrder,
    TimeFields,
    TimeFormatSpec,
    as_date_format,
    as_time_format,
)


# ============================================================================
# Date formats
# ============================================================================

@pytest.mark.parametrize("spec, order, delimiter", [
    ("dmy/", DateOrder.DMY, "/"),
    ("mdy-", DateOrder.MDY, "-"),
    ("ymd.", DateOrder.YMD, "."),
    ("dmy ", DateOrder.DMY, " "),
])
def test_date_format_from_string(spec, order, delimiter):
    """Test that valid 4-character date formats parse."""
    parsed = DateFormatSpec.from_string(spec)

    assert parsed.order is order
    assert parsed.delimiter == delimiter
    assert str(parsed) == spec


@pytest.mark.parametrize("spec", ["dmy", "dmy//", "", None, 42])
def test_date_format_wrong_length(spec):
    """Test that a date format must be exactly 4 characters."""
    with pytest.raises(ConfigurationError, match="incorrect length"):
        DateFormatSpec.from_string(spec)


def test_date_format_digit_delimiter():
    """Test that a digit delimiter is a configuration error."""
    with pytest.raises(ConfigurationError, match="delimiter is invalid"):
        DateFormatSpec.from_string("dmy1")


def test_date_format_unknown_order():
    """Test that an unknown field order is a configuration error."""
    with pytest.raises(ConfigurationError, match="Date format is invalid"):
        DateFormatSpec.from_string("ydm/")


def test_date_format_constructor_rejects_digit_delimiter():
    """Test that the dataclass itself enforces the delimiter invariant."""
    with pytest.raises(ConfigurationError):
        DateFormatSpec(DateOrder.YMD, "0")


def test_date_order_picks_fields():
    """Test that each order picks (year, month, day) from split parts."""
    assert DateOrder.DMY.pick(["22", "4", "2020"]) == ("2020", "4", "22")
    assert DateOrder.MDY.pick(["4", "22", "2020"]) == ("2020", "4", "22")
    assert DateOrder.YMD.pick(["2020", "4", "22"]) == ("2020", "4", "22")


# ============================================================================
# Time formats
# ============================================================================

@pytest.mark.parametrize("spec, fields, twelve_hour, delimiter", [
    ("hm:", TimeFields.HOUR_MINUTE, False, ":"),
    ("hms.", TimeFields.HOUR_MINUTE_SECOND, False, "."),
    ("Hm:", TimeFields.HOUR_MINUTE, True, ":"),
    ("Hms:", TimeFields.HOUR_MINUTE_SECOND, True, ":"),
])
def test_time_format_from_string(spec, fields, twelve_hour, delimiter):
    """Test that valid time formats parse, capital H meaning 12-hour."""
    parsed = TimeFormatSpec.from_string(spec)

    assert parsed.fields is fields
    assert parsed.twelve_hour is twelve_hour
    assert parsed.delimiter == delimiter
    assert str(parsed) == spec


@pytest.mark.parametrize("spec", ["hm", "hm1", "hmm:", "hs:", "HM:", "hms::", "", None])
def test_time_format_invalid(spec):
    """Test that malformed time formats raise ConfigurationError."""
    with pytest.raises(ConfigurationError, match="Time format is invalid"):
        TimeFormatSpec.from_string(spec)


def test_as_format_accepts_spec_or_string():
    """Test the coercion helpers."""
    date_spec = DateFormatSpec.from_string("ymd-")
    time_spec = TimeFormatSpec.from_string("hm:")

    assert as_date_format(date_spec) is date_spec
    assert as_date_format("ymd-") == date_spec
    assert as_time_format(time_spec) is time_spec
    assert as_time_format("hm:") == time_spec
