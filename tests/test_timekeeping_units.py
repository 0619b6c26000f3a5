"""
Tests for src/timekeeping/units.py

Unit synonyms and millisecond conversions.
"""

import pytest

from src.timekeeping.errors import ConfigurationError
from src.timekeeping.units import (
    CONVERSION_UNITS,
    PERIOD_UNITS,
    TimeUnit,
    convert_from_milliseconds,
    convert_to_milliseconds,
    parse_unit,
)


@pytest.mark.parametrize("name, unit", [
    ("hour", TimeUnit.HOUR), ("hours", TimeUnit.HOUR), ("hr", TimeUnit.HOUR), ("hrs", TimeUnit.HOUR),
    ("minute", TimeUnit.MINUTE), ("min", TimeUnit.MINUTE), ("mins", TimeUnit.MINUTE),
    ("second", TimeUnit.SECOND), ("sec", TimeUnit.SECOND), ("secs", TimeUnit.SECOND),
    ("day", TimeUnit.DAY), ("days", TimeUnit.DAY),
    ("wk", TimeUnit.WEEK), ("weeks", TimeUnit.WEEK),
    ("month", TimeUnit.MONTH), ("months", TimeUnit.MONTH),
    ("yr", TimeUnit.YEAR), ("years", TimeUnit.YEAR),
    ("msec", TimeUnit.MILLISECOND),
])
def test_parse_unit_synonyms(name, unit):
    """Test that common spellings resolve to the same unit."""
    assert parse_unit(name) is unit


def test_parse_unit_passes_enum_through():
    """Test that a TimeUnit is accepted as-is."""
    assert parse_unit(TimeUnit.DAY) is TimeUnit.DAY


@pytest.mark.parametrize("name", ["fortnight", "", None, "Hours"])
def test_parse_unit_unknown(name):
    """Test that unknown units are configuration errors."""
    with pytest.raises(ConfigurationError, match="Interval has not been defined"):
        parse_unit(name)


def test_parse_unit_respects_allowed_family():
    """Test that weeks can't be added as a period, months can't be converted."""
    with pytest.raises(ConfigurationError):
        parse_unit("weeks", PERIOD_UNITS)
    with pytest.raises(ConfigurationError):
        parse_unit("months", CONVERSION_UNITS)


def test_unit_lengths():
    """Test the fixed unit lengths, including 30-day months and 365-day years."""
    assert TimeUnit.SECOND.milliseconds == 1000
    assert TimeUnit.WEEK.milliseconds == 7 * 24 * 60 * 60 * 1000
    assert TimeUnit.MONTH.milliseconds == 30 * 24 * 60 * 60 * 1000
    assert TimeUnit.YEAR.milliseconds == 365 * 24 * 60 * 60 * 1000


def test_convert_from_milliseconds():
    """Test conversion of milliseconds to each supported unit."""
    assert convert_from_milliseconds(5400000, "hours") == 1.5
    assert convert_from_milliseconds(5400000, "mins") == 90
    assert convert_from_milliseconds(1209600000, "weeks") == 2
    assert convert_from_milliseconds(1500, "secs") == 1.5
    assert convert_from_milliseconds(1500, "milliseconds") == 1500


def test_convert_to_milliseconds():
    """Test conversion of a value in a unit to milliseconds."""
    assert convert_to_milliseconds(1.5, "hr") == 5400000
    assert convert_to_milliseconds(2, "days") == 172800000
    assert convert_to_milliseconds(1, "wk") == 604800000


def test_convert_unknown_unit():
    """Test that conversions reject units outside their family."""
    with pytest.raises(ConfigurationError):
        convert_from_milliseconds(1000, "years")
    with pytest.raises(ConfigurationError):
        convert_to_milliseconds(1, "decade")
