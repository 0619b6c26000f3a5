"""
Tests for src/timekeeping/parsing.py

**Purpose**: Verify that date and time parsing doubles as validation:
  - Valid input in every field order parses to the same value
  - Invalid user data returns INVALID (never raises)
  - Malformed format specs raise ConfigurationError
  - Leap-year rule and month lengths are enforced
  - 12-hour clock normalisation (12am -> 0, pm + 12)
"""

from datetime import date, datetime, time

import pytest

from src.timekeeping.errors import ConfigurationError
from src.timekeeping.parsing import (
    INVALID,
    Invalid,
    check_date,
    days_in_month,
    is_invalid,
    is_leap_year,
    merge_date_time,
    parse_date,
    parse_time,
)
from src.utils.time import FrozenClock

TODAY = datetime(2020, 4, 22, 9, 15, 30, 123456)


@pytest.fixture
def clock():
    return FrozenClock(TODAY)


# ============================================================================
# INVALID sentinel
# ============================================================================

def test_invalid_is_falsy_singleton():
    """Test that INVALID is a single falsy value."""
    assert not INVALID
    assert Invalid() is INVALID
    assert repr(INVALID) == "INVALID"
    assert is_invalid(INVALID)
    assert not is_invalid(False)


# ============================================================================
# Calendar helpers
# ============================================================================

@pytest.mark.parametrize("year, expected", [
    (2000, True), (2004, True), (2020, True),
    (1900, False), (2001, False), (2100, False),
])
def test_is_leap_year(year, expected):
    """Test the Gregorian leap-year rule."""
    assert is_leap_year(year) is expected


def test_days_in_month():
    """Test month lengths, including February in leap and common years."""
    assert days_in_month(2000, 2) == 29
    assert days_in_month(2001, 2) == 28
    assert days_in_month(2001, 4) == 30
    assert days_in_month(2001, 12) == 31
    with pytest.raises(ValueError):
        days_in_month(2001, 13)


@pytest.mark.parametrize("month, day, year, expected", [
    (12, 31, 2000, True),
    (2, 29, 2001, False),
    (3, 31, 2008, True),
    (1, 390, 2000, False),
    (0, 1, 2000, False),
    (1, 0, 2000, False),
    (1, 1, 0, False),
    (1, 1, 32768, False),
])
def test_check_date(month, day, year, expected):
    """Test numeric date validation."""
    assert check_date(month, day, year) is expected


# ============================================================================
# parse_date()
# ============================================================================

@pytest.mark.parametrize("text, date_format", [
    ("22/4/2020", "dmy/"),
    ("4/22/2020", "mdy/"),
    ("2020/4/22", "ymd/"),
    ("22.04.2020", "dmy."),
    ("04-22-2020", "mdy-"),
    ("2020 04 22", "ymd "),
])
def test_parse_date_all_orders_agree(text, date_format):
    """Test that every field order and delimiter gives the same date."""
    assert parse_date(text, date_format) == date(2020, 4, 22)


def test_parse_date_leap_years():
    """Test February 29 in leap and common years."""
    assert parse_date("29/2/2000", "dmy/") == date(2000, 2, 29)
    assert parse_date("29/2/2001", "dmy/") is INVALID
    assert parse_date("29/2/1900", "dmy/") is INVALID
    assert parse_date("28/2/2001", "dmy/") == date(2001, 2, 28)


@pytest.mark.parametrize("text", [
    "",               # empty
    "22/4",           # too few parts
    "22/4/2020/1",    # too many parts
    "22-4-2020",      # wrong delimiter
    "22/13/2020",     # month out of range
    "31/4/2020",      # April has 30 days
    "0/4/2020",       # day 0
    "22/0/2020",      # month 0
    "aa/4/2020",      # not a number
    "-1/4/2020",      # negative
    " 22/4/2020",     # surrounding space
])
def test_parse_date_invalid_data(text):
    """Test that bad user data returns INVALID instead of raising."""
    assert parse_date(text, "dmy/") is INVALID


def test_parse_date_configuration_errors():
    """Test that malformed formats raise even for valid-looking data."""
    with pytest.raises(ConfigurationError):
        parse_date("22/4/2020", "dmy")
    with pytest.raises(ConfigurationError):
        parse_date("22/4/2020", "dmy5")
    with pytest.raises(ConfigurationError):
        parse_date("22/4/2020", "xyz/")


# ============================================================================
# parse_time()
# ============================================================================

def test_parse_time_24_hour(clock):
    """Test 24-hour parsing anchored to the clock's date."""
    assert parse_time("14:48", "hm:", clock) == datetime(2020, 4, 22, 14, 48, 0)
    assert parse_time("14.48.23", "hms.", clock) == datetime(2020, 4, 22, 14, 48, 23)
    assert parse_time("0:00", "hm:", clock) == datetime(2020, 4, 22, 0, 0, 0)
    assert parse_time("23:59:59", "hms:", clock) == datetime(2020, 4, 22, 23, 59, 59)


def test_parse_time_accepts_unpadded_fields(clock):
    """Test that fields don't need zero-padding."""
    assert parse_time("9:5:7", "hms:", clock) == datetime(2020, 4, 22, 9, 5, 7)


@pytest.mark.parametrize("text, expected_hour", [
    ("12:00am", 0),
    ("12:30 AM", 0),
    ("1:00am", 1),
    ("11:59am", 11),
    ("12:00pm", 12),
    ("1:00 pm", 13),
    ("2:48PM", 14),
    ("11:00pm", 23),
])
def test_parse_time_meridiem_normalisation(clock, text, expected_hour):
    """Test 12am -> 0 and pm hours other than 12 -> +12."""
    assert parse_time(text, "Hm:", clock).hour == expected_hour


@pytest.mark.parametrize("text, time_format", [
    ("", "hm:"),
    ("24:00", "hm:"),        # hour out of 24-hour range
    ("12:60", "hm:"),        # minute out of range
    ("12:30:60", "hms:"),    # second out of range
    ("12:30", "hms:"),       # missing seconds
    ("12:30:15", "hm:"),     # unexpected seconds
    ("123:30", "hm:"),       # three-digit hour
    ("12-30", "hm:"),        # wrong delimiter
    ("2:48", "Hm:"),         # missing am/pm
    ("0:30am", "Hm:"),       # hour 0 in 12-hour mode
    ("13:00pm", "Hm:"),      # hour 13 in 12-hour mode
    ("2:48pm", "hm:"),       # am/pm in 24-hour mode
])
def test_parse_time_invalid_data(clock, text, time_format):
    """Test that bad user data returns INVALID instead of raising."""
    assert parse_time(text, time_format, clock) is INVALID


def test_parse_time_clears_microseconds(clock):
    """Test that only hour/minute/second come from the input."""
    result = parse_time("10:00", "hm:", clock)

    assert result.microsecond == 0
    assert result.date() == TODAY.date()


def test_parse_time_configuration_error(clock):
    """Test that a malformed time format raises."""
    with pytest.raises(ConfigurationError):
        parse_time("14:48", "hx:", clock)


def test_parse_time_default_clock_uses_today():
    """Test that without a clock the result lands on today's date."""
    result = parse_time("10:30", "hm:")

    assert result.date() == datetime.now().date()


# ============================================================================
# merge_date_time()
# ============================================================================

def test_merge_date_time_combines_parts(clock):
    """Test joining a parsed date and a parsed time."""
    parsed_date = parse_date("22/4/2020", "dmy/")
    parsed_time = parse_time("2:48:23pm", "Hms:", FrozenClock(datetime(1999, 1, 1)))

    assert merge_date_time(parsed_date, parsed_time) == datetime(2020, 4, 22, 14, 48, 23)


def test_merge_date_time_accepts_datetime_and_time():
    """Test that the date side may be a datetime and the time side a time."""
    merged = merge_date_time(datetime(2020, 4, 22, 23, 59), time(8, 30, 15, 500))

    assert merged == datetime(2020, 4, 22, 8, 30, 15, 500)


def test_merge_date_time_rejects_invalid():
    """Test that passing INVALID (or other types) is a configuration error."""
    with pytest.raises(ConfigurationError, match="combining date and time"):
        merge_date_time(INVALID, datetime(2020, 4, 22))
    with pytest.raises(ConfigurationError):
        merge_date_time(date(2020, 4, 22), "14:48")
