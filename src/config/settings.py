"""
Configuration settings for the timekeeping helpers.

**Conceptual**: This module provides a strongly-typed settings object that
loads defaults from environment variables (via .env files). Settings are
validated when loaded, so a typo such as TIMEKEEPING_DATE_FORMAT=dm/ fails
at startup instead of on the first date a user types.

**Why centralized config?**
  - Single source of truth for house defaults (date format, label style).
  - Easy to test (inject fake settings instead of reading from environment).
  - Fail-fast validation (bad format spec -> clear error at startup).

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from src.timekeeping.formats import DateFormatSpec, TimeFormatSpec

# Load .env from project root (dev/local environments); a missing file is fine
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

UNIT_NAME_STYLES = ("short", "long")


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class TimekeepingSettings:
    """
    House defaults for date/time parsing and duration descriptions.

    Attributes:
        date_format: Default date format (e.g. "dmy/" for 22/4/2020).
        time_format: Default time format (e.g. "Hm:" for 2:48pm).
        unit_names: Default label style for describe_duration(),
                   "short" ("3 hrs") or "long" ("3 hours").
        decimals: Default rounding for describe_duration() (>= 0).
        include_weeks: Whether describe_duration() may answer in weeks.
    """
    date_format: str = "dmy/"
    time_format: str = "Hm:"
    unit_names: str = "short"
    decimals: int = 0
    include_weeks: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        # Both raise ConfigurationError (a ValueError) when malformed
        DateFormatSpec.from_string(self.date_format)
        TimeFormatSpec.from_string(self.time_format)
        if self.unit_names not in UNIT_NAME_STYLES:
            raise ValueError(
                f"unit_names must be one of {UNIT_NAME_STYLES}, got: {self.unit_names!r}"
            )
        if self.decimals < 0:
            raise ValueError(
                f"decimals must be non-negative, got: {self.decimals}"
            )

    @property
    def date_spec(self) -> DateFormatSpec:
        return DateFormatSpec.from_string(self.date_format)

    @property
    def time_spec(self) -> TimeFormatSpec:
        return TimeFormatSpec.from_string(self.time_format)

    @classmethod
    def from_env(cls) -> "TimekeepingSettings":
        """
        Load timekeeping settings from environment variables.

        **Environment variables** (all optional):
          - TIMEKEEPING_DATE_FORMAT: default "dmy/".
          - TIMEKEEPING_TIME_FORMAT: default "Hm:".
          - TIMEKEEPING_UNIT_NAMES: "short" (default) or "long".
          - TIMEKEEPING_DECIMALS: integer, default 0.
          - TIMEKEEPING_INCLUDE_WEEKS: "true"/"false", default "false".

        Returns:
            TimekeepingSettings object with values loaded from environment.

        Raises:
            ValueError: If any variable holds an invalid value.

        Usage example:
            >>> # In .env file:
            >>> # TIMEKEEPING_DATE_FORMAT=mdy/
            >>>
            >>> settings = TimekeepingSettings.from_env()
            >>> print(settings.date_format)  # "mdy/"
        """
        decimals_str = os.getenv("TIMEKEEPING_DECIMALS", "0")
        try:
            decimals = int(decimals_str)
        except ValueError:
            raise ValueError(
                f"TIMEKEEPING_DECIMALS must be an integer, got: {decimals_str}"
            )

        return cls(
            date_format=os.getenv("TIMEKEEPING_DATE_FORMAT", "dmy/"),
            time_format=os.getenv("TIMEKEEPING_TIME_FORMAT", "Hm:"),
            unit_names=os.getenv("TIMEKEEPING_UNIT_NAMES", "short"),
            decimals=decimals,
            include_weeks=_parse_bool(os.getenv("TIMEKEEPING_INCLUDE_WEEKS", "false")),
        )


# Cached settings; tests can inject their own via set_settings() or reset_settings()
_default_settings: Optional[TimekeepingSettings] = None


def get_settings() -> TimekeepingSettings:
    """
    Get the global settings singleton.

    Settings are loaded from environment on first call, then cached for reuse.
    Code that needs different defaults should pass explicit arguments rather
    than mutate the environment.

    Returns:
        Global TimekeepingSettings singleton.

    Raises:
        ValueError: If the environment holds invalid values.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = TimekeepingSettings.from_env()
    return _default_settings


def set_settings(settings: TimekeepingSettings) -> None:
    """Replace the global settings singleton (for testing or embedding)."""
    global _default_settings
    _default_settings = settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          reset_settings()
          monkeypatch.setenv("TIMEKEEPING_UNIT_NAMES", "long")
          assert get_settings().unit_names == "long"
      ```

    Returns:
        None (side effect: clears global settings cache).
    """
    global _default_settings
    _default_settings = None
