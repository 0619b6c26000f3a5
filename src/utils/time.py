"""
Clock abstractions and clock-skew correction.

This module provides a simple, testable way to obtain "now" via a clock object
rather than calling datetime.now() directly. Tests freeze time to a specific
timestamp; production code uses the real local clock, optionally corrected
for the difference between the local computer's clock and a server's clock.

All times here are naive local wall-clock datetimes (no tzinfo), matching the
rest of the timekeeping package.

**Clock skew**: A user's computer clock is often a few seconds or minutes off.
When a server reports its current Unix timestamp, the difference
(client minus server, in milliseconds) can be measured once and subtracted
from later local readings:
  - positive offset: the client is ahead of the server
  - negative offset: the client is behind the server

Two ways to use the offset:
  - Explicit (preferred): keep the offset yourself and wrap the real clock in
    an OffsetClock, or call correct_time() on any local reading.
  - Process-wide: record_server_time() stores the offset in a module global
    and corrected_now() applies it. There is ONE global value for the whole
    process, last write wins; it is not per user or per request.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Clock(Protocol):
    """
    Abstract time source protocol.

    **Conceptual**: A Clock is any object that can answer the question "what time
    is it right now?" By depending on this abstraction instead of directly calling
    datetime.now(), code becomes testable and deterministic.

    **Usage**: Consumers should accept a Clock instance (injected via constructor
    or function parameter) and call clock.now() whenever they need the current time.
    In production, pass a RealClock (or an OffsetClock around one); in tests,
    pass a FrozenClock.

    **Example**:
        def parse_shift_start(text: str, clock: Clock):
            return parse_time(text, "hm:", clock=clock)

        # In production:
        parse_shift_start("9:30", RealClock())

        # In tests:
        parse_shift_start("9:30", FrozenClock(datetime(2020, 4, 22)))
    """

    def now(self) -> datetime:
        """
        Return the current time according to this clock.

        Returns:
            Naive datetime representing local wall-clock "now".
        """
        ...


class RealClock:
    """
    Clock that returns the actual current local wall-clock time.

    **Usage**:
        clock = RealClock()
        current_time = clock.now()  # Returns current local time, no tzinfo
    """

    def now(self) -> datetime:
        """Return the current local time from the system clock."""
        return datetime.now()


class FrozenClock:
    """
    Clock that always returns a fixed timestamp (for deterministic tests).

    **Usage**:
        clock = FrozenClock(datetime(2020, 4, 22, 14, 48))
        current_time = clock.now()  # Always returns 2020-04-22 14:48:00
    """

    def __init__(self, fixed_now: datetime):
        """
        Initialize a FrozenClock with a fixed timestamp.

        Args:
            fixed_now: The datetime to return on every call to now().
        """
        self._fixed_now = fixed_now

    def now(self) -> datetime:
        """Return the configured fixed timestamp."""
        return self._fixed_now


class OffsetClock:
    """
    Clock that corrects another clock by a known client-minus-server offset.

    **Conceptual**: This is the explicit, injectable form of clock-skew
    correction. Each caller (user session, request handler, test) can own its
    own OffsetClock, so nothing is shared between them.

    **Usage**:
        offset_ms = measure_clock_offset(server_unix_seconds)
        clock = OffsetClock(offset_ms)
        clock.now()  # local time with the skew removed
    """

    def __init__(self, offset_ms: int, base: Optional[Clock] = None):
        """
        Args:
            offset_ms: Client minus server, in milliseconds.
            base: Clock to correct (default: RealClock).
        """
        self.offset_ms = offset_ms
        self._base = base or RealClock()

    def now(self) -> datetime:
        """Return the base clock's reading minus the offset."""
        return correct_time(self._base.now(), self.offset_ms)


def get_real_clock() -> Clock:
    """Factory function to create a RealClock instance."""
    return RealClock()


def get_frozen_clock(fixed_now: datetime) -> Clock:
    """
    Factory function to create a FrozenClock with a given timestamp.

    Args:
        fixed_now: The datetime to freeze at.

    Returns:
        FrozenClock instance configured with fixed_now.
    """
    return FrozenClock(fixed_now)


def measure_clock_offset(server_unix_seconds: float, clock: Optional[Clock] = None) -> int:
    """
    Measure how far the local clock is from a server-reported time.

    Call this as soon as possible after receiving the timestamp from the
    server; any delay is counted as skew.

    Args:
        server_unix_seconds: Current Unix timestamp from the server (seconds
            since 1970).
        clock: Local clock to compare against (default: RealClock).

    Returns:
        Client minus server in milliseconds (positive: client is ahead).
    """
    client_time = (clock or RealClock()).now()
    server_time = datetime.fromtimestamp(server_unix_seconds)
    return round((client_time - server_time) / timedelta(milliseconds=1))


def correct_time(local_time: datetime, offset_ms: int) -> datetime:
    """Remove a client-minus-server offset from a local clock reading."""
    return local_time - timedelta(milliseconds=offset_ms)


# Process-wide offset written by record_server_time(), read by corrected_now().
# A single value for the whole process: last write wins.
_clock_offset_ms: Optional[int] = None


def record_server_time(server_unix_seconds: float, clock: Optional[Clock] = None) -> int:
    """
    Measure the clock offset against a server timestamp and remember it
    process-wide for corrected_now().

    Returns:
        The measured offset in milliseconds (client minus server).
    """
    global _clock_offset_ms

    _clock_offset_ms = measure_clock_offset(server_unix_seconds, clock)
    logger.debug("Recorded client clock offset of %d ms", _clock_offset_ms)
    return _clock_offset_ms


def get_clock_offset() -> Optional[int]:
    """Return the process-wide offset in milliseconds, or None if not recorded."""
    return _clock_offset_ms


def corrected_now(clock: Optional[Clock] = None) -> datetime:
    """
    Get the current time, adjusted for the recorded client clock offset.

    Falls back to the raw local clock until record_server_time() has been
    called.
    """
    local_time = (clock or RealClock()).now()
    if _clock_offset_ms is None:
        return local_time
    return correct_time(local_time, _clock_offset_ms)


def reset_clock_offset() -> None:
    """
    Forget the process-wide clock offset (for testing).

    Returns:
        None (side effect: clears the global offset).
    """
    global _clock_offset_ms
    _clock_offset_ms = None
