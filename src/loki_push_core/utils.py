"""
Timestamp utility functions for producing Loki's nanosecond timestamps.
"""

import time


NANOSECONDS_PER_MILLISECOND = 1_000_000
NANOSECONDS_PER_SECOND = 1_000_000_000

# None on interpreters without a native nanosecond clock
_time_ns = getattr(time, "time_ns", None)


def now_ns() -> int:
    """
    Get current time as Unix nanoseconds.

    Falls back to millisecond precision when no nanosecond clock is
    available; the sub-millisecond digits are then always zero.

    Returns:
        Current timestamp in nanoseconds.
    """
    if _time_ns is not None:
        return _time_ns()
    return millis_to_ns(int(time.time() * 1000))


def millis_to_ns(milliseconds: int) -> int:
    """
    Convert Unix milliseconds to nanoseconds.

    Args:
        milliseconds: Unix timestamp in milliseconds.

    Returns:
        Timestamp in nanoseconds.
    """
    return milliseconds * NANOSECONDS_PER_MILLISECOND


def seconds_to_ns(seconds: int | float) -> int:
    """
    Convert Unix seconds to nanoseconds.

    Args:
        seconds: Unix timestamp in seconds (may be fractional).

    Returns:
        Timestamp in nanoseconds.
    """
    return round(seconds * NANOSECONDS_PER_SECOND)


def ns_to_seconds(nanoseconds: int) -> int:
    """
    Convert Unix nanoseconds to seconds.

    Args:
        nanoseconds: Unix timestamp in nanoseconds.

    Returns:
        Timestamp in seconds.
    """
    return nanoseconds // NANOSECONDS_PER_SECOND
