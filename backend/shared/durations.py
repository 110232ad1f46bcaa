"""
Duration strings used for token lifetimes.

Follows the notation of the ``ms`` package, which the product's environment
files have always been written against: an amount (decimals allowed)
optionally followed by a unit, with or without a space (``7d``, ``1.5h``,
``2 days``, ``1y``). An amount with no unit is in milliseconds, so ``3600``
is 3.6 seconds.
"""

import re
from datetime import timedelta

_DURATION_RE = re.compile(
    r"^\s*(\d*\.?\d+)\s*"
    r"(milliseconds?|msecs?|ms|seconds?|secs?|s|minutes?|mins?|m|"
    r"hours?|hrs?|h|days?|d|weeks?|w|years?|yrs?|y)?\s*$",
    re.IGNORECASE,
)

_SECOND = 1000
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_YEAR = 365.25 * _DAY

_UNIT_MS = {
    "": 1, "ms": 1, "msec": 1, "msecs": 1, "millisecond": 1, "milliseconds": 1,
    "s": _SECOND, "sec": _SECOND, "secs": _SECOND, "second": _SECOND, "seconds": _SECOND,
    "m": _MINUTE, "min": _MINUTE, "mins": _MINUTE, "minute": _MINUTE, "minutes": _MINUTE,
    "h": _HOUR, "hr": _HOUR, "hrs": _HOUR, "hour": _HOUR, "hours": _HOUR,
    "d": _DAY, "day": _DAY, "days": _DAY,
    "w": _WEEK, "week": _WEEK, "weeks": _WEEK,
    "y": _YEAR, "yr": _YEAR, "yrs": _YEAR, "year": _YEAR, "years": _YEAR,
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string into a timedelta.

    Raises:
        ValueError: If the string is malformed, negative, has an unknown
            unit, or is shorter than one second (token expiry has
            one-second resolution).
    """
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    unit = (match.group(2) or "").lower()
    duration = timedelta(milliseconds=float(match.group(1)) * _UNIT_MS[unit])
    if duration < timedelta(seconds=1):
        raise ValueError(f"Duration must be at least one second: {value!r}")
    return duration
