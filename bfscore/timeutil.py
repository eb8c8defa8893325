"""Date and time helpers: broken-down times, a portable timegm and timestamp parsing."""

from __future__ import annotations

import functools
import re
import time
from dataclasses import dataclass

__all__ = [
    "BrokenTime",
    "localtime",
    "gmtime",
    "mktime",
    "timegm",
    "parse_timestamp",
]

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_TIME_MIN = -(2**63)
_TIME_MAX = 2**63 - 1

_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_TIMESTAMP_RE = re.compile(
    r"(?P<year>[0-9]{4})-?(?P<month>[0-9]{2})-?(?P<day>[0-9]{2})"
    r"(?:T?(?P<hour>[0-9]{2})"
    r"(?::?(?P<minute>[0-9]{2})"
    r"(?::?(?P<second>[0-9]{2})"
    r"(?:(?P<utc>Z)|(?P<sign>[+-])(?P<tz_hour>[0-9]{2})(?::?(?P<tz_minute>[0-9]{2}))?)?"
    r")?)?)?"
)


@dataclass(frozen=True)
class BrokenTime:
    """A broken-down calendar time with the same conventions as ``struct tm``.

    ``year`` counts from 1900, ``month`` and ``yearday`` from 0, ``weekday``
    from Sunday = 0.  ``isdst`` is positive, zero, or negative for unknown.
    """

    year: int = 70
    month: int = 0
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    weekday: int = 0
    yearday: int = 0
    isdst: int = -1


@functools.lru_cache(maxsize=None)
def _tzset() -> None:
    """Initialise the time zone once, as POSIX asks before localtime_r()."""
    tzset = getattr(time, "tzset", None)
    if tzset is not None:
        tzset()


def _from_struct(result: time.struct_time) -> BrokenTime:
    return BrokenTime(
        year=result.tm_year - 1900,
        month=result.tm_mon - 1,
        day=result.tm_mday,
        hour=result.tm_hour,
        minute=result.tm_min,
        second=result.tm_sec,
        weekday=(result.tm_wday + 1) % 7,
        yearday=result.tm_yday - 1,
        isdst=result.tm_isdst,
    )


def localtime(timestamp: int) -> BrokenTime:
    """Convert a timestamp to local broken-down time."""
    _tzset()
    return _from_struct(time.localtime(timestamp))


def gmtime(timestamp: int) -> BrokenTime:
    """Convert a timestamp to UTC broken-down time."""
    _tzset()
    return _from_struct(time.gmtime(timestamp))


def mktime(tm: BrokenTime) -> int:
    """Convert a local broken-down time (fields may be out of range) to a timestamp.

    Raises OverflowError if the time cannot be represented.
    """
    _tzset()
    fields = (
        tm.year + 1900,
        tm.month + 1,
        tm.day,
        tm.hour,
        tm.minute,
        tm.second,
        (tm.weekday - 1) % 7,
        tm.yearday + 1,
        tm.isdst,
    )
    return int(time.mktime(fields))


def _safe_add(value: int, delta: int) -> int:
    result = value + delta
    if not _INT_MIN <= result <= _INT_MAX:
        raise OverflowError("time value out of range")
    return result


def _wrap(value: int, limit: int, carry_into: int) -> tuple[int, int]:
    carry = value // limit
    return value - carry * limit, _safe_add(carry_into, carry)


def _month_length(year: int, month: int) -> int:
    length = _MONTH_LENGTHS[month]
    if month == 1 and year % 4 == 0 and (year % 100 != 0 or (year + 300) % 400 == 0):
        length += 1
    return length


def timegm(tm: BrokenTime) -> tuple[int, BrokenTime]:
    """Convert a UTC broken-down time to a timestamp, the inverse of gmtime().

    Returns the timestamp together with the normalised broken-down time.
    Raises OverflowError if a field or the result overflows.
    """
    second, minute = _wrap(tm.second, 60, tm.minute)
    minute, hour = _wrap(minute, 60, tm.hour)
    hour, day = _wrap(hour, 24, tm.day)

    # The month must be known before the days of the month can be wrapped
    month, year = _wrap(tm.month, 12, tm.year)

    if day < 1:
        while day < 1:
            month, year = _wrap(month - 1, 12, year)
            day += _month_length(year, month)
    else:
        while day > (days := _month_length(year, month)):
            day -= days
            month, year = _wrap(month + 1, 12, year)

    yearday = sum(_month_length(year, m) for m in range(month)) + day - 1

    leap_days = (year - 69) // 4 - (year - 1) // 100 + (year + 299) // 400
    epoch_days = 365 * (year - 70) + leap_days + yearday
    weekday = (epoch_days + 4) % 7

    epoch_time = second + 60 * (minute + 60 * (hour + 24 * epoch_days))
    if not _TIME_MIN <= epoch_time <= _TIME_MAX:
        raise OverflowError("time value out of range")

    normalized = BrokenTime(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        weekday=weekday,
        yearday=yearday,
        isdst=0,
    )
    return epoch_time, normalized


def parse_timestamp(text: str) -> int:
    """Parse an ISO 8601-style timestamp into seconds since the epoch.

    Timestamps without a zone are taken as local time.  Raises ValueError for
    malformed input and OverflowError for unrepresentable times.
    """
    match = _TIMESTAMP_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")

    def field(name: str) -> int:
        value = match.group(name)
        return int(value) if value is not None else 0

    tm = BrokenTime(
        year=field("year") - 1900,
        month=field("month") - 1,
        day=field("day"),
        hour=field("hour"),
        minute=field("minute"),
        second=field("second"),
        isdst=-1,
    )

    if match.group("utc") is None and match.group("sign") is None:
        return mktime(tm)

    seconds, _ = timegm(tm)
    offset = 60 * field("tz_hour") + field("tz_minute")
    if match.group("sign") == "-":
        return seconds - offset
    return seconds + offset