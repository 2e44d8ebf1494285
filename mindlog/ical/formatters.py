"""Conversions between application date/time values and RFC 5545 text.

Application values are calendar dates (``YYYY-MM-DD``) and 24-hour wall-clock
times (``HH:mm``), either as strings or as ``datetime.date``/``datetime.time``
objects. iCalendar values are the compact floating forms ``YYYYMMDD`` and
``YYYYMMDDTHHMMSS``; no timezone suffix is ever appended on output.
"""

import re
from datetime import date, datetime, time, timedelta

from icalendar import vDate, vDatetime, vDuration

from mindlog.constants import UID_DOMAIN
from mindlog.exceptions import FormatError

_DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_TIME_PATTERN = re.compile(r"(\d{2}):(\d{2})")
_COMPACT_DATE_PATTERN = re.compile(r"\d{8}")

COMPACT_DATETIME_FORMAT = "%Y%m%dT%H%M%S"
COMPACT_DATE_FORMAT = "%Y%m%d"


def coerce_date(value: date | str) -> date:
    """Return ``value`` as a date, parsing ``YYYY-MM-DD`` strings."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = _DATE_PATTERN.fullmatch(value)
        if match:
            year, month, day = (int(part) for part in match.groups())
            try:
                return date(year, month, day)
            except ValueError as e:
                raise FormatError(f"Invalid date: {value!r} ({e})") from e
    raise FormatError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def coerce_time(value: time | str) -> time:
    """Return ``value`` as a time, parsing 24-hour ``HH:mm`` strings."""
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        match = _TIME_PATTERN.fullmatch(value)
        if match:
            hour, minute = int(match.group(1)), int(match.group(2))
            if 0 <= hour <= 23 and 0 <= minute <= 59:
                return time(hour, minute)
    raise FormatError(f"Invalid time: {value!r} (expected HH:mm)")


def format_date_time(day: date | str, wall_time: time | str) -> str:
    """Format a date and wall-clock time as ``YYYYMMDDTHHMMSS``.

    The result is a floating local time: no ``Z`` or TZID is attached.

    Raises:
        FormatError: If either value is malformed
    """
    combined = datetime.combine(coerce_date(day), coerce_time(wall_time))
    return combined.strftime(COMPACT_DATETIME_FORMAT)


def format_date_only(day: date | str) -> str:
    """Format a calendar date as ``YYYYMMDD`` (all-day events)."""
    return coerce_date(day).strftime(COMPACT_DATE_FORMAT)


def current_timestamp(now: datetime | None = None) -> str:
    """Return the current moment (or ``now``) as ``YYYYMMDDTHHMMSS``.

    Always read at call time so each export run gets a fresh DTSTAMP.
    """
    moment = now if now is not None else datetime.now()
    return moment.strftime(COMPACT_DATETIME_FORMAT)


def derive_uid(event_id: str, domain: str = UID_DOMAIN) -> str:
    """Map an internal event id to a globally namespaced UID.

    Deterministic: re-exporting the same event yields the same UID, so
    consumers update their copy instead of duplicating it.
    """
    if not event_id:
        raise FormatError("Cannot derive a UID from an empty event id")
    return f"{event_id}@{domain}"


def add_minutes(wall_time: time | str, minutes: int) -> time:
    """Add minutes to a wall-clock time, wrapping the hour modulo 24.

    The date is deliberately not involved: 23:30 + 60 gives 00:30.
    """
    start = coerce_time(wall_time)
    total = start.hour * 60 + start.minute + minutes
    return time((total // 60) % 24, total % 60)


def format_trigger(minutes: int) -> str:
    """Format a before-start alarm offset as ``-PT<N>M``."""
    if minutes < 0:
        raise FormatError(f"Alarm offset must not be negative: {minutes}")
    return f"-PT{minutes}M"


def is_date_value(value: str) -> bool:
    """True if ``value`` is a compact date (``YYYYMMDD``) rather than a date-time."""
    return bool(_COMPACT_DATE_PATTERN.fullmatch(value))


def parse_date_value(value: str) -> date | datetime:
    """Parse a compact iCalendar DATE or DATE-TIME value."""
    try:
        if is_date_value(value):
            return vDate.from_ical(value)
        return vDatetime.from_ical(value)
    except ValueError as e:
        raise FormatError(f"Invalid iCalendar date value: {value!r}") from e


def parse_duration(value: str) -> timedelta:
    """Parse an iCalendar DURATION such as ``-PT15M`` or ``P1D``."""
    try:
        return vDuration.from_ical(value)
    except ValueError as e:
        raise FormatError(f"Invalid iCalendar duration: {value!r}") from e
