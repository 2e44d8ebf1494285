"""Reminder scheduling contract and the "at event time" convention.

The reminder picker offers ``1`` as "on time". Both the alarm encoder
(``TRIGGER:-PT0M``) and the local reminder scheduler treat that value as a
zero-minute offset via :func:`effective_reminder_offset`.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable, Protocol

from mindlog.exceptions import FormatError
from mindlog.ical.formatters import coerce_date, coerce_time

logger = logging.getLogger(__name__)

NO_REMINDER = 0
AT_EVENT_TIME = 1


@dataclass(frozen=True)
class ReminderOption:
    """Entry of the reminder picker."""

    label: str
    minutes: int


REMINDER_OPTIONS = (
    ReminderOption("None", NO_REMINDER),
    ReminderOption("On time", AT_EVENT_TIME),
    ReminderOption("5 minutes before", 5),
    ReminderOption("10 minutes before", 10),
    ReminderOption("30 minutes before", 30),
    ReminderOption("1 hour before", 60),
)


def effective_reminder_offset(reminder_minutes: int) -> int:
    """Minutes before the start at which a reminder fires."""
    if reminder_minutes < 0:
        raise FormatError(f"Reminder minutes must not be negative: {reminder_minutes}")
    if reminder_minutes == AT_EVENT_TIME:
        return 0
    return reminder_minutes


def calculate_reminder_trigger(
    day: date | str, wall_time: time | str, reminder_minutes: int
) -> datetime:
    """Absolute local moment at which the reminder for an event fires."""
    start = datetime.combine(coerce_date(day), coerce_time(wall_time))
    return start - timedelta(minutes=effective_reminder_offset(reminder_minutes))


class ReminderScheduler(Protocol):
    """Protocol for local reminder schedulers."""

    def schedule(
        self, event_id: str, title: str, body: str, trigger_at: datetime
    ) -> str | None:
        """Schedule a reminder; returns an opaque handle, or None if not scheduled."""
        ...

    def cancel(self, handle: str) -> None:
        """Cancel a previously scheduled reminder."""
        ...


@dataclass(frozen=True)
class ScheduledReminder:
    """Reminder held by :class:`InMemoryReminderScheduler`."""

    handle: str
    event_id: str
    title: str
    body: str
    trigger_at: datetime


class InMemoryReminderScheduler:
    """Reminder scheduler that keeps pending reminders in process memory."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._pending: dict[str, ScheduledReminder] = {}

    def schedule(
        self, event_id: str, title: str, body: str, trigger_at: datetime
    ) -> str | None:
        """Schedule a reminder unless its trigger time has already passed."""
        if trigger_at <= self._clock():
            logger.info(f"Not scheduling reminder for {event_id}: {trigger_at} is in the past")
            return None

        handle = str(uuid.uuid4())
        self._pending[handle] = ScheduledReminder(
            handle=handle,
            event_id=event_id,
            title=title,
            body=body,
            trigger_at=trigger_at,
        )
        logger.info(f"Scheduled reminder {handle} for {trigger_at.isoformat()}")
        return handle

    def cancel(self, handle: str) -> None:
        if self._pending.pop(handle, None) is None:
            logger.debug(f"Reminder {handle} was not pending")
            return
        logger.info(f"Cancelled reminder {handle}")

    def pending(self) -> list[ScheduledReminder]:
        """Pending reminders ordered by trigger time."""
        return sorted(self._pending.values(), key=lambda r: r.trigger_at)
