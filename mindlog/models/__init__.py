"""Pydantic models for MindLog calendar data."""

from mindlog.models.event import EventType, QuestionCategory, TimelineEvent
from mindlog.models.ical import (
    ICalAlarmAction,
    ICalEventStatus,
    ICalMethod,
    ICalTransparency,
    IVAlarm,
    IVCalendar,
    IVEvent,
    IVTimezone,
)

__all__ = [
    "EventType",
    "QuestionCategory",
    "TimelineEvent",
    "ICalAlarmAction",
    "ICalEventStatus",
    "ICalMethod",
    "ICalTransparency",
    "IVAlarm",
    "IVCalendar",
    "IVEvent",
    "IVTimezone",
]
