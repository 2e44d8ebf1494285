"""Mapping between :class:`IVEvent` and :class:`TimelineEvent`.

Extension properties are translated through ``EXTENSION_FIELDS``, one row per
registered ``X-MINDLOG-*`` key. Any other X-property passes through
unchanged in both directions.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, Optional

from mindlog.exceptions import FormatError
from mindlog.ical.extensions import Extension
from mindlog.ical.formatters import (
    add_minutes,
    current_timestamp,
    format_date_only,
    format_date_time,
    format_trigger,
    parse_date_value,
    parse_duration,
)
from mindlog.models.event import EventType, QuestionCategory, TimelineEvent
from mindlog.models.ical import (
    ICalAlarmAction,
    ICalEventStatus,
    IVAlarm,
    IVEvent,
)
from mindlog.reminders import AT_EVENT_TIME, NO_REMINDER, effective_reminder_offset

logger = logging.getLogger(__name__)


def _decode_type(value: str) -> EventType:
    return EventType(value.strip().lower())


def _encode_type(value: EventType) -> str:
    return value.value.upper()


@dataclass(frozen=True)
class FieldMapping:
    """One extension property and the TimelineEvent attribute it carries."""

    extension: Extension
    attribute: str
    decode: Callable[[str], Any] = str
    encode: Callable[[Any], str] = str


EXTENSION_FIELDS: tuple[FieldMapping, ...] = (
    FieldMapping(Extension.TYPE, "type", _decode_type, _encode_type),
    FieldMapping(
        Extension.QUESTION_CATEGORY,
        "question_category",
        lambda v: QuestionCategory(v.strip().lower()),
        lambda v: v.value,
    ),
    FieldMapping(Extension.QUESTION_ID, "question_id"),
    FieldMapping(Extension.QUESTION_TEXT, "question_text"),
    FieldMapping(Extension.DIARY_CONTENT, "diary_content"),
    FieldMapping(Extension.LUNAR_DATE, "lunar_date"),
    FieldMapping(Extension.LUNAR_FESTIVAL, "lunar_festival"),
    FieldMapping(Extension.MOOD_COLOR, "mood_color"),
    FieldMapping(Extension.CONFLICT_OF, "conflict_of"),
)

_MAPPED_NAMES = {mapping.extension.value for mapping in EXTENSION_FIELDS}


def decode_extensions(x_props: dict[str, str]) -> tuple[dict[str, Any], dict[str, str]]:
    """Split X-properties into TimelineEvent attributes and pass-through entries.

    A registered property whose value cannot be decoded is kept as a
    pass-through entry so the original text is not lost.
    """
    attributes: dict[str, Any] = {}
    passthrough: dict[str, str] = {}
    by_name = {mapping.extension.value: mapping for mapping in EXTENSION_FIELDS}

    for name, value in x_props.items():
        mapping = by_name.get(name.upper())
        if mapping is None:
            passthrough[name] = value
            continue
        try:
            attributes[mapping.attribute] = mapping.decode(value)
        except ValueError:
            logger.warning(f"Keeping undecodable {name} value {value!r} as-is")
            passthrough[name] = value

    return attributes, passthrough


def encode_extensions(event: TimelineEvent) -> dict[str, str]:
    """X-properties for an event: pass-through entries, then mapped attributes."""
    x_props = {
        name: value
        for name, value in event.x_props.items()
        if name.upper() not in _MAPPED_NAMES
    }
    for mapping in EXTENSION_FIELDS:
        value = getattr(event, mapping.attribute)
        if value is not None:
            x_props[mapping.extension.value] = mapping.encode(value)
    return x_props


def reminder_minutes_from_alarms(alarms: list[IVAlarm]) -> int:
    """Reminder picker value for the first relative alarm before the start.

    Alarms after the start and absolute triggers have no picker equivalent
    and are skipped. A zero offset maps back to the "on time" value.
    """
    for alarm in alarms:
        offset = alarm.trigger_offset()
        if offset is None or offset.total_seconds() > 0:
            continue
        minutes = int(abs(offset.total_seconds()) // 60)
        return minutes if minutes > 0 else AT_EVENT_TIME
    return NO_REMINDER


def _wall_clock(value: date | datetime) -> tuple[date, Optional[time]]:
    if isinstance(value, datetime):
        return value.date(), value.time().replace(microsecond=0)
    return value, None


def decode_event(ivevent: IVEvent) -> TimelineEvent:
    """Project an IVEvent onto the application model.

    The application model holds a single calendar day, so an end on a later
    date keeps only its wall-clock time.
    """
    day, start_time = _wall_clock(parse_date_value(ivevent.dt_start))

    end_time = None
    if start_time is not None:
        if ivevent.dt_end is not None:
            _, end_time = _wall_clock(parse_date_value(ivevent.dt_end))
        elif ivevent.duration is not None:
            minutes = int(parse_duration(ivevent.duration).total_seconds() // 60)
            end_time = add_minutes(start_time, minutes)

    attributes, passthrough = decode_extensions(ivevent.x_props)
    attributes.setdefault("type", EventType.SCHEDULE)

    return TimelineEvent(
        id=ivevent.uid,
        date=day,
        start_time=start_time,
        end_time=end_time,
        title=ivevent.summary,
        description=ivevent.description,
        is_completed=ivevent.status == ICalEventStatus.COMPLETED,
        is_cancelled=ivevent.status == ICalEventStatus.CANCELLED,
        reminder_minutes=reminder_minutes_from_alarms(ivevent.alarms),
        x_props=passthrough,
        **attributes,
    )


def _status_for(event: TimelineEvent) -> ICalEventStatus:
    if event.is_cancelled:
        return ICalEventStatus.CANCELLED
    if event.is_completed:
        return ICalEventStatus.COMPLETED
    return ICalEventStatus.CONFIRMED


def encode_event(
    event: TimelineEvent,
    base: IVEvent | None = None,
    now: datetime | None = None,
) -> IVEvent:
    """Build the IVEvent for an application event.

    Without ``base`` a first revision (sequence 0) is created. With ``base``
    the result is ``base.revise(...)``: properties the application model
    does not carry (RRULE, LOCATION, extra alarms...) are kept.

    Raises:
        FormatError: If ``event`` belongs to a different UID than ``base``
    """
    if event.start_time is not None:
        dt_start = format_date_time(event.date, event.start_time)
    else:
        dt_start = format_date_only(event.date)
    dt_end = None
    if event.start_time is not None and event.end_time is not None:
        dt_end = format_date_time(event.date, event.end_time)

    alarms = []
    if event.reminder_minutes > 0:
        offset = effective_reminder_offset(event.reminder_minutes)
        alarms.append(
            IVAlarm(
                action=ICalAlarmAction.DISPLAY,
                trigger=format_trigger(offset),
                description=event.title,
            )
        )

    fields = {
        "dt_start": dt_start,
        "dt_end": dt_end,
        "status": _status_for(event),
        "summary": event.title,
        "description": event.description,
        "x_props": encode_extensions(event),
    }

    if base is None:
        return IVEvent(
            uid=event.id,
            dt_stamp=current_timestamp(now),
            sequence=0,
            alarms=alarms,
            **fields,
        )

    if base.uid != event.id:
        raise FormatError(f"Event {event.id!r} cannot revise {base.uid!r}")
    if event.start_time is None and base.is_all_day and dt_start == base.dt_start:
        # Multi-day all-day spans are not represented in the application model
        del fields["dt_end"]
    elif dt_end is not None or dt_start != base.dt_start:
        # The application end time replaces any duration on the base event
        fields["duration"] = None
    # Keep alarms the reminder picker cannot express
    kept = [
        alarm
        for alarm in base.alarms
        if reminder_minutes_from_alarms([alarm]) == NO_REMINDER
    ]
    fields["alarms"] = alarms + kept
    return base.revise(now=now, **fields)
