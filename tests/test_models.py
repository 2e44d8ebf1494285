"""Tests for the iCalendar domain model and the application event model."""

from datetime import date, datetime, time

import pytest
from pydantic import ValidationError as PydanticValidationError

from mindlog.exceptions import ValidationError
from mindlog.models.event import EventType, TimelineEvent
from mindlog.models.ical import (
    ICalEventStatus,
    IVAlarm,
    IVCalendar,
    IVEvent,
)


def make_ivevent(**overrides) -> IVEvent:
    fields = {
        "uid": "abc",
        "dt_stamp": "20241214T080000",
        "dt_start": "20241214T090000",
        "dt_end": "20241214T100000",
        "status": ICalEventStatus.CONFIRMED,
        "summary": "Run",
    }
    fields.update(overrides)
    return IVEvent(**fields)


def test_ivevent_uid_is_immutable():
    """Assigning a new uid raises."""
    event = make_ivevent()
    with pytest.raises(PydanticValidationError):
        event.uid = "other"


def test_ivevent_all_day():
    """DATE-valued DTSTART means an all-day event."""
    assert make_ivevent(dt_start="20241214", dt_end=None).is_all_day
    assert not make_ivevent().is_all_day


def test_ivevent_rejects_end_and_duration():
    """DTEND and DURATION are mutually exclusive."""
    with pytest.raises(PydanticValidationError):
        make_ivevent(duration="PT1H")


def test_ivevent_rejects_mixed_value_types():
    """DTEND must match DTSTART's value type."""
    with pytest.raises(PydanticValidationError):
        make_ivevent(dt_start="20241214", dt_end="20241214T100000")


def test_ivevent_rejects_malformed_dates():
    """Date values must be compact iCalendar dates."""
    with pytest.raises(PydanticValidationError):
        make_ivevent(dt_start="2024-12-14 09:00")


def test_ivevent_x_props_normalized():
    """X-property names are upper-cased; other names are rejected."""
    event = make_ivevent(x_props={"x-other-flag": "1"})
    assert event.x_props == {"X-OTHER-FLAG": "1"}
    with pytest.raises(PydanticValidationError):
        make_ivevent(x_props={"SUMMARY": "nope"})


def test_revise_bumps_sequence_on_reschedule():
    """A scheduling change increments SEQUENCE and refreshes DTSTAMP."""
    event = make_ivevent(sequence=2)
    revised = event.revise(
        now=datetime(2024, 12, 15, 7, 0), dt_start="20241214T100000", dt_end="20241214T110000"
    )
    assert revised.sequence == 3
    assert revised.uid == "abc"
    assert revised.dt_stamp == "20241215T070000"
    assert revised.last_modified == "20241215T070000"
    assert event.sequence == 2


def test_revise_keeps_sequence_for_content_change():
    """A title change is not a scheduling change."""
    event = make_ivevent(sequence=2)
    revised = event.revise(summary="Long run")
    assert revised.sequence == 2
    assert revised.summary == "Long run"


def test_revise_guards_identity_and_sequence():
    """uid cannot change and sequence cannot go down."""
    event = make_ivevent(sequence=2)
    with pytest.raises(ValidationError):
        event.revise(uid="other")
    with pytest.raises(ValidationError):
        event.revise(sequence=1)


def test_revise_rejects_invalid_result():
    """Invalid revisions raise the MindLog ValidationError."""
    with pytest.raises(ValidationError):
        make_ivevent().revise(duration="PT1H")


def test_alarm_triggers():
    """Relative and absolute triggers are both accepted."""
    relative = IVAlarm(trigger="-PT15M")
    absolute = IVAlarm(trigger="20241214T083000")

    assert relative.is_relative
    assert relative.trigger_offset().total_seconds() == -900
    assert not absolute.is_relative
    assert absolute.trigger_offset() is None
    with pytest.raises(PydanticValidationError):
        IVAlarm(trigger="soon")


def test_calendar_find():
    """Events are looked up by UID."""
    calendar = IVCalendar(events=[make_ivevent()])
    assert calendar.version == "2.0"
    assert calendar.find("abc").summary == "Run"
    assert calendar.find("missing") is None


def test_timeline_event_time_string_conversion():
    """HH:mm strings become time objects."""
    event = TimelineEvent(id="e1", date="2024-12-14", start_time="09:00", end_time="17:30", title="Work")
    assert event.date == date(2024, 12, 14)
    assert event.start_time == time(9, 0)
    assert event.end_time == time(17, 30)
    assert event.type == EventType.SCHEDULE


@pytest.mark.parametrize("value", ["9:00", "25:00", "0900", "noon"])
def test_timeline_event_rejects_bad_times(value):
    """Times must be 24-hour HH:mm."""
    with pytest.raises(PydanticValidationError):
        TimelineEvent(id="e1", date="2024-12-14", start_time=value, title="Work")


def test_timeline_event_end_requires_start():
    """An end time without a start time is rejected."""
    with pytest.raises(PydanticValidationError):
        TimelineEvent(id="e1", date="2024-12-14", end_time="10:00", title="Work")


def test_timeline_event_computed_fields():
    """is_all_day and status are derived."""
    all_day = TimelineEvent(id="e1", date="2024-12-14", title="Holiday")
    done = TimelineEvent(id="e2", date="2024-12-14", start_time="09:00", title="Run", is_completed=True)
    cancelled = TimelineEvent(id="e3", date="2024-12-14", title="Trip", is_cancelled=True)

    assert all_day.is_all_day is True
    assert all_day.status == "active"
    assert done.is_all_day is False
    assert done.status == "completed"
    assert cancelled.status == "cancelled"


def test_timeline_event_json_dump():
    """Times serialize as HH:mm and dates as ISO strings."""
    event = TimelineEvent(id="e1", date="2024-12-14", start_time="09:00", title="Run")
    data = event.model_dump(mode="json", exclude_none=True)
    assert data["date"] == "2024-12-14"
    assert data["start_time"] == "09:00"
    assert data["type"] == "schedule"


def test_timeline_event_mood_color_format():
    """Mood colors are #RRGGBB strings."""
    TimelineEvent(id="e1", date="2024-12-14", title="Diary", mood_color="#E89F71")
    with pytest.raises(PydanticValidationError):
        TimelineEvent(id="e1", date="2024-12-14", title="Diary", mood_color="orange")


@pytest.mark.parametrize("name", ["UID", "END", "SUMMARY", "X-", "X-BAD NAME"])
def test_timeline_event_rejects_non_extension_names(name):
    """Pass-through properties must be X-names so they cannot pose as standard ones."""
    with pytest.raises(PydanticValidationError):
        TimelineEvent(id="e1", date="2024-12-14", title="Run", x_props={name: "value"})


def test_timeline_event_x_props_upper_cased():
    event = TimelineEvent(id="e1", date="2024-12-14", title="Run", x_props={"x-other-app": "kept"})
    assert event.x_props == {"X-OTHER-APP": "kept"}
