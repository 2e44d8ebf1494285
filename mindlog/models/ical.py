"""RFC 5545 domain model.

These models mirror the iCalendar components one property per field and are
independent of how the application presents events. Date values are kept in
their compact wire form (``YYYYMMDD`` or ``YYYYMMDDTHHMMSS[Z]``) and
durations as RFC 5545 duration strings.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mindlog.constants import CALENDAR_NAME, PRODUCT_ID
from mindlog.exceptions import FormatError, ValidationError
from mindlog.ical.extensions import normalize_x_props
from mindlog.ical.formatters import (
    current_timestamp,
    is_date_value,
    parse_date_value,
    parse_duration,
)


class ICalEventStatus(str, Enum):
    """VEVENT STATUS values.

    COMPLETED is not an RFC 5545 event status (it belongs to VTODO). MindLog
    writes it for finished schedule items and downstream consumers rely on
    the literal, so it is kept as a documented extension.
    """

    TENTATIVE = "TENTATIVE"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class ICalAlarmAction(str, Enum):
    """VALARM ACTION values."""

    AUDIO = "AUDIO"
    DISPLAY = "DISPLAY"
    EMAIL = "EMAIL"


class ICalTransparency(str, Enum):
    """VEVENT TRANSP values."""

    OPAQUE = "OPAQUE"
    TRANSPARENT = "TRANSPARENT"


class ICalMethod(str, Enum):
    """VCALENDAR METHOD values used by MindLog."""

    PUBLISH = "PUBLISH"
    REQUEST = "REQUEST"


# Fields whose change makes a new revision significant for attendees
SCHEDULING_FIELDS = ("dt_start", "dt_end", "duration", "rrule", "ex_date", "status")


def _check_date_value(value: str) -> str:
    try:
        parse_date_value(value)
    except FormatError as e:
        raise ValueError(str(e)) from e
    return value


def _check_duration(value: str) -> str:
    try:
        parse_duration(value)
    except FormatError as e:
        raise ValueError(str(e)) from e
    return value


class IVAlarm(BaseModel):
    """VALARM component (RFC 5545 section 3.6.6)."""

    model_config = ConfigDict(frozen=True)

    action: ICalAlarmAction = ICalAlarmAction.DISPLAY
    trigger: str
    description: Optional[str] = None
    duration: Optional[str] = None
    repeat: Optional[int] = Field(default=None, ge=0)

    @field_validator("trigger")
    @classmethod
    def validate_trigger(cls, v: str) -> str:
        """Accept a signed duration or an absolute date-time."""
        if cls._is_duration(v):
            return _check_duration(v)
        return _check_date_value(v)

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_duration(v)

    @staticmethod
    def _is_duration(value: str) -> bool:
        return value.lstrip("+-").startswith("P")

    @property
    def is_relative(self) -> bool:
        """True if the trigger is an offset from the event start."""
        return self._is_duration(self.trigger)

    def trigger_offset(self) -> timedelta | None:
        """Offset from the event start, or None for absolute triggers."""
        if not self.is_relative:
            return None
        return parse_duration(self.trigger)


class IVEvent(BaseModel):
    """VEVENT component (RFC 5545 section 3.6.1).

    Instances are immutable. Use :meth:`revise` to produce the next revision,
    which keeps ``uid`` and never lowers ``sequence``.
    """

    model_config = ConfigDict(frozen=True)

    # Identity and change tracking
    uid: str = Field(min_length=1)
    dt_stamp: str
    last_modified: Optional[str] = None
    sequence: int = Field(default=0, ge=0)

    # Scheduling
    dt_start: str
    dt_end: Optional[str] = None
    duration: Optional[str] = None
    rrule: Optional[str] = None
    ex_date: list[str] = Field(default_factory=list)
    status: Optional[ICalEventStatus] = None
    transp: Optional[ICalTransparency] = None

    # Content
    summary: str = ""
    description: Optional[str] = None
    location: Optional[str] = None
    categories: list[str] = Field(default_factory=list)

    alarms: list[IVAlarm] = Field(default_factory=list)

    # Non-standard properties, unknown names included
    x_props: dict[str, str] = Field(default_factory=dict)

    @field_validator("dt_stamp", "last_modified", "dt_start", "dt_end")
    @classmethod
    def validate_date_values(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_date_value(v)

    @field_validator("ex_date")
    @classmethod
    def validate_ex_date(cls, v: list[str]) -> list[str]:
        return [_check_date_value(item) for item in v]

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_duration(v)

    @field_validator("x_props")
    @classmethod
    def validate_x_props(cls, v: dict[str, str]) -> dict[str, str]:
        """Property names are case-insensitive; store them upper-cased."""
        return normalize_x_props(v)

    @model_validator(mode="after")
    def validate_end(self):
        """DTEND and DURATION are exclusive, and DTEND matches DTSTART's value type."""
        if self.dt_end is not None and self.duration is not None:
            raise ValueError("dt_end and duration must not both be set")
        if self.dt_end is not None and is_date_value(self.dt_end) != self.is_all_day:
            raise ValueError("dt_end must have the same value type as dt_start")
        return self

    @property
    def is_all_day(self) -> bool:
        """True if DTSTART is a DATE value."""
        return is_date_value(self.dt_start)

    def revise(self, now: datetime | None = None, **changes) -> "IVEvent":
        """Return the next revision of this event with ``changes`` applied.

        DTSTAMP and LAST-MODIFIED are refreshed. SEQUENCE is incremented when
        a scheduling field actually changes.

        Raises:
            ValidationError: If the changes touch ``uid``, lower ``sequence``
                or produce an invalid event
        """
        if "uid" in changes and changes["uid"] != self.uid:
            raise ValidationError(f"uid of event {self.uid!r} cannot change")
        if "sequence" in changes and changes["sequence"] < self.sequence:
            raise ValidationError(
                f"sequence of event {self.uid!r} cannot decrease "
                f"({self.sequence} -> {changes['sequence']})"
            )

        rescheduled = any(
            field in changes and changes[field] != getattr(self, field)
            for field in SCHEDULING_FIELDS
        )

        data = self.model_dump()
        data.update(changes)
        stamp = current_timestamp(now)
        data["dt_stamp"] = stamp
        data["last_modified"] = stamp
        if rescheduled and "sequence" not in changes:
            data["sequence"] = self.sequence + 1

        try:
            return IVEvent.model_validate(data)
        except ValueError as e:
            raise ValidationError(f"Invalid revision of event {self.uid!r}: {e}") from e


class IVTimezone(BaseModel):
    """VTIMEZONE component, reduced to its identifier."""

    tz_id: str


class IVCalendar(BaseModel):
    """VCALENDAR component (RFC 5545 section 3.4)."""

    version: Literal["2.0"] = "2.0"
    prod_id: str = PRODUCT_ID
    cal_scale: Optional[Literal["GREGORIAN"]] = "GREGORIAN"
    method: Optional[ICalMethod] = ICalMethod.PUBLISH
    name: Optional[str] = CALENDAR_NAME
    events: list[IVEvent] = Field(default_factory=list)
    timezones: list[IVTimezone] = Field(default_factory=list)

    def find(self, uid: str) -> IVEvent | None:
        """Event with the given UID, if present."""
        for event in self.events:
            if event.uid == uid:
                return event
        return None
