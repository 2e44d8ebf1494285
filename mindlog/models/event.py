"""Application event model with Pydantic v2 validation."""

from datetime import date, time
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import (
    BaseModel,
    Field,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)

from mindlog.exceptions import FormatError
from mindlog.ical.extensions import normalize_x_props
from mindlog.ical.formatters import coerce_time

if TYPE_CHECKING:
    from mindlog.models.ical import IVEvent


class EventType(str, Enum):
    """Event kind enumeration."""

    SCHEDULE = "schedule"
    DIARY = "diary"


class QuestionCategory(str, Enum):
    """Category of a question of the day."""

    SELF = "self"
    PAST = "past"
    IMAGINATION = "imagination"


class TimelineEvent(BaseModel):
    """Event as the application manipulates it.

    Flattened projection of an :class:`~mindlog.models.ical.IVEvent`: one
    calendar day, optional wall-clock start and end, and the MindLog
    extension fields as plain attributes.
    """

    id: str = Field(min_length=1)
    type: EventType = EventType.SCHEDULE
    date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    title: str
    description: Optional[str] = None
    is_completed: bool = False
    is_cancelled: bool = False
    reminder_minutes: int = Field(default=0, ge=0)
    notification_id: Optional[str] = None

    # Diary
    question_id: Optional[str] = None
    question_text: Optional[str] = None
    question_category: Optional[QuestionCategory] = None
    diary_content: Optional[str] = None

    # Display metadata
    mood_color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    lunar_date: Optional[str] = None
    lunar_festival: Optional[str] = None

    # Sync
    conflict_of: Optional[str] = None

    # Extension properties this model does not know, kept for round trips
    x_props: dict[str, str] = Field(default_factory=dict)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def convert_time_string(cls, v):
        """Convert HH:mm string to time object."""
        if v is None or isinstance(v, time):
            return v
        try:
            return coerce_time(v)
        except FormatError as e:
            raise ValueError(str(e)) from e

    @field_validator("x_props")
    @classmethod
    def validate_x_props(cls, v: dict[str, str]) -> dict[str, str]:
        """Only X- names are allowed; they are stored upper-cased."""
        return normalize_x_props(v)

    @model_validator(mode="after")
    def validate_times(self):
        """An end time needs a start time."""
        if self.end_time is not None and self.start_time is None:
            raise ValueError("end_time requires start_time")
        return self

    @field_serializer("start_time", "end_time")
    def serialize_time(self, v: Optional[time]) -> Optional[str]:
        if v is None:
            return None
        return v.strftime("%H:%M")

    @computed_field
    @property
    def is_all_day(self) -> bool:
        """True if the event has no start time."""
        return self.start_time is None

    @computed_field
    @property
    def status(self) -> str:
        """Display status: active, completed or cancelled."""
        if self.is_cancelled:
            return "cancelled"
        if self.is_completed:
            return "completed"
        return "active"

    @classmethod
    def from_ivevent(cls, ivevent: "IVEvent") -> "TimelineEvent":
        """Project a domain event onto the application model."""
        from mindlog.models.codec import decode_event

        return decode_event(ivevent)

    def to_ivevent(self, base: Optional["IVEvent"] = None) -> "IVEvent":
        """Build the domain event for this application event.

        With ``base``, the result is the next revision of that event.
        """
        from mindlog.models.codec import encode_event

        return encode_event(self, base=base)
