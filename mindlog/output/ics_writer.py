"""ICS document generator for MindLog events."""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Sequence

from mindlog.constants import (
    APP_NAME,
    CALENDAR_NAME,
    ICS_EXTENSION,
    PRODUCT_ID,
    UID_DOMAIN,
)
from mindlog.exceptions import EncodingError
from mindlog.ical.extensions import Extension, is_text_payload, payload_kind
from mindlog.ical.formatters import (
    add_minutes,
    current_timestamp,
    derive_uid,
    format_date_only,
    format_date_time,
    format_trigger,
)
from mindlog.ical.text import CRLF, ensure_single_line, escape_text, fold_line
from mindlog.models.codec import encode_extensions
from mindlog.models.event import EventType, TimelineEvent
from mindlog.reminders import effective_reminder_offset

if TYPE_CHECKING:
    from mindlog.config import MindLogConfig

logger = logging.getLogger(__name__)

# Default length of a timed event without an end time
DEFAULT_DURATION_MINUTES = 60

# Extension lines written right after the type tag, in this order
_DIARY_FIELDS = (Extension.QUESTION_ID, Extension.DIARY_CONTENT)


class ICSWriter:
    """Writer for RFC 5545 calendar documents.

    Output is assembled line by line rather than through a generic iCalendar
    serializer so that property order, the COMPLETED status extension and
    the floating date-times stay exactly as consumers expect them.
    """

    def __init__(
        self,
        uid_domain: str = UID_DOMAIN,
        product_id: str = PRODUCT_ID,
        calendar_name: str = CALENDAR_NAME,
        app_name: str = APP_NAME,
    ):
        self.uid_domain = uid_domain
        self.product_id = product_id
        self.calendar_name = calendar_name
        self.app_name = app_name

    @classmethod
    def from_config(cls, config: "MindLogConfig") -> "ICSWriter":
        """Create a writer using the configured identity values."""
        return cls(
            uid_domain=config.uid_domain,
            calendar_name=config.calendar_name,
            app_name=config.app_name,
        )

    @staticmethod
    def select_exportable(events: Iterable[TimelineEvent]) -> list[TimelineEvent]:
        """Events that become VEVENTs: schedule items only, diary entries are not time blocks."""
        return [event for event in events if event.type == EventType.SCHEDULE]

    def generate(self, events: Sequence[TimelineEvent], now: datetime | None = None) -> str:
        """Build a complete VCALENDAR document.

        Only schedule events are emitted. One DTSTAMP is used for the whole
        document.

        Args:
            events: Snapshot of application events, in output order
            now: Moment of the export (defaults to the current local time)

        Returns:
            CRLF-separated calendar text

        Raises:
            FormatError: If an event carries a malformed date or time
            EncodingError: If an event carries text that cannot be encoded
        """
        stamp = current_timestamp(now)
        exportable = self.select_exportable(events)

        lines = [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            fold_line(f"PRODID:{ensure_single_line(self.product_id)}"),
            "CALSCALE:GREGORIAN",
            "METHOD:PUBLISH",
            fold_line(f"X-WR-CALNAME:{escape_text(self.calendar_name)}"),
        ]
        for event in exportable:
            lines.extend(self._event_lines(event, stamp))
        lines.append("END:VCALENDAR")

        logger.info(f"Generated calendar with {len(exportable)} of {len(events)} events")
        return CRLF.join(lines)

    def render_event(self, event: TimelineEvent, now: datetime | None = None) -> str:
        """Render a single VEVENT block; schedule and diary events alike."""
        return CRLF.join(self._event_lines(event, current_timestamp(now)))

    def _event_lines(self, event: TimelineEvent, stamp: str) -> list[str]:
        try:
            return self._build_event_lines(event, stamp)
        except EncodingError as e:
            raise EncodingError(f"Event {event.id!r}: {e}") from e

    def _build_event_lines(self, event: TimelineEvent, stamp: str) -> list[str]:
        lines = [
            "BEGIN:VEVENT",
            fold_line(f"UID:{ensure_single_line(derive_uid(event.id, self.uid_domain))}"),
            f"DTSTAMP:{stamp}",
        ]

        if event.start_time is not None:
            lines.append(f"DTSTART:{format_date_time(event.date, event.start_time)}")
        else:
            lines.append(f"DTSTART;VALUE=DATE:{format_date_only(event.date)}")

        end_time = self._end_time(event)
        if end_time is not None:
            lines.append(f"DTEND:{format_date_time(event.date, end_time)}")

        lines.append(fold_line(f"SUMMARY:{escape_text(event.title)}"))
        if event.description:
            lines.append(fold_line(f"DESCRIPTION:{escape_text(event.description)}"))

        lines.append("STATUS:COMPLETED" if event.is_completed else "STATUS:CONFIRMED")

        lines.extend(self._extension_lines(event))

        if event.reminder_minutes > 0:
            offset = effective_reminder_offset(event.reminder_minutes)
            lines.extend(
                [
                    "BEGIN:VALARM",
                    "ACTION:DISPLAY",
                    fold_line(f"DESCRIPTION:{escape_text(event.title)}"),
                    f"TRIGGER:{format_trigger(offset)}",
                    "END:VALARM",
                ]
            )

        lines.append("END:VEVENT")
        return lines

    def _end_time(self, event: TimelineEvent):
        if event.end_time is not None:
            return event.end_time
        if event.start_time is None:
            return None

        end_time = add_minutes(event.start_time, DEFAULT_DURATION_MINUTES)
        if end_time < event.start_time:
            # Existing exports keep the same DTEND date; the wrap is only reported
            logger.warning(
                f"Event {event.id!r} starts at {event.start_time:%H:%M}; default end "
                f"{end_time:%H:%M} wraps past midnight on the same date"
            )
        return end_time

    def _extension_lines(self, event: TimelineEvent) -> list[str]:
        x_props = encode_extensions(event)
        # Other registry fields and pass-through properties are not exported
        ordered = [Extension.TYPE.value]
        if event.type == EventType.DIARY:
            ordered.extend(field.value for field in _DIARY_FIELDS)

        lines = []
        for name in ordered:
            value = x_props.get(name)
            if value is None or value == "":
                continue
            if is_text_payload(payload_kind(name)):
                value = escape_text(value)
            else:
                value = ensure_single_line(value)
            lines.append(fold_line(f"{name}:{value}"))
        return lines

    def write(
        self,
        events: Sequence[TimelineEvent],
        path: Path,
        now: datetime | None = None,
    ) -> Path:
        """Write the calendar document for ``events`` to ``path``."""
        content = self.generate(events, now=now)
        try:
            path.write_bytes(content.encode("utf-8"))
        except OSError:
            # Remove a partially written file
            if path.exists():
                path.unlink()
            raise
        logger.info(f"Wrote calendar to {path}")
        return path

    def filename(self, today: date | None = None) -> str:
        """Export file name, e.g. ``MindLog_Schedule_2024-12-14.ics``."""
        day = today or date.today()
        return f"{self.app_name}_Schedule_{day.isoformat()}.{ICS_EXTENSION}"

    def get_extension(self) -> str:
        """Returns file extension."""
        return ICS_EXTENSION
