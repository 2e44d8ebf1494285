"""ICS file reader for foreign (system) calendars.

Events read here are for display next to MindLog's own events. They are
never written back by the export path.
"""

import logging
from pathlib import Path

from icalendar import Calendar
from pydantic import ValidationError as PydanticValidationError

from mindlog.exceptions import IngestionError
from mindlog.ical.extensions import is_registered
from mindlog.models.ical import (
    ICalEventStatus,
    ICalMethod,
    ICalTransparency,
    IVAlarm,
    IVCalendar,
    IVEvent,
    IVTimezone,
)

logger = logging.getLogger(__name__)


def _wire(prop) -> str:
    """Property value in its iCalendar text form."""
    if isinstance(prop, list):
        return ",".join(_wire(item) for item in prop)
    value = prop.to_ical()
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


def _text(component, name: str) -> str | None:
    value = component.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        value = value[0]
    return str(value)


class ICSReader:
    """Reader for ICS calendar files."""

    def read(self, path: Path) -> IVCalendar:
        """Read a calendar file into the domain model."""
        logger.info(f"Reading ICS file: {path}")
        if not path.exists():
            raise IngestionError(f"ICS file does not exist: {path}")

        content = path.read_text(encoding="utf-8")
        if not content.strip():
            logger.warning(f"ICS file is empty: {path}")
            return IVCalendar(name=None)
        return self.parse(content)

    def parse(self, content: str) -> IVCalendar:
        """Parse calendar text into the domain model."""
        try:
            cal = Calendar.from_ical(content)
        except ValueError as e:
            raise IngestionError(f"Failed to parse ICS content: {e}") from e

        events = []
        for component in cal.walk("VEVENT"):
            event = self._ics_event_to_model(component)
            if event is not None:
                events.append(event)

        timezones = [
            IVTimezone(tz_id=str(tz.get("tzid")))
            for tz in cal.walk("VTIMEZONE")
            if tz.get("tzid")
        ]

        method = _text(cal, "method")
        if method is not None and method.upper() not in ICalMethod.__members__:
            logger.warning(f"Ignoring unsupported METHOD {method}")
            method = None

        logger.info(f"Read {len(events)} events from ICS content")
        try:
            return IVCalendar(
                prod_id=_text(cal, "prodid") or "",
                method=method.upper() if method else None,
                name=_text(cal, "x-wr-calname"),
                events=events,
                timezones=timezones,
            )
        except PydanticValidationError as e:
            raise IngestionError(f"Invalid calendar: {e}") from e

    def _ics_event_to_model(self, vevent) -> IVEvent | None:
        """Convert an ICS VEVENT component to the domain model."""
        uid = _text(vevent, "uid")
        dtstart = vevent.get("dtstart")
        if not uid or dtstart is None:
            logger.warning("Skipping VEVENT without UID or DTSTART")
            return None

        status = _text(vevent, "status")
        if status is not None and status.upper() not in ICalEventStatus.__members__:
            logger.warning(f"Ignoring unknown STATUS {status} on {uid}")
            status = None

        transp = _text(vevent, "transp")
        if transp is not None and transp.upper() not in ICalTransparency.__members__:
            transp = None

        categories = []
        raw_categories = vevent.get("categories")
        if raw_categories is not None:
            if not isinstance(raw_categories, list):
                raw_categories = [raw_categories]
            for item in raw_categories:
                categories.extend(str(cat) for cat in getattr(item, "cats", [item]))

        ex_date = []
        raw_ex_date = vevent.get("exdate")
        if raw_ex_date is not None:
            ex_date = [value for value in _wire(raw_ex_date).split(",") if value]

        x_props = {}
        for name, value in vevent.items():
            if not name.upper().startswith("X-"):
                continue
            if isinstance(value, list):
                logger.warning(f"Keeping only the first {name} on {uid}")
                value = value[0]
            # Known MindLog fields hold decoded text, foreign ones their wire form
            x_props[name.upper()] = str(value) if is_registered(name) else _wire(value)

        dtstamp = vevent.get("dtstamp")
        try:
            return IVEvent(
                uid=uid,
                dt_stamp=_wire(dtstamp if dtstamp is not None else dtstart),
                last_modified=_wire(vevent["last-modified"]) if "last-modified" in vevent else None,
                sequence=int(vevent.get("sequence", 0)),
                dt_start=_wire(dtstart),
                dt_end=_wire(vevent["dtend"]) if "dtend" in vevent else None,
                duration=_wire(vevent["duration"]) if "duration" in vevent else None,
                rrule=_wire(vevent["rrule"]) if "rrule" in vevent else None,
                ex_date=ex_date,
                status=status.upper() if status else None,
                transp=transp.upper() if transp else None,
                summary=_text(vevent, "summary") or "",
                description=_text(vevent, "description"),
                location=_text(vevent, "location"),
                categories=categories,
                alarms=[self._alarm_to_model(alarm) for alarm in vevent.walk("VALARM")],
                x_props=x_props,
            )
        except (PydanticValidationError, ValueError) as e:
            raise IngestionError(f"Failed to read event {uid}: {e}") from e

    def _alarm_to_model(self, valarm) -> IVAlarm:
        repeat = valarm.get("repeat")
        return IVAlarm(
            action=(_text(valarm, "action") or "DISPLAY").upper(),
            trigger=_wire(valarm["trigger"]),
            description=_text(valarm, "description"),
            duration=_wire(valarm["duration"]) if "duration" in valarm else None,
            repeat=int(repeat) if repeat is not None else None,
        )
