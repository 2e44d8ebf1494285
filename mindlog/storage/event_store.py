"""Durable event collection."""

import json
import logging
import threading
import uuid
from datetime import date, time
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from mindlog.constants import STORE_KEY
from mindlog.exceptions import EventNotFoundError, ValidationError
from mindlog.ical.formatters import coerce_date
from mindlog.models.event import TimelineEvent
from mindlog.reminders import ReminderScheduler, calculate_reminder_trigger

logger = logging.getLogger(__name__)

# Changes that move or re-word a scheduled reminder
_REMINDER_FIELDS = ("title", "description", "date", "start_time", "reminder_minutes")

# Derived fields are not persisted
_COMPUTED_FIELDS = {"is_all_day", "status"}


class EventStore:
    """Owner of all application events, persisted as a JSON key-value file.

    Callers get copies; the only way to change an event is through the
    store's methods. Exports work from :meth:`snapshot`, never from the live
    collection.
    """

    def __init__(
        self,
        path: Path | None = None,
        reminders: ReminderScheduler | None = None,
    ):
        """
        Initialize the store.

        Args:
            path: JSON file backing the store; None keeps events in memory only
            reminders: Scheduler for event reminders (optional)
        """
        self.path = path
        self.reminders = reminders
        self._lock = threading.RLock()
        self._events: list[TimelineEvent] = self._load() if path is not None else []

    def _load(self) -> list[TimelineEvent]:
        if not self.path.exists():
            logger.debug(f"No event store at {self.path}, starting empty")
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            events = [TimelineEvent.model_validate(item) for item in data.get(STORE_KEY, [])]
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise ValidationError(f"Corrupt event store {self.path}: {e}") from e
        logger.info(f"Loaded {len(events)} events from {self.path}")
        return events

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            STORE_KEY: [
                event.model_dump(mode="json", exclude_none=True, exclude=_COMPUTED_FIELDS)
                for event in self._events
            ]
        }
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def _index(self, event_id: str) -> int:
        for index, event in enumerate(self._events):
            if event.id == event_id:
                return index
        raise EventNotFoundError(f"Event '{event_id}' not found")

    def _schedule_reminder(self, event: TimelineEvent) -> str | None:
        if self.reminders is None or event.reminder_minutes <= 0 or event.start_time is None:
            return None
        trigger_at = calculate_reminder_trigger(
            event.date, event.start_time, event.reminder_minutes
        )
        return self.reminders.schedule(
            event.id, event.title, event.description or "", trigger_at
        )

    def _release_reminder(self, event: TimelineEvent) -> None:
        if self.reminders is not None and event.notification_id:
            self.reminders.cancel(event.notification_id)

    def add_event(self, **fields: Any) -> TimelineEvent:
        """Create an event with a fresh id and schedule its reminder."""
        try:
            event = TimelineEvent(id=str(uuid.uuid4()), **fields)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid event: {e}") from e

        with self._lock:
            handle = self._schedule_reminder(event)
            event = event.model_copy(update={"notification_id": handle})
            self._events.append(event)
            self._save()

        logger.info(f"Added {event.type.value} event {event.id}")
        return event.model_copy(deep=True)

    def update_event(self, event_id: str, **updates: Any) -> TimelineEvent:
        """Apply ``updates`` to an event in place, rescheduling its reminder if needed."""
        if "id" in updates and updates["id"] != event_id:
            raise ValidationError(f"Event id '{event_id}' cannot change")

        with self._lock:
            index = self._index(event_id)
            current = self._events[index]
            data = current.model_dump(exclude=_COMPUTED_FIELDS)
            data.update(updates)
            try:
                updated = TimelineEvent.model_validate(data)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid update for event '{event_id}': {e}") from e

            if any(getattr(updated, f) != getattr(current, f) for f in _REMINDER_FIELDS):
                self._release_reminder(current)
                handle = self._schedule_reminder(updated)
                updated = updated.model_copy(update={"notification_id": handle})

            self._events[index] = updated
            self._save()

        logger.info(f"Updated event {event_id}")
        return updated.model_copy(deep=True)

    def delete_event(self, event_id: str) -> None:
        """Remove an event after cancelling its pending reminder."""
        with self._lock:
            index = self._index(event_id)
            self._release_reminder(self._events[index])
            del self._events[index]
            self._save()
        logger.info(f"Deleted event {event_id}")

    def get_event(self, event_id: str) -> TimelineEvent:
        with self._lock:
            return self._events[self._index(event_id)].model_copy(deep=True)

    def get_events_by_date(self, day: date | str) -> list[TimelineEvent]:
        """Events on ``day``, all-day entries first, then by start time."""
        target = coerce_date(day)
        with self._lock:
            matches = [e.model_copy(deep=True) for e in self._events if e.date == target]
        return sorted(
            matches,
            key=lambda e: (e.start_time is not None, e.start_time or time.min),
        )

    def snapshot(self) -> tuple[TimelineEvent, ...]:
        """Immutable copy of the whole collection, in insertion order."""
        with self._lock:
            return tuple(event.model_copy(deep=True) for event in self._events)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
