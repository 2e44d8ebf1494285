"""Pure formatting functions for display output."""

from datetime import date

from mindlog.models.event import TimelineEvent
from mindlog.reminders import REMINDER_OPTIONS


def format_time_range(event: TimelineEvent) -> str:
    """Format the time range for an event ("08:00–09:00", "08:00" or "All day")."""
    if event.is_all_day:
        return "All day"

    parts = [event.start_time.strftime("%H:%M")]
    if event.end_time:
        parts.append(event.end_time.strftime("%H:%M"))
    return "–".join(parts)


def format_reminder(minutes: int) -> str:
    """Label of a reminder value, e.g. "10 minutes before"."""
    for option in REMINDER_OPTIONS:
        if option.minutes == minutes:
            return option.label
    return f"{minutes} minutes before"


def format_day_label(event_date: date, today: date) -> str:
    """Format a date as a day label relative to ``today``.

    Returns:
        Formatted string like "TODAY (Thu Jan 16)" or "Mon Jan 19".
    """
    delta = (event_date - today).days

    if delta == 0:
        return f"TODAY ({event_date.strftime('%a %b %d')})"
    elif delta == 1:
        return f"Tomorrow ({event_date.strftime('%a %b %d')})"
    elif delta == -1:
        return f"Yesterday ({event_date.strftime('%a %b %d')})"
    else:
        return event_date.strftime("%a %b %d")
