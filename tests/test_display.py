"""Tests for CLI display formatting functions."""

from datetime import date

from conftest import make_event
from cli.display.formatters import format_day_label, format_reminder, format_time_range


def test_format_time_range():
    assert format_time_range(make_event()) == "09:00–10:00"
    assert format_time_range(make_event(end_time=None)) == "09:00"
    assert format_time_range(make_event(start_time=None, end_time=None)) == "All day"


def test_format_reminder():
    assert format_reminder(1) == "On time"
    assert format_reminder(60) == "1 hour before"
    assert format_reminder(15) == "15 minutes before"


def test_format_day_label():
    today = date(2024, 12, 14)
    assert format_day_label(today, today) == "TODAY (Sat Dec 14)"
    assert format_day_label(date(2024, 12, 15), today) == "Tomorrow (Sun Dec 15)"
    assert format_day_label(date(2024, 12, 20), today) == "Fri Dec 20"
