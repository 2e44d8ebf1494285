from datetime import date, datetime

import pytest

from mindlog import create_app
from mindlog.config import MindLogConfig
from mindlog.models.event import TimelineEvent
from mindlog.reminders import InMemoryReminderScheduler
from mindlog.storage.event_store import EventStore

# Fixed export moment used across tests
NOW = datetime(2024, 12, 14, 8, 0, 0)


def make_event(**overrides) -> TimelineEvent:
    """Build a schedule event with sensible defaults."""
    fields = {
        "id": "e1",
        "type": "schedule",
        "date": date(2024, 12, 14),
        "start_time": "09:00",
        "end_time": "10:00",
        "title": "Morning Review",
        "is_completed": False,
        "reminder_minutes": 10,
    }
    fields.update(overrides)
    return TimelineEvent(**fields)


@pytest.fixture
def config(tmp_path):
    """Configuration rooted in a temporary directory."""
    return MindLogConfig(
        data_dir=tmp_path / "data",
        export_dir=tmp_path / "exports",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def reminders():
    """Reminder scheduler whose clock is fixed before every test event."""
    return InMemoryReminderScheduler(clock=lambda: datetime(2024, 1, 1, 0, 0))


@pytest.fixture
def store(config, reminders):
    """Durable store backed by a temporary file."""
    return EventStore(config.store_path, reminders=reminders)


@pytest.fixture
def app(store, config):
    """Create and configure a Flask app for testing."""
    return create_app(store=store, config=config)
