"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from cli.parser import app
from mindlog.config import MindLogConfig
from mindlog.exceptions import ValidationError
from mindlog.storage.event_store import EventStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path):
    """Point every CLI path at a temporary directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MINDLOG_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("MINDLOG_EXPORT_DIR", str(tmp_path / "exports"))
    monkeypatch.setenv("MINDLOG_LOG_DIR", str(tmp_path / "logs"))


def _stored_events():
    return EventStore(MindLogConfig.from_env().store_path).snapshot()


def _add(*args):
    return runner.invoke(app, ["add", *args])


def test_add_and_list():
    result = _add("Run", "--date", "2024-12-14", "--start", "07:00", "--end", "07:45")
    assert result.exit_code == 0
    assert "Added 'Run'" in result.output

    events = _stored_events()
    assert len(events) == 1
    assert events[0].title == "Run"

    listing = runner.invoke(app, ["ls", "--date", "2024-12-14"])
    assert listing.exit_code == 0
    assert "Run" in listing.output


def test_add_rejects_bad_time():
    result = _add("Run", "--date", "2024-12-14", "--start", "7am")
    assert result.exit_code == 1
    assert _stored_events() == ()


def test_add_diary_entry():
    result = _add("Reflection", "--date", "2024-12-14", "--diary", "--content", "Calm day")
    assert result.exit_code == 0
    assert _stored_events()[0].diary_content == "Calm day"


def test_export_writes_ics(tmp_path):
    _add("Morning Review", "--date", "2024-12-14", "--start", "09:00", "--reminder", "10")
    result = runner.invoke(app, ["export"])

    assert result.exit_code == 0
    assert "Exported 1 event" in result.output
    files = list((tmp_path / "exports").glob("*.ics"))
    assert len(files) == 1
    assert "TRIGGER:-PT10M" in files[0].read_text(encoding="utf-8")


def test_export_nothing_to_export(tmp_path):
    _add("Reflection", "--date", "2024-12-14", "--diary")
    result = runner.invoke(app, ["export"])

    assert result.exit_code == 1
    assert "Nothing to export" in result.output
    assert not (tmp_path / "exports").exists()


def test_complete_edit_and_delete():
    _add("Run", "--date", "2024-12-14", "--start", "07:00")
    prefix = _stored_events()[0].id[:8]

    assert runner.invoke(app, ["complete", prefix]).exit_code == 0
    assert _stored_events()[0].is_completed

    assert runner.invoke(app, ["edit", prefix, "--title", "Long run"]).exit_code == 0
    assert _stored_events()[0].title == "Long run"

    assert runner.invoke(app, ["show", prefix]).exit_code == 0

    assert runner.invoke(app, ["delete", prefix, "--force"]).exit_code == 0
    assert _stored_events() == ()


def test_delete_unknown_prefix():
    result = runner.invoke(app, ["delete", "nope", "--force"])
    assert result.exit_code == 1


def test_inspect_foreign_file(tmp_path):
    path = tmp_path / "work.ics"
    path.write_text(
        "BEGIN:VCALENDAR\r\nVERSION:2.0\r\nPRODID:-//Example//EN\r\n"
        "BEGIN:VEVENT\r\nUID:x1@example.com\r\nDTSTAMP:20241201T120000Z\r\n"
        "DTSTART:20241216T093000\r\nSUMMARY:Standup\r\nX-EXAMPLE-COLOR:blue\r\n"
        "END:VEVENT\r\nEND:VCALENDAR\r\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["inspect", str(path)])

    assert result.exit_code == 0
    assert "Standup" in result.output
    assert "X-EXAMPLE-COLOR" in result.output


def test_cli_events_carry_no_reminder_handle():
    """Reminders set from the CLI are stored without a process-local handle."""
    result = _add("Launch", "--date", "2999-01-01", "--start", "09:00", "--reminder", "10")
    assert result.exit_code == 0

    event = _stored_events()[0]
    assert event.reminder_minutes == 10
    assert event.notification_id is None


def test_complete_reports_store_errors(monkeypatch):
    """A failing update exits with status 1 instead of a traceback."""
    _add("Run", "--date", "2024-12-14", "--start", "07:00")
    prefix = _stored_events()[0].id[:8]

    def refuse(self, event_id, **updates):
        raise ValidationError(f"Invalid update for event '{event_id}'")

    monkeypatch.setattr(EventStore, "update_event", refuse)
    result = runner.invoke(app, ["complete", prefix])

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValidationError)
