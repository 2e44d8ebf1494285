"""Tests for the HTTP share surface."""

from mindlog import create_app


def _add_schedule(store, **overrides):
    fields = {"date": "2024-12-14", "start_time": "09:00", "title": "Morning Review"}
    fields.update(overrides)
    return store.add_event(**fields)


def test_app_factory_exists():
    """Test that the app factory function exists."""
    assert callable(create_app)


def test_calendar_download(app, store):
    """GET /calendar serves the export as an attachment."""
    _add_schedule(store)
    response = app.test_client().get("/calendar")

    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/calendar; charset=utf-8"
    assert response.headers["Content-Disposition"].startswith(
        "attachment; filename=MindLog_Schedule_"
    )
    body = response.data.decode("utf-8")
    assert body.startswith("BEGIN:VCALENDAR\r\n")
    assert "SUMMARY:Morning Review" in body


def test_calendar_nothing_to_export(app, store):
    """GET /calendar returns 404 when there are no schedule events."""
    store.add_event(type="diary", date="2024-12-14", title="Reflection")
    response = app.test_client().get("/calendar")

    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_calendar_encoding_failure(app, store):
    """Unencodable events produce a 500 with the failure message."""
    _add_schedule(store, title="bad\x00title")
    response = app.test_client().get("/calendar")

    assert response.status_code == 500
    assert response.get_json()["message"].startswith("Export failed:")


def test_list_events(app, store):
    """GET /events lists everything; ?date= filters by day."""
    _add_schedule(store)
    _add_schedule(store, title="Tomorrow", date="2024-12-15")
    client = app.test_client()

    everything = client.get("/events").get_json()
    assert [e["title"] for e in everything] == ["Morning Review", "Tomorrow"]
    assert everything[0]["start_time"] == "09:00"
    assert everything[0]["status"] == "active"

    one_day = client.get("/events?date=2024-12-15").get_json()
    assert [e["title"] for e in one_day] == ["Tomorrow"]


def test_list_events_bad_date(app):
    response = app.test_client().get("/events?date=14/12/2024")
    assert response.status_code == 400
