import logging

from flask import Flask, Response, jsonify, request

from .config import MindLogConfig
from .exceptions import EmptySelectionError, FormatError, MindLogError
from .export_service import ExportService
from .storage.event_store import EventStore

logger = logging.getLogger(__name__)


def create_app(store: EventStore | None = None, config: MindLogConfig | None = None):
    config = config or MindLogConfig.from_env()
    store = store if store is not None else EventStore(config.store_path)
    service = ExportService(store, config=config)

    app = Flask(__name__)

    @app.route("/calendar", methods=["GET"])
    def get_calendar():
        """Serve the schedule export as an .ics download."""
        try:
            document = service.prepare()
        except EmptySelectionError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except MindLogError as e:
            logger.error(f"Export failed: {e}")
            return jsonify({"success": False, "message": f"Export failed: {e}"}), 500

        return Response(
            document.content,
            content_type=f"{document.mime_type}; charset=utf-8",
            headers={
                "Content-Disposition": f"attachment; filename={document.filename}"
            },
        )

    @app.route("/events", methods=["GET"])
    def list_events():
        """List stored events, optionally for one day (?date=YYYY-MM-DD)."""
        day = request.args.get("date")
        if day:
            try:
                events = store.get_events_by_date(day)
            except FormatError as e:
                return jsonify({"success": False, "message": str(e)}), 400
        else:
            events = store.snapshot()

        return jsonify([event.model_dump(mode="json", exclude_none=True) for event in events])

    return app
