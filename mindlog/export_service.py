"""Export service: turns the stored events into a shared .ics file."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

from mindlog.config import MindLogConfig
from mindlog.constants import ICS_MIME_TYPE
from mindlog.exceptions import EmptySelectionError, ExportError, MindLogError
from mindlog.output.ics_writer import ICSWriter
from mindlog.storage.event_store import EventStore

logger = logging.getLogger(__name__)

NOTHING_TO_EXPORT = "Nothing to export: no schedule events"


@dataclass(frozen=True)
class ExportDocument:
    """Generated calendar text ready to hand to a share sink."""

    content: str
    filename: str
    mime_type: str
    event_count: int


@dataclass(frozen=True)
class ExportResult:
    """Outcome reported to the user interface."""

    success: bool
    message: str
    file_path: Path | None = None


class ShareSink(Protocol):
    """Protocol for share targets (file system, share sheet, HTTP download)."""

    def share(self, content: str, filename: str, mime_type: str) -> Path:
        """Deliver the document and return where it ended up."""
        ...


class FileShareSink:
    """Share sink that writes documents into an export directory."""

    def __init__(self, export_dir: Path):
        self.export_dir = export_dir

    def share(self, content: str, filename: str, mime_type: str) -> Path:
        path = self.export_dir / filename
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content.encode("utf-8"))
        except OSError as e:
            if path.exists():
                path.unlink()
            raise ExportError(f"Could not write {path}: {e}") from e
        logger.info(f"Wrote {mime_type} export to {path}")
        return path


class ExportService:
    """Exports the schedule events of an injected :class:`EventStore`."""

    def __init__(
        self,
        store: EventStore,
        writer: ICSWriter | None = None,
        sink: ShareSink | None = None,
        config: MindLogConfig | None = None,
    ):
        self.store = store
        self.config = config or MindLogConfig()
        self.writer = writer or ICSWriter.from_config(self.config)
        self.sink = sink or FileShareSink(self.config.export_dir)

    def prepare(self, now: datetime | None = None) -> ExportDocument:
        """Generate the calendar document from a snapshot of the store.

        Raises:
            EmptySelectionError: If the store holds no schedule events
            FormatError: If an event carries a malformed date or time
            EncodingError: If an event carries text that cannot be encoded
        """
        moment = now or datetime.now()
        selected = self.writer.select_exportable(self.store.snapshot())
        if not selected:
            raise EmptySelectionError(NOTHING_TO_EXPORT)

        return ExportDocument(
            content=self.writer.generate(selected, now=moment),
            filename=self.writer.filename(moment.date()),
            mime_type=ICS_MIME_TYPE,
            event_count=len(selected),
        )

    def export_to_ics(self, now: datetime | None = None) -> ExportResult:
        """Generate and share the calendar; failures become an unsuccessful result."""
        try:
            document = self.prepare(now)
            path = self.sink.share(document.content, document.filename, document.mime_type)
        except EmptySelectionError as e:
            logger.info(str(e))
            return ExportResult(success=False, message=str(e))
        except (MindLogError, OSError) as e:
            logger.error(f"Export failed: {e}")
            return ExportResult(success=False, message=f"Export failed: {e}")

        noun = "event" if document.event_count == 1 else "events"
        return ExportResult(
            success=True,
            message=f"Exported {document.event_count} {noun}",
            file_path=path,
        )

    def cleanup_exported_files(self) -> int:
        """Delete previously exported .ics files; returns how many were removed."""
        export_dir = self.config.export_dir
        if not export_dir.exists():
            return 0

        removed = 0
        for path in export_dir.glob(f"*.{self.writer.get_extension()}"):
            try:
                path.unlink()
                removed += 1
            except OSError as e:
                logger.warning(f"Could not remove {path}: {e}")
        logger.info(f"Removed {removed} exported files from {export_dir}")
        return removed
