"""Shared CLI context with lazy-initialized dependencies."""

from mindlog.config import MindLogConfig
from mindlog.export_service import ExportService
from mindlog.ingestion.ics_reader import ICSReader
from mindlog.storage.event_store import EventStore


class CLIContext:
    """Shared context with lazy-initialized dependencies for CLI commands.

    Usage:
        ctx = CLIContext()
        events = ctx.store.snapshot()
    """

    def __init__(self, verbose: bool = False, quiet: bool = False):
        """Initialize CLI context.

        Args:
            verbose: If True, enable info logging on the console
            quiet: If True, suppress non-error output
        """
        self.verbose = verbose
        self.quiet = quiet

        # Lazy-loaded dependencies
        self._config: MindLogConfig | None = None
        self._store: EventStore | None = None
        self._export_service: ExportService | None = None
        self._reader: ICSReader | None = None

    @property
    def config(self) -> MindLogConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = MindLogConfig.from_env()
        return self._config

    @property
    def store(self) -> EventStore:
        """Get event store (lazy-loaded).

        No reminder scheduler is attached; reminder handles only live as long
        as the process that scheduled them, so CLI events never carry one.
        """
        if self._store is None:
            self._store = EventStore(self.config.store_path)
        return self._store

    @property
    def export_service(self) -> ExportService:
        """Get export service bound to the store (lazy-loaded)."""
        if self._export_service is None:
            self._export_service = ExportService(self.store, config=self.config)
        return self._export_service

    @property
    def reader(self) -> ICSReader:
        """Get ICS reader (lazy-loaded)."""
        if self._reader is None:
            self._reader = ICSReader()
        return self._reader


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context."""
    global _ctx
    _ctx = ctx
