"""Export schedule events to an .ics file."""

import logging

import typer
from typing_extensions import Annotated

from cli.context import get_context

logger = logging.getLogger(__name__)


def export(
    cleanup: Annotated[
        bool,
        typer.Option("--cleanup", help="Remove earlier exports before writing"),
    ] = False,
) -> None:
    """Export all schedule events as an iCalendar file.

    Diary entries are not exported. The file is written to the export
    directory as <AppName>_Schedule_<YYYY-MM-DD>.ics.
    """
    service = get_context().export_service

    if cleanup:
        removed = service.cleanup_exported_files()
        logger.info(f"Removed {removed} earlier exports")

    result = service.export_to_ics()
    if not result.success:
        print(f"{typer.style('✗', fg=typer.colors.RED, bold=True)} {result.message}")
        raise typer.Exit(1)

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} {result.message}")
    print(f"  {result.file_path.resolve()}")
