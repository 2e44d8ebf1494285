"""Show events of a calendar file from another application."""

import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from mindlog.exceptions import MindLogError
from mindlog.models.event import TimelineEvent
from cli.context import get_context
from cli.display import RichEventRenderer, console

logger = logging.getLogger(__name__)


def inspect(
    path: Annotated[
        Path,
        typer.Argument(help="Path to an .ics file", exists=True, dir_okay=False),
    ],
) -> None:
    """Show the events of an .ics file without importing them."""
    reader = get_context().reader

    try:
        calendar = reader.read(path)
        events = [TimelineEvent.from_ivevent(event) for event in calendar.events]
    except MindLogError as e:
        logger.error(f"Cannot read {path}: {e}")
        raise typer.Exit(1)

    events.sort(key=lambda e: (e.date, e.start_time is not None, e.start_time))
    RichEventRenderer().render_agenda(events, title=calendar.name or path.name)

    foreign = sorted({name for event in events for name in event.x_props})
    if foreign:
        console.print(f"[dim]Unrecognized properties kept: {', '.join(foreign)}[/dim]\n")
