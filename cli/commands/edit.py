"""Edit or complete an event."""

import logging

import typer
from typing_extensions import Annotated

from mindlog.exceptions import MindLogError
from cli.context import get_context
from cli.utils import resolve_event_id

logger = logging.getLogger(__name__)


def edit(
    event_id: Annotated[str, typer.Argument(help="Event id (or unique prefix)")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    on: Annotated[str | None, typer.Option("--date", "-d", help="New day (YYYY-MM-DD)")] = None,
    start: Annotated[str | None, typer.Option("--start", "-s", help="New start time (HH:mm)")] = None,
    end: Annotated[str | None, typer.Option("--end", "-e", help="New end time (HH:mm)")] = None,
    description: Annotated[str | None, typer.Option("--description", help="New notes")] = None,
    reminder: Annotated[
        int | None,
        typer.Option("--reminder", "-r", help="Minutes before start (0 = none, 1 = at start time)", min=0),
    ] = None,
) -> None:
    """Change title, time, notes or reminder of an event."""
    store = get_context().store
    full_id = resolve_event_id(store, event_id)

    updates = {
        "title": title,
        "date": on,
        "start_time": start,
        "end_time": end,
        "description": description,
        "reminder_minutes": reminder,
    }
    updates = {key: value for key, value in updates.items() if value is not None}
    if not updates:
        print("Nothing to change.")
        return

    try:
        event = store.update_event(full_id, **updates)
    except MindLogError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Updated '{event.title}'")


def complete(
    event_id: Annotated[str, typer.Argument(help="Event id (or unique prefix)")],
    undo: Annotated[bool, typer.Option("--undo", help="Mark as not completed")] = False,
) -> None:
    """Mark a schedule item as completed."""
    store = get_context().store
    full_id = resolve_event_id(store, event_id)

    try:
        event = store.update_event(full_id, is_completed=not undo)
    except MindLogError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    state = "active" if undo else "completed"
    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} '{event.title}' is {state}")
