"""Delete an event."""

import logging

import typer
from typing_extensions import Annotated

from cli.context import get_context
from cli.utils import resolve_event_id

logger = logging.getLogger(__name__)


def delete(
    event_id: Annotated[str, typer.Argument(help="Event id (or unique prefix)")],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """Delete an event and cancel its reminder."""
    store = get_context().store
    full_id = resolve_event_id(store, event_id)
    event = store.get_event(full_id)

    if not force:
        print(f"\nDelete '{event.title}' on {event.date.isoformat()}")
        if not typer.confirm("Continue?"):
            typer.echo("Delete cancelled.")
            return

    store.delete_event(full_id)
    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Deleted '{event.title}'")
