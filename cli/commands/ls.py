"""List events."""

import logging

import typer
from typing_extensions import Annotated

from mindlog.exceptions import FormatError
from cli.context import get_context
from cli.display import RichEventRenderer
from cli.utils import resolve_event_id

logger = logging.getLogger(__name__)


def ls(
    on: Annotated[
        str | None,
        typer.Option("--date", "-d", help="Only events on this day (YYYY-MM-DD)"),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Show all events (overrides --limit)"),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Limit number of events to show"),
    ] = None,
) -> None:
    """List stored events grouped by day."""
    ctx = get_context()
    store = ctx.store
    renderer = RichEventRenderer()

    if on:
        try:
            events = store.get_events_by_date(on)
        except FormatError as e:
            logger.error(str(e))
            raise typer.Exit(1)
        renderer.render_agenda(events, title="Events", subtitle=on)
        return

    events = sorted(
        store.snapshot(),
        key=lambda e: (e.date, e.start_time is not None, e.start_time),
    )
    total = len(events)
    if not show_all:
        events = events[: limit or ctx.config.ls_default_limit]

    subtitle = f"{len(events)} of {total}" if len(events) < total else None
    renderer.render_agenda(events, title="Events", subtitle=subtitle)


def show(
    event_id: Annotated[str, typer.Argument(help="Event id (or unique prefix)")],
) -> None:
    """Show every field of one event."""
    store = get_context().store
    RichEventRenderer().render_detail(store.get_event(resolve_event_id(store, event_id)))
