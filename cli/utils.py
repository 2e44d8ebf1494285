"""CLI helpers shared by commands."""

import logging

import typer

from mindlog.storage.event_store import EventStore

logger = logging.getLogger(__name__)


def resolve_event_id(store: EventStore, prefix: str) -> str:
    """Expand an id prefix (as shown by ``ls``) to a full event id.

    Exits with status 1 when the prefix matches no event or several.
    """
    matches = [event.id for event in store.snapshot() if event.id.startswith(prefix)]
    if not matches:
        logger.error(f"No event matches '{prefix}'")
        raise typer.Exit(1)
    if len(matches) > 1:
        logger.error(f"'{prefix}' matches {len(matches)} events; use a longer prefix")
        raise typer.Exit(1)
    return matches[0]
