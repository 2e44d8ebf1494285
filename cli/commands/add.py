"""Add a schedule item or diary entry."""

import logging
from datetime import date

import typer
from typing_extensions import Annotated

from mindlog.exceptions import MindLogError
from mindlog.models.event import EventType
from cli.context import get_context

logger = logging.getLogger(__name__)


def add(
    title: Annotated[str, typer.Argument(help="Event title")],
    on: Annotated[
        str | None,
        typer.Option("--date", "-d", help="Day (YYYY-MM-DD, default: today)"),
    ] = None,
    start: Annotated[
        str | None,
        typer.Option("--start", "-s", help="Start time (HH:mm); omit for all-day"),
    ] = None,
    end: Annotated[
        str | None,
        typer.Option("--end", "-e", help="End time (HH:mm)"),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", help="Notes"),
    ] = None,
    reminder: Annotated[
        int,
        typer.Option(
            "--reminder",
            "-r",
            help="Minutes before start (0 = none, 1 = at start time)",
            min=0,
        ),
    ] = 0,
    diary: Annotated[
        bool,
        typer.Option("--diary", help="Store as a diary entry instead of a schedule item"),
    ] = False,
    question_id: Annotated[
        str | None,
        typer.Option("--question", help="Question of the day answered by a diary entry"),
    ] = None,
    content: Annotated[
        str | None,
        typer.Option("--content", help="Diary text"),
    ] = None,
) -> None:
    """Add a schedule item (or, with --diary, a diary entry)."""
    store = get_context().store

    try:
        event = store.add_event(
            title=title,
            type=EventType.DIARY if diary else EventType.SCHEDULE,
            date=on or date.today().isoformat(),
            start_time=start,
            end_time=end,
            description=description,
            reminder_minutes=reminder,
            question_id=question_id,
            diary_content=content,
        )
    except MindLogError as e:
        logger.error(str(e))
        raise typer.Exit(1)

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Added '{event.title}'")
    print(f"  {event.id}")
