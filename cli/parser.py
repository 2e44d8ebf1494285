"""CLI application and command routing."""

import logging

import typer
from typing_extensions import Annotated

from cli import setup_logging
from cli.commands.add import add
from cli.commands.delete import delete
from cli.commands.edit import complete, edit
from cli.commands.export import export
from cli.commands.inspect import inspect
from cli.commands.ls import ls, show
from cli.context import CLIContext, set_context

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="mindlog",
    help="MindLog schedule and diary tool with iCalendar export.",
    no_args_is_help=True,
)


@app.callback()
def callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show info messages")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
) -> None:
    """Set up shared context and logging for every command."""
    ctx = CLIContext(verbose=verbose, quiet=quiet)
    set_context(ctx)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)


app.command("add")(add)
app.command("ls")(ls)
app.command("show")(show)
app.command("edit")(edit)
app.command("complete")(complete)
app.command("delete")(delete)
app.command("export")(export)
app.command("inspect")(inspect)
