"""MindLog command line interface."""

import logging
import sys

from mindlog.config import MindLogConfig

FILE_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"


def _console_level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, config: MindLogConfig | None = None
) -> None:
    """Send everything to the log file and warnings (or more, with -v) to stderr.

    Args:
        verbose: Show info messages on the console
        quiet: Show only errors on the console; wins over ``verbose``
        config: Supplies the log file location (loaded from the environment if omitted)
    """
    config = config or MindLogConfig.from_env()
    config.log_path.parent.mkdir(parents=True, exist_ok=True)

    to_file = logging.FileHandler(config.log_path, encoding="utf-8")
    to_file.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    to_file.setLevel(logging.DEBUG)

    to_console = logging.StreamHandler(sys.stderr)
    to_console.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    to_console.setLevel(_console_level(verbose, quiet))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    # Repeated invocations in one process must not stack handlers
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.addHandler(to_file)
    root.addHandler(to_console)


def main() -> None:
    """Entry point of the ``mindlog`` script."""
    from cli.parser import app

    app()


__all__ = ["main", "setup_logging"]
