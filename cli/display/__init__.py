"""Display module for rendering MindLog output.

- RichEventRenderer: agenda and detail views of events
- console: Shared Rich console instance
- Formatting functions for times, reminders and day labels
"""

from cli.display.console import console
from cli.display.formatters import format_day_label, format_reminder, format_time_range
from cli.display.rich_renderer import RichEventRenderer

__all__ = [
    "console",
    "RichEventRenderer",
    "format_day_label",
    "format_reminder",
    "format_time_range",
]
