"""Terminal views of MindLog events."""

from collections import defaultdict
from datetime import date

from rich.console import Console
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from mindlog.models.event import EventType, TimelineEvent
from cli.display.console import console as shared_console
from cli.display.formatters import format_day_label, format_reminder, format_time_range


class RichEventRenderer:
    """Agenda and detail views of events.

    Styling:
    - Day labels: cyan
    - Times and ids: dim
    - Diary entries: magenta
    - Completed or cancelled items: struck through
    """

    def __init__(self, console: Console | None = None):
        self.console = console or shared_console

    def render_agenda(
        self,
        events: list[TimelineEvent],
        title: str | None = None,
        subtitle: str | None = None,
    ) -> None:
        """Print events grouped under one label per day, oldest day first."""
        if not events:
            self.render_empty()
            return

        heading = title or ""
        if subtitle:
            heading += f" [dim]({subtitle})[/dim]"
        self.console.print()
        self.console.print(Rule(f"[bold]{heading}[/bold]" if heading else "", align="left"))

        days: dict[date, list[TimelineEvent]] = defaultdict(list)
        for event in events:
            days[event.date].append(event)

        today = date.today()
        for day in sorted(days):
            self.console.print(f"\n[cyan]{format_day_label(day, today)}[/cyan]")
            for event in days[day]:
                self.console.print(self._agenda_line(event))

        noun = "event" if len(events) == 1 else "events"
        self.console.print()
        self.console.print(Rule(style="dim"))
        self.console.print(f"[dim]{len(events)} {noun}[/dim]\n")

    def render_detail(self, event: TimelineEvent) -> None:
        """Print every populated field of a single event."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Label", style="dim", width=14)
        table.add_column("Value")

        table.add_row("ID", f"[cyan]{event.id}[/cyan]")
        table.add_row("Type", event.type.value)
        table.add_row("Title", event.title)
        table.add_row("Date", event.date.isoformat())
        table.add_row("Time", format_time_range(event))
        table.add_row("Status", event.status)
        if event.description:
            table.add_row("Description", event.description)
        if event.reminder_minutes:
            table.add_row("Reminder", format_reminder(event.reminder_minutes))
        if event.question_text or event.question_id:
            table.add_row("Question", event.question_text or event.question_id)
        if event.diary_content:
            table.add_row("Diary", event.diary_content)
        if event.mood_color:
            table.add_row("Mood", f"[{event.mood_color}]■[/] {event.mood_color}")
        if event.lunar_date:
            table.add_row("Lunar date", event.lunar_date)

        self.console.print()
        self.console.print(table)
        self.console.print()

    def render_empty(self, message: str = "No events found") -> None:
        self.console.print(f"\n[dim]{message}[/dim]\n")

    def _agenda_line(self, event: TimelineEvent) -> Text:
        line = Text("  ")
        line.append(f"{format_time_range(event):<13}", style="dim")

        if event.type == EventType.DIARY:
            line.append(event.title, style="magenta")
        elif event.is_completed or event.is_cancelled:
            line.append(event.title, style="strike dim")
        else:
            line.append(event.title)

        if event.reminder_minutes:
            line.append(" 🔔", style="dim")
        line.append(f"  {event.id[:8]}", style="dim")
        return line
