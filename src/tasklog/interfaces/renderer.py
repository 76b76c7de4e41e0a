"""Terminal rendering of logs."""

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class LogRenderer:
    """
    Displays log contents and messages with rich.

    Normal output goes to ``console``; errors that are not about a log's
    existence go to ``err_console`` (stderr by default).
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def render_log(self, title: str, entries: Sequence[str]):
        """Show the entries of a log as a numbered list under a title banner."""
        if not entries:
            self.console.print(Panel(
                "[dim]No entries.[/dim]",
                title=f"[bold cyan]{title}[/bold cyan]",
                border_style="cyan",
            ))
            return

        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Entry")

        for i, entry in enumerate(entries, 1):
            table.add_row(str(i), Text(entry), style="bold" if i == 1 else "")

        self.console.print(Panel(
            table,
            title=f"[bold cyan]{title}[/bold cyan]",
            subtitle=f"[dim]{len(entries)} entries[/dim]",
            border_style="cyan",
        ))

    def render_names(self, names: Sequence[str]):
        """Show the names of all logs."""
        if not names:
            self.console.print("[dim]No logs. Use -n <name> to create one.[/dim]")
            return

        table = Table(title="Logs", show_header=False)
        table.add_column("Name", style="cyan")
        for name in names:
            table.add_row(Text(name))
        self.console.print(table)

    def info(self, message: str):
        self.console.print(message, markup=False, highlight=False)

    def success(self, message: str):
        self.console.print(f"[green]{escape(message)}[/green]")

    def warning(self, message: str):
        """Existence errors (missing, duplicate or empty log) go to stdout."""
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def error(self, message: str):
        self.err_console.print(f"[red]{escape(message)}[/red]")
