"""Output formatting utilities built on rich."""

import sys

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from airmux.core.cascade import resolve
from airmux.core.errors import format_error
from airmux.schemas.project import Project


class OutputFormatter:
    """Formats command output for the terminal."""

    def __init__(self, force_color: bool = False):
        """Initialize formatter."""
        self.console = Console(force_terminal=force_color or None, file=sys.stdout)
        self.error_console = Console(force_terminal=force_color or None, file=sys.stderr)

    def print_text(self, text: str) -> None:
        """Print text verbatim, without markup or wrapping."""
        self.console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True, end="")

    def print_summary(self, project: Project) -> None:
        """Print the windows and panes a project will create."""
        resolved = resolve(project)
        table = Table(
            title=f"Session {escape(str(project.session_name))}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Window", style="cyan")
        table.add_column("Name", style="green")
        table.add_column("Panes", justify="right")
        table.add_column("Working dir")

        for window in resolved.windows:
            table.add_row(
                str(window.index),
                escape(window.name) if window.name else "-",
                str(len(window.panes)),
                escape(str(window.working_dir)) if window.working_dir else "-",
            )

        self.console.print(table)
        attach = "attach" if project.attach else "detached"
        self.console.print(
            f"[bold green]OK[/bold green] {escape(str(project.tmux_command))} ({attach}, "
            f"startup window {resolved.startup_window_index})",
            highlight=False,
        )

    def print_error(self, error: BaseException) -> None:
        """Print an error in a red panel on stderr."""
        self.error_console.print(
            Panel(Text(format_error(error)), title="Error", border_style="red", expand=False)
        )
