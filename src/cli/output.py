"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table

from src.models.sync_result import SyncResult


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> with handler.spinner("Syncing..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def print(self, message: str) -> None:
        self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Args:
            message: Message to display with spinner

        Yields:
            None
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_summary(self, result: SyncResult) -> None:
        """Display the outcome of one sync pass.

        Args:
            result: The pass result to summarise
        """
        self.console.print("\n[bold]Sync Summary:[/bold]")
        self.console.print(f"  Candidates: {result.candidate_count} file(s)")
        self.console.print(f"  [green]↓[/green] Rendered: {len(result.posts)} post(s)")

        if result.skipped:
            self.console.print(f"  [yellow]![/yellow] Skipped: {len(result.skipped)} file(s)")
            if self.verbosity >= 1:
                table = Table(show_header=True, header_style="bold")
                table.add_column("Path")
                table.add_column("Reason")
                for path, reason in result.skipped:
                    table.add_row(path, reason)
                self.console.print(table)

        if result.error is not None:
            self.console.print(
                f"\n[red]Sync failed, previous snapshot kept: {result.error}[/red]"
            )
        elif not result.posts:
            self.console.print("\n[yellow]No posts produced[/yellow]")
        else:
            self.console.print("\n[green]Sync completed successfully[/green]")
