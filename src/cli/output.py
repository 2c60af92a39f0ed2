"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for progress bars, spinners, colored output, and formatted
text. Supports verbosity levels and --no-color flag.
"""

from typing import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    TimeRemainingColumn,
)
from rich.spinner import Spinner
from rich.live import Live

from .models import Correction, FixSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1+=info)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> with handler.spinner("Listing files..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False, console: Console = None):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1+=info)
            no_color: Disable color output if True
            console: Rich Console to write to (created if None)
        """
        self.verbosity = verbosity
        self.console = console or Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Example:
            >>> with handler.spinner("Collecting files..."):
            ...     files = api.list_all_files(query, fields)
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    @contextmanager
    def progress_bar(self, total: int, description: str = "Processing") -> Iterator[Progress]:
        """Display progress bar for multi-item operations.

        Example:
            >>> with handler.progress_bar(10, "Updating files") as progress:
            ...     task = progress.add_task("Updating files", total=10)
            ...     progress.update(task, advance=1)
        """
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=self.console,
        )
        with progress:
            yield progress

    def print_correction(self, correction: Correction) -> None:
        """Display one planned syncRootId change."""
        if correction.kind == "assign":
            should_be = f"'{correction.target_value}'"
        else:
            should_be = "non existant or empty"
        self.console.print(
            f"Updating syncRootId of {correction.name} [{correction.file_id}]. "
            f"Is '{correction.current_value}', but should be {should_be}",
            markup=False,
        )

    def print_summary(self, summary: FixSummary) -> None:
        """Display the fix summary with color coding."""
        title = "Dry Run - Fix Preview:" if summary.dry_run else "Fix Summary:"
        verb = "Would " if summary.dry_run else ""
        self.console.print(f"\n[bold]{title}[/bold]")
        self.console.print(f"  Files listed: {summary.total_files}")
        self.console.print(f"  [blue]⌂[/blue] In sync hierarchy: {summary.in_subtree_count}")
        self.console.print(f"  [dim]─[/dim] Outside sync hierarchy: {summary.not_in_subtree_count}")

        if summary.assigned_count > 0:
            self.console.print(
                f"  [green]↑[/green] {verb}set syncRootId: {summary.assigned_count} file(s)"
            )

        if summary.cleared_count > 0:
            self.console.print(
                f"  [yellow]✗[/yellow] {verb}clear syncRootId: {summary.cleared_count} file(s)"
            )

        if summary.corrected_count == 0:
            self.console.print("\n[green]Sync hierarchy is consistent. No changes needed.[/green]")

        if summary.elapsed_seconds is not None:
            self.console.print(f"\nSync finished in {summary.elapsed_seconds:.2f}s")
