"""Terminal output handling using Rich library.

This module provides the OutputHandler class for CLI status output.
Messages go to stderr so converted text written to stdout can be piped.
Supports verbosity levels and the --no-color flag.
"""

from rich.console import Console
from rich.table import Table

from src.models.conversion_result import ConversionResult


class OutputHandler:
    """Handles status output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console writing to stderr

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Conversion completed")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            stderr=True,
            force_terminal=not no_color,
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

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print_stats(self, result: ConversionResult) -> None:
        """Display conversion statistics as a table.

        Args:
            result: Result of the conversion
        """
        table = Table(title="Conversion Stats", show_header=True)
        table.add_column("Metric")
        table.add_column("Value", justify="right")

        table.add_row("Input characters", f"{result.original_length:,}")
        table.add_row("Output characters", f"{result.converted_length:,}")
        table.add_row("Characters removed", f"{result.characters_removed:,}")
        table.add_row("Words", f"{result.word_count:,}")

        self.console.print(table)
