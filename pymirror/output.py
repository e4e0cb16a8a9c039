"""Console output helpers for the pymirror CLI."""

import json
from typing import Any

from rich.console import Console
from rich.markup import escape


class OutputFormatter:
    """Formats user-facing messages for the terminal.

    Informational messages go to stdout, warnings and errors to stderr.
    In JSON mode only ``output_json`` writes to stdout so that the output
    stays machine-readable.
    """

    json_output: bool = False
    quiet: bool = False

    def __init__(self, json_output: bool = False, quiet: bool = False):
        """Initialize output formatter.

        Args:
            json_output: Whether results should be printed as JSON
            quiet: Suppress informational messages
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console(soft_wrap=True)
        self.err_console = Console(stderr=True, soft_wrap=True)

    def print(self, message: str = "") -> None:
        if self.quiet or self.json_output:
            return
        self.console.print(escape(message), highlight=False)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if self.quiet or self.json_output:
            return
        self.console.print(escape(message), highlight=False)

    def success(self, message: str) -> None:
        """Print a success message."""
        if self.quiet or self.json_output:
            return
        self.console.print(f"[green]✓[/green] {escape(message)}", highlight=False)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        self.err_console.print(
            f"[yellow]Warning:[/yellow] {escape(message)}", highlight=False
        )

    def error(self, message: str) -> None:
        """Print an error message to stderr."""
        self.err_console.print(
            f"[red]Error:[/red] {escape(message)}", highlight=False
        )

    def output_json(self, data: Any) -> None:
        """Print data as JSON to stdout."""
        self.console.print_json(json.dumps(data, default=str))
