"""Status line output for eaws commands.

Status lines go to stdout, errors to stderr. Colors are handled by rich, which
also honors ``NO_COLOR``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


def highlight(value: str) -> str:
    """Return ``value`` escaped and marked up in bold green."""
    return f"[bold green]{escape(value)}[/bold green]"


def code(value: str) -> str:
    """Return ``value`` escaped and marked up in cyan."""
    return f"[cyan]{escape(value)}[/cyan]"


class StatusConsole:
    """Prints the symbol-prefixed status lines used across commands.

    Parameters
    ----------
    verbose : bool
        Whether timing lines are printed
    console : Console | None
        Console for status lines (default: stdout)
    error_console : Console | None
        Console for error lines (default: stderr)
    """

    def __init__(
        self,
        verbose: bool = False,
        console: Console | None = None,
        error_console: Console | None = None,
    ) -> None:
        self.verbose = verbose
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)

    def info(self, message: str) -> None:
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def error(self, message: str) -> None:
        self.error_console.print(f"[red]✗[/red] {message}")

    def heading(self, message: str) -> None:
        self.console.print(f"\n[bold]{message}[/bold]")

    def line(self, message: str = "") -> None:
        self.console.print(message)

    def timing(self, label: str, seconds: float) -> None:
        """Print the elapsed time of a step when verbose output is enabled.

        Parameters
        ----------
        label : str
            Step description, e.g. ``"List clusters"``
        seconds : float
            Elapsed wall-clock time
        """
        logger.debug("%s took %.3fs", label, seconds)
        if self.verbose:
            self.info(f"✓ {label}: {seconds:.2f}s")
