"""Shared helpers for the albatross CLI.

Console output goes through a single Rich console; logging is routed to a
RichHandler on the root logger so library log records appear alongside
command output.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2

console = Console()


def _error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]Error:[/red] {message}")


def _success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]{message}[/green]")


def _warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def _info(message: str) -> None:
    """Print an informational message."""
    console.print(message)


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure root logging for a CLI invocation.

    Args:
        verbose: Log at DEBUG level. Takes precedence over quiet.
        quiet: Only log warnings and errors.

    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
    logging.getLogger().setLevel(level)
