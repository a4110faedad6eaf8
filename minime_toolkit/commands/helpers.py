"""Shared command helpers and utilities."""

import sys

from rich import print as rprint

from minime_toolkit.shared.exceptions import MinimeToolkitException


def handle_command_error(error: Exception) -> None:
    """Print a command error and exit with status 1."""
    if isinstance(error, (ValueError, MinimeToolkitException)):
        rprint(f"[red]Error:[/red] {str(error)}")
    else:
        rprint(f"[red]Unexpected error:[/red] {str(error)}")

    sys.exit(1)
