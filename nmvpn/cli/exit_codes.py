"""Exit codes for the nmvpn CLI.

Backend failures are reported in the menu and never change the exit
status; only startup problems exit non-zero.
"""

from contextlib import contextmanager
from enum import IntEnum
from typing import Any, Optional

import typer
from rich.console import Console

from nmvpn.core.exceptions import ConfigurationError, MenuIOError, NMVPNError

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Exit codes for nmvpn."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIG_INVALID = 35


def exit_with_code(
    code: ExitCode,
    message: str = "",
    details: Optional[dict[str, Any]] = None,
) -> None:
    """Exit the application with the specified code and message."""
    if code == ExitCode.SUCCESS:
        if message:
            console.print(message, markup=False, highlight=False)
    else:
        console.print(f"[red]✗[/red] {message or code.name}", highlight=False)
        if details:
            console.print("[dim]Details:[/dim]")
            for key, value in details.items():
                console.print(f"  {key}: {value}", markup=False, highlight=False)

    raise typer.Exit(code.value)


def exit_code_for(exception: Exception) -> ExitCode:
    """Map exceptions to exit codes."""
    if isinstance(exception, MenuIOError):
        # The menu has no distinct failure status
        return ExitCode.SUCCESS
    if isinstance(exception, ConfigurationError):
        return ExitCode.CONFIG_INVALID
    return ExitCode.GENERAL_ERROR


@contextmanager
def handle_cli_errors():
    """Turn nmvpn errors into a printed message and an exit code."""
    try:
        yield
    except NMVPNError as e:
        code = exit_code_for(e)
        message = f"Error: {e.message}" if code == ExitCode.SUCCESS else e.message
        exit_with_code(code, message, details=None if code == ExitCode.SUCCESS else e.details)
