"""
Main CLI application using Typer.
"""

from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console

from nmvpn import __version__
from nmvpn.cli.exit_codes import ExitCode, exit_with_code, handle_cli_errors
from nmvpn.cli.menu import MenuController
from nmvpn.core.config import load_settings
from nmvpn.services.nmcli_backend import NmcliBackend
from nmvpn.utils.logger import get_logger, setup_logging

app = typer.Typer(
    name="nmvpn",
    help="Interactive menu for NetworkManager VPN connections",
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
)

logger = get_logger(__name__)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        rprint(f"[bold]nmvpn[/bold] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.command()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode",
        envvar="NMVPN_DEBUG",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose output",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file",
    ),
    no_export: bool = typer.Option(
        False,
        "--no-export",
        help="Hide the export action",
    ),
    free_text: bool = typer.Option(
        False,
        "--free-text",
        help="Type connection names instead of picking from a list",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
):
    """
    Manage NetworkManager VPN connections from an interactive menu.
    """
    with handle_cli_errors():
        settings = load_settings(
            debug=debug or None,
            log_file=log_file,
            supports_export=False if no_export else None,
            selection_lists=False if free_text else None,
        )

        log_level = "DEBUG" if verbose or settings.debug else settings.log_level
        setup_logging(
            log_level=log_level,
            log_file=settings.log_file,
            rich_output=not no_color,
            debug=settings.debug,
        )
        logger.debug("Starting with %s", settings.capabilities)

        backend = NmcliBackend.from_settings(settings)
        controller = MenuController(
            backend,
            capabilities=settings.capabilities,
            console=Console(no_color=no_color),
        )
        controller.run()

    exit_with_code(ExitCode.SUCCESS)


def run() -> None:
    """Console script entry point."""
    app()
