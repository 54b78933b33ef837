"""Interactive terminal menu for nmvpn."""

from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt

from nmvpn.core.exceptions import MenuIOError
from nmvpn.core.models import ConnectionEntry, MenuAction, MenuCapabilities, OperationResult
from nmvpn.services.base import ConnectionBackend
from nmvpn.utils.logger import get_logger

logger = get_logger(__name__)

NO_VPNS_FOUND = "No VPN connections found"
NO_VPNS_AVAILABLE = "No VPN connections available"


def format_vpn_list(entries: list[ConnectionEntry]) -> str:
    """Format VPN entries as a numbered list."""
    if not entries:
        return NO_VPNS_FOUND
    lines = ["Available VPN connections:"]
    lines.extend(f"{i}. {entry.name}" for i, entry in enumerate(entries, 1))
    return "\n".join(lines)


class MenuController:
    """Menu loop dispatching actions to a connection backend.

    Follow-up prompts that are interrupted (Ctrl-C, end of input) or
    answered with the cancel entry skip the backend call. Only a failure of
    the main action prompt ends the loop, as ``MenuIOError``.
    """

    def __init__(
        self,
        backend: ConnectionBackend,
        capabilities: Optional[MenuCapabilities] = None,
        console: Optional[Console] = None,
    ):
        self.backend = backend
        self.capabilities = capabilities or MenuCapabilities()
        self.console = console or Console()
        self.actions = self.capabilities.actions()
        self.handlers: dict[MenuAction, Callable[[], None]] = {
            MenuAction.CONNECT: self.connect,
            MenuAction.DISCONNECT: self.disconnect,
            MenuAction.LIST: self.list_vpns,
            MenuAction.STATUS: self.status,
            MenuAction.ADD: self.add,
            MenuAction.REMOVE: self.remove,
            MenuAction.EXPORT: self.export,
            MenuAction.EXIT: self.exit,
        }
        self.running = False

    def run(self) -> None:
        """Show the menu and handle actions until Exit is chosen.

        Raises:
            MenuIOError: If the action prompt cannot be read
        """
        self.running = True
        while self.running:
            self.dispatch(self.select_action())

    def dispatch(self, action: MenuAction) -> None:
        if action not in self.actions:
            raise ValueError(f"Action not available: {action.value}")
        logger.debug("Dispatching %s", action.name)
        self.handlers[action]()

    def display_main_menu(self) -> None:
        """Display main menu options."""
        lines = [
            f"[bold green]{i}.[/bold green] {action.value}"
            for i, action in enumerate(self.actions, 1)
        ]
        self.console.print(Panel.fit(
            "\n".join(lines),
            title="Choose an action",
            border_style="bright_blue"
        ))

    def select_action(self) -> MenuAction:
        self.display_main_menu()
        try:
            choice = IntPrompt.ask(
                "Select",
                choices=[str(i) for i in range(1, len(self.actions) + 1)],
                show_choices=False,
                console=self.console,
            )
        except (EOFError, KeyboardInterrupt) as e:
            raise MenuIOError(type(e).__name__) from e
        except OSError as e:
            raise MenuIOError(str(e)) from e
        return self.actions[choice - 1]

    # Actions

    def connect(self) -> None:
        entries = self.backend.list_vpns()
        if not entries:
            self._notify_empty(NO_VPNS_AVAILABLE)
            return
        name = self.choose_connection(entries, "Select VPN to connect")
        if name is None:
            return
        with self.console.status(f"Connecting to {escape(name)}..."):
            result = self.backend.activate(name)
        self.show_result(result)

    def disconnect(self) -> None:
        with self.console.status("Disconnecting..."):
            result = self.backend.deactivate_all()
        self.show_result(result)

    def list_vpns(self) -> None:
        entries = self.backend.list_vpns()
        if not entries:
            self._notify_empty(NO_VPNS_FOUND)
            return
        self.console.print(format_vpn_list(entries), markup=False, highlight=False)

    def status(self) -> None:
        self.console.print("VPN Status:", style="bold")
        self.show_result(self.backend.status())

    def add(self) -> None:
        path = self._ask(Prompt, "Enter path to .ovpn file", default="", show_default=False)
        if path is None:
            return
        self.show_result(self.backend.import_profile(path.strip()))

    def remove(self) -> None:
        entries = self.backend.list_vpns()
        if not entries:
            self._notify_empty(f"{NO_VPNS_AVAILABLE} to remove")
            return
        name = self.choose_connection(entries, "Select VPN to remove")
        if name is None:
            return
        confirmed = self._ask(
            Confirm,
            f"Are you sure you want to remove {escape(name)}?",
            default=False,
        )
        if not confirmed:
            return
        self.show_result(self.backend.remove(name))

    def export(self) -> None:
        entries = self.backend.list_vpns()
        if not entries:
            self._notify_empty(f"{NO_VPNS_AVAILABLE} to export")
            return
        name = self.choose_connection(entries, "Select VPN to export")
        if name is None:
            return
        try:
            default = self.backend.resolve_export_target(name).path
        except RuntimeError:
            default = "the default path"
        destination = self._ask(
            Prompt,
            f"Enter export path (leave empty for {escape(default)})",
            default="",
            show_default=False,
        )
        if destination is None:
            return
        self.show_result(self.backend.export(name, destination.strip()))

    def exit(self) -> None:
        self.running = False

    # Helpers

    def choose_connection(self, entries: list[ConnectionEntry], title: str) -> Optional[str]:
        """
        Ask the user for one connection.

        Args:
            entries: Connections to choose from
            title: Prompt title

        Returns:
            Selected name, or None if cancelled
        """
        if not self.capabilities.supports_selection_lists:
            name = self._ask(Prompt, f"{title} (enter name)", default="", show_default=False)
            if not name or not name.strip():
                return None
            return name.strip()

        self.console.print(f"\n[bold]{title}:[/bold]")
        for i, entry in enumerate(entries, 1):
            self.console.print(f"{i}. {escape(entry.name)}")
        self.console.print("0. Cancel")

        choice = self._ask(
            IntPrompt,
            "Select",
            choices=[str(i) for i in range(len(entries) + 1)],
            show_choices=False,
        )
        if not choice:
            return None
        return entries[choice - 1].name

    def show_result(self, result: OperationResult) -> None:
        style = "green" if result.success else "red"
        self.console.print(result.message, style=style, markup=False, highlight=False)

    def _notify_empty(self, notice: str) -> None:
        self.console.print(notice, style="yellow")
        if self.backend.last_error:
            self.console.print(
                self.backend.last_error, style="red", markup=False, highlight=False
            )

    def _ask(self, prompt_cls, message: str, **kwargs):
        """Run a follow-up prompt, returning None when it is aborted.

        Raises:
            MenuIOError: If the terminal cannot be read
        """
        try:
            return prompt_cls.ask(message, console=self.console, **kwargs)
        except (EOFError, KeyboardInterrupt):
            self.console.print("\n[yellow]Cancelled[/yellow]")
            return None
        except OSError as e:
            raise MenuIOError(str(e)) from e
