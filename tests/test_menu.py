"""
Tests for the interactive menu controller.
"""

from unittest.mock import MagicMock

import pytest

from nmvpn.cli.menu import NO_VPNS_AVAILABLE, NO_VPNS_FOUND, MenuController, format_vpn_list
from nmvpn.core.exceptions import MenuIOError
from nmvpn.core.models import ConnectionEntry, MenuAction, MenuCapabilities, OperationResult
from nmvpn.services.base import ConnectionBackend
from nmvpn.services.nmcli_backend import NmcliBackend
from tests.utils import LIST_ACTIVE, LIST_ALL

LISTING = "home:802-11-wireless\nwork-vpn:vpn\nalt-vpn:vpn"

# Main menu positions with every action enabled
CONNECT, DISCONNECT, LIST, STATUS, ADD, REMOVE, EXPORT, EXIT = range(1, 9)


@pytest.fixture
def int_prompt(mocker):
    return mocker.patch("nmvpn.cli.menu.IntPrompt.ask")


@pytest.fixture
def text_prompt(mocker):
    return mocker.patch("nmvpn.cli.menu.Prompt.ask")


@pytest.fixture
def confirm_prompt(mocker):
    return mocker.patch("nmvpn.cli.menu.Confirm.ask")


@pytest.fixture
def menu(backend, console):
    """Create a full-featured menu over the fake backend."""
    return MenuController(backend, console=console)


def output_of(menu: MenuController) -> str:
    return menu.console.file.getvalue()


class TestMenuLoop:
    """Test the main loop."""

    def test_exit_stops_loop(self, menu, int_prompt, fake_runner):
        int_prompt.side_effect = [EXIT]

        menu.run()

        assert menu.running is False
        assert fake_runner.calls == []

    def test_menu_lists_actions(self, menu, int_prompt):
        int_prompt.side_effect = [EXIT]

        menu.run()

        output = output_of(menu)
        for action in MenuAction:
            assert action.value in output

    def test_prompt_failure_is_fatal(self, menu, int_prompt):
        int_prompt.side_effect = EOFError()

        with pytest.raises(MenuIOError):
            menu.run()

    def test_interrupt_on_main_prompt_is_fatal(self, menu, int_prompt):
        int_prompt.side_effect = KeyboardInterrupt()

        with pytest.raises(MenuIOError):
            menu.run()

    def test_backend_failure_does_not_stop_loop(self, menu, int_prompt, fake_runner):
        fake_runner.script(LIST_ALL, "Error: NetworkManager is not running.", returncode=8)
        int_prompt.side_effect = [LIST, LIST, EXIT]

        menu.run()

        assert fake_runner.calls == [LIST_ALL, LIST_ALL]
        assert output_of(menu).count("NetworkManager is not running") == 2

    def test_dispatch_uses_handler_mapping(self, console):
        backend = MagicMock(spec=ConnectionBackend)
        backend.deactivate_all.return_value = OperationResult(success=True, message="done")
        menu = MenuController(backend, console=console)

        menu.dispatch(MenuAction.DISCONNECT)

        backend.deactivate_all.assert_called_once_with()

    def test_unavailable_action_rejected(self, backend, console):
        menu = MenuController(
            backend, MenuCapabilities(supports_export=False), console=console
        )

        with pytest.raises(ValueError):
            menu.dispatch(MenuAction.EXPORT)


class TestConnect:
    """Test the connect action."""

    def test_connect_selected(self, menu, int_prompt, fake_runner):
        fake_runner.script(LIST_ALL, LISTING)
        fake_runner.script(
            ("nmcli", "connection", "up", "alt-vpn"),
            "Connection successfully activated",
        )
        int_prompt.side_effect = [CONNECT, 2, EXIT]

        menu.run()

        assert ("nmcli", "connection", "up", "alt-vpn") in fake_runner.calls
        assert "Connection successfully activated" in output_of(menu)

    def test_no_vpns(self, menu, int_prompt, fake_runner):
        fake_runner.script(LIST_ALL, "home:802-11-wireless")
        int_prompt.side_effect = [CONNECT, EXIT]

        menu.run()

        assert NO_VPNS_AVAILABLE in output_of(menu)
        assert fake_runner.called("nmcli", "connection", "up") == []

    def test_cancel_entry(self, menu, int_prompt, fake_runner):
        fake_runner.script(LIST_ALL, LISTING)
        int_prompt.side_effect = [CONNECT, 0, EXIT]

        menu.run()

        assert fake_runner.called("nmcli", "connection", "up") == []

    def test_interrupted_selection_returns_to_menu(self, menu, int_prompt, fake_runner):
        fake_runner.script(LIST_ALL, LISTING)
        int_prompt.side_effect = [CONNECT, KeyboardInterrupt(), LIST, EXIT]

        menu.run()

        assert fake_runner.called("nmcli", "connection", "up") == []
        assert "Available VPN connections:" in output_of(menu)

    def test_free_text_name(self, backend, console, int_prompt, text_prompt, fake_runner):
        fake_runner.script(LIST_ALL, LISTING)
        menu = MenuController(
            backend, MenuCapabilities(supports_selection_lists=False), console=console
        )
        int_prompt.side_effect = [CONNECT, EXIT]
        text_prompt.return_value = " work-vpn "

        menu.run()

        assert ("nmcli", "connection", "up", "work-vpn") in fake_runner.calls

    def test_free_text_empty_cancels(self, backend, console, int_prompt, text_prompt, fake_runner):
        fake_runner.script(LIST_ALL, LISTING)
        menu = MenuController(
            backend, MenuCapabilities(supports_selection_lists=False), console=console
        )
        int_prompt.side_effect = [CONNECT, EXIT]
        text_prompt.return_value = ""

        menu.run()

        assert fake_runner.called("nmcli", "connection", "up") == []


class TestOtherActions:
    """Test the remaining actions."""

    def test_disconnect(self, menu, int_prompt, fake_runner):
        fake_runner.script(LIST_ACTIVE, "work-vpn:vpn")
        fake_runner.script(
            ("nmcli", "connection", "down", "work-vpn"),
            "Connection 'work-vpn' successfully deactivated",
        )
        int_prompt.side_effect = [DISCONNECT, EXIT]

        menu.run()

        assert "Disconnecting work-vpn: Connection 'work-vpn' successfully deactivated" in (
            output_of(menu)
        )

    def test_list(self, menu, int_prompt, fake_runner):
        fake_runner.script(LIST_ALL, LISTING)
        int_prompt.side_effect = [LIST, EXIT]

        menu.run()

        assert "Available VPN connections:\n1. work-vpn\n2. alt-vpn" in output_of(menu)

    def test_list_empty(self, menu, int_prompt):
        int_prompt.side_effect = [LIST, EXIT]

        menu.run()

        assert NO_VPNS_FOUND in output_of(menu)

    def test_status(self, menu, int_prompt):
        int_prompt.side_effect = [STATUS, EXIT]

        menu.run()

        output = output_of(menu)
        assert "VPN Status:" in output
        assert "No active VPN connections" in output

    def test_add(self, menu, int_prompt, text_prompt, fake_runner):
        int_prompt.side_effect = [ADD, EXIT]
        text_prompt.return_value = "  /tmp/office.ovpn "

        menu.run()

        assert fake_runner.called("nmcli", "connection", "import") == [(
            "nmcli", "connection", "import", "type", "openvpn", "file", "/tmp/office.ovpn",
        )]

    def test_add_cancelled(self, menu, int_prompt, text_prompt, fake_runner):
        int_prompt.side_effect = [ADD, EXIT]
        text_prompt.side_effect = EOFError()

        menu.run()

        assert fake_runner.calls == []
        assert "Cancelled" in output_of(menu)

    def test_add_empty_path_passed_through(self, menu, int_prompt, text_prompt, fake_runner):
        """Test the path is handed to nmcli without validation."""
        int_prompt.side_effect = [ADD, EXIT]
        text_prompt.return_value = "   "

        menu.run()

        assert fake_runner.called("nmcli", "connection", "import") == [(
            "nmcli", "connection", "import", "type", "openvpn", "file", "",
        )]

    def test_follow_up_prompt_io_error_is_fatal(self, menu, int_prompt, text_prompt, fake_runner):
        int_prompt.side_effect = [ADD, EXIT]
        text_prompt.side_effect = OSError(5, "Input/output error")

        with pytest.raises(MenuIOError):
            menu.run()

        assert fake_runner.calls == []

    def test_remove_confirmed(self, menu, int_prompt, confirm_prompt, fake_runner):
        fake_runner.script(LIST_ALL, LISTING)
        int_prompt.side_effect = [REMOVE, 1, EXIT]
        confirm_prompt.return_value = True

        menu.run()

        assert ("nmcli", "connection", "delete", "work-vpn") in fake_runner.calls
        assert "work-vpn" in confirm_prompt.call_args.args[0]

    def test_remove_declined(self, menu, int_prompt, confirm_prompt, fake_runner):
        fake_runner.script(LIST_ALL, LISTING)
        int_prompt.side_effect = [REMOVE, 1, EXIT]
        confirm_prompt.return_value = False

        menu.run()

        assert fake_runner.called("nmcli", "connection", "delete") == []

    def test_remove_no_vpns(self, menu, int_prompt, confirm_prompt):
        int_prompt.side_effect = [REMOVE, EXIT]

        menu.run()

        assert f"{NO_VPNS_AVAILABLE} to remove" in output_of(menu)
        confirm_prompt.assert_not_called()

    def test_export_default_path(self, menu, int_prompt, text_prompt, fake_runner, home_dir):
        fake_runner.script(LIST_ALL, LISTING)
        fake_runner.script(("sudo", "nmcli", "connection", "export", "alt-vpn"), "client\n")
        int_prompt.side_effect = [EXPORT, 2, EXIT]
        text_prompt.return_value = ""

        menu.run()

        assert (home_dir / "alt-vpn.ovpn").read_text() == "client\n"
        assert "Successfully exported VPN configuration to" in output_of(menu)

    def test_export_custom_path(self, menu, int_prompt, text_prompt, fake_runner, tmp_path):
        fake_runner.script(LIST_ALL, LISTING)
        fake_runner.script(("sudo", "nmcli", "connection", "export", "work-vpn"), "client\n")
        int_prompt.side_effect = [EXPORT, 1, EXIT]
        text_prompt.return_value = str(tmp_path / "office")

        menu.run()

        assert (tmp_path / "office.ovpn").exists()

    def test_export_path_cancelled(self, menu, int_prompt, text_prompt, fake_runner):
        fake_runner.script(LIST_ALL, LISTING)
        int_prompt.side_effect = [EXPORT, 1, EXIT]
        text_prompt.side_effect = KeyboardInterrupt()

        menu.run()

        assert fake_runner.called("sudo") == []

    def test_export_without_home_directory(self, console, int_prompt, text_prompt, fake_runner, mocker):
        mocker.patch(
            "nmvpn.core.models.Path.home",
            side_effect=RuntimeError("Could not determine home directory."),
        )
        fake_runner.script(LIST_ALL, LISTING)
        menu = MenuController(NmcliBackend(runner=fake_runner), console=console)
        int_prompt.side_effect = [EXPORT, 1, EXPORT, 1, EXIT]
        text_prompt.return_value = ""

        menu.run()

        assert "the default path" in text_prompt.call_args.args[0]
        assert output_of(menu).count("Error: Could not determine home directory.") == 2
        assert fake_runner.called("sudo") == []

    def test_export_hidden_without_capability(self, backend, console, int_prompt):
        menu = MenuController(
            backend, MenuCapabilities(supports_export=False), console=console
        )
        int_prompt.side_effect = [7]

        menu.run()

        assert menu.running is False
        assert MenuAction.EXPORT.value not in output_of(menu)


def test_format_vpn_list():
    entries = [ConnectionEntry(name="a", kind="vpn"), ConnectionEntry(name="b", kind="vpn")]

    assert format_vpn_list(entries) == "Available VPN connections:\n1. a\n2. b"
    assert format_vpn_list([]) == NO_VPNS_FOUND
