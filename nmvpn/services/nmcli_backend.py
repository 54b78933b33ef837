"""
NetworkManager backend driven through ``nmcli``.
"""

from pathlib import Path
from typing import Optional

from nmvpn.core.config import Settings
from nmvpn.core.models import EXPORT_SUFFIX, ConnectionEntry, OperationResult
from nmvpn.services.base import ConnectionBackend
from nmvpn.services.parsing import parse_entries
from nmvpn.services.runner import CommandRunner

LIST_FIELDS = "NAME,TYPE"


class NmcliBackend(ConnectionBackend):
    """Connection backend for NetworkManager."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        binary: str = "nmcli",
        import_type: str = "openvpn",
        export_with_sudo: bool = True,
        home: Optional[Path] = None,
        export_suffix: str = EXPORT_SUFFIX,
    ):
        """
        Initialize the nmcli backend.

        Args:
            runner: Command runner, a new one by default
            binary: nmcli executable
            import_type: VPN plugin type used for imports
            export_with_sudo: Prefix exports with sudo
            home: Directory for default export paths
            export_suffix: Extension enforced on export paths
        """
        super().__init__(home=home, export_suffix=export_suffix)
        self.runner = runner or CommandRunner()
        self.binary = binary
        self.import_type = import_type
        self.export_with_sudo = export_with_sudo

    @classmethod
    def from_settings(
        cls, settings: Settings, runner: Optional[CommandRunner] = None
    ) -> "NmcliBackend":
        return cls(
            runner=runner,
            binary=settings.nmcli_binary,
            import_type=settings.import_type,
            export_with_sudo=settings.export_with_sudo,
            export_suffix=settings.export_suffix,
        )

    def list_all(self) -> list[ConnectionEntry]:
        return self._list(["-t", "-f", LIST_FIELDS, "connection", "show"])

    def list_active(self) -> list[ConnectionEntry]:
        return self._list(["-t", "-f", LIST_FIELDS, "connection", "show", "--active"])

    def activate(self, name: str) -> OperationResult:
        self.logger.info("Activating %s", name)
        return self._nmcli("connection", "up", name)

    def deactivate(self, name: str) -> OperationResult:
        self.logger.info("Deactivating %s", name)
        return self._nmcli("connection", "down", name)

    def show_details(self, name: str) -> OperationResult:
        return self._nmcli("connection", "show", name)

    def import_profile(self, file_path: str) -> OperationResult:
        self.logger.info("Importing %s as %s", file_path, self.import_type)
        return self._nmcli(
            "connection", "import", "type", self.import_type, "file", file_path
        )

    def remove(self, name: str) -> OperationResult:
        self.logger.info("Deleting %s", name)
        return self._nmcli("connection", "delete", name)

    def export_config(self, name: str) -> OperationResult:
        # Reading VPN secrets requires root
        prefix = ["sudo"] if self.export_with_sudo else []
        output = self.runner.run([*prefix, self.binary, "connection", "export", name])
        return output.to_result()

    def _nmcli(self, *args: str) -> OperationResult:
        return self.runner.run([self.binary, *args]).to_result()

    def _list(self, args: list[str]) -> list[ConnectionEntry]:
        self.last_error = ""
        output = self.runner.run([self.binary, *args])
        if not output.ok:
            self.last_error = output.text
            self.logger.warning("Connection listing failed: %s", self.last_error)
            return []
        return parse_entries(output.output)
