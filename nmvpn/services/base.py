"""Connection backend interface.

A backend wraps one external connection manager. Implementations provide
the primitives; the VPN-level operations the menu uses are built on top of
them here, once, for every backend.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path

from nmvpn.core.models import (
    EXPORT_SUFFIX,
    ConnectionEntry,
    ExportTarget,
    OperationResult,
)
from nmvpn.utils.logger import get_logger

NO_ACTIVE_TO_DISCONNECT = "No active VPN connections found"
NO_ACTIVE_STATUS = "No active VPN connections"

EXPORT_FILE_MODE = 0o600


class ConnectionBackend(ABC):
    """Base class for connection managers."""

    def __init__(self, home: Path | None = None, export_suffix: str = EXPORT_SUFFIX):
        """Initialize backend.

        Args:
            home: Directory for default export paths. Resolved per call
                  from the current user when not given.
            export_suffix: Extension enforced on export paths
        """
        self.home = home
        self.export_suffix = export_suffix
        self.last_error = ""
        self.logger = get_logger(self.__class__.__name__)

    # Primitives

    @abstractmethod
    def list_all(self) -> list[ConnectionEntry]:
        """List every connection, unfiltered.

        Returns an empty list on failure and stores the error text in
        ``last_error``.
        """

    @abstractmethod
    def list_active(self) -> list[ConnectionEntry]:
        """List active connections, unfiltered. Fails like ``list_all``."""

    @abstractmethod
    def activate(self, name: str) -> OperationResult:
        """Bring a connection up."""

    @abstractmethod
    def deactivate(self, name: str) -> OperationResult:
        """Take a connection down."""

    @abstractmethod
    def show_details(self, name: str) -> OperationResult:
        """Get detailed information about a connection."""

    @abstractmethod
    def import_profile(self, file_path: str) -> OperationResult:
        """Import a profile file as a VPN connection."""

    @abstractmethod
    def remove(self, name: str) -> OperationResult:
        """Delete a connection permanently."""

    @abstractmethod
    def export_config(self, name: str) -> OperationResult:
        """Get the configuration text of a connection.

        On failure the message carries the backend's error text.
        """

    # VPN operations

    def list_vpns(self) -> list[ConnectionEntry]:
        """List VPN connections in listing order."""
        return [entry for entry in self.list_all() if entry.is_vpn]

    def list_active_vpns(self) -> list[ConnectionEntry]:
        """List active VPN connections in listing order."""
        return [entry for entry in self.list_active() if entry.is_vpn]

    def deactivate_all(self) -> OperationResult:
        """
        Disconnect every active VPN connection.

        Entries are processed one at a time in listing order. A failure
        does not stop the remaining entries; every outcome is reported
        on its own line.

        Returns:
            Combined result, successful only if every entry went down
        """
        active = self.list_active_vpns()
        if not active:
            if self.last_error:
                return OperationResult(success=False, message=self.last_error)
            return OperationResult(success=True, message=NO_ACTIVE_TO_DISCONNECT)

        lines = []
        success = True
        for entry in active:
            result = self.deactivate(entry.name)
            success = success and result.success
            lines.append(f"Disconnecting {entry.name}: {_one_line(result.message)}")
        return OperationResult(success=success, message="\n".join(lines))

    def status(self) -> OperationResult:
        """
        Describe every active VPN connection.

        Returns:
            One labelled block per active connection
        """
        active = self.list_active_vpns()
        if not active:
            if self.last_error:
                return OperationResult(success=False, message=self.last_error)
            return OperationResult(success=True, message=NO_ACTIVE_STATUS)

        blocks = ["Active VPN connections:"]
        success = True
        for entry in active:
            details = self.show_details(entry.name)
            success = success and details.success
            blocks.append(f"--- {entry.name} ---\n{details.message}")
        return OperationResult(success=success, message="\n".join(blocks))

    def resolve_export_target(self, name: str, destination: str = "") -> ExportTarget:
        return ExportTarget.resolve(
            name, destination, home=self.home, suffix=self.export_suffix
        )

    def export(self, name: str, destination: str = "") -> OperationResult:
        """
        Export a connection's configuration to a file.

        Args:
            name: Connection name
            destination: Target path; empty for ``<home>/<name>.ovpn``

        Returns:
            Operation result. Backend errors are returned as-is and no
            file is written.
        """
        try:
            target = self.resolve_export_target(name, destination)
        except RuntimeError as e:
            # Path.home() fails when the home directory is unknown
            self.logger.warning("Cannot resolve export path for %s: %s", name, e)
            return OperationResult(success=False, message=f"Error: {e}")

        config = self.export_config(name)
        if not config.success:
            return config

        try:
            _write_private(target.path, config.message)
        except OSError as e:
            self.logger.warning("Export of %s to %s failed: %s", name, target.path, e)
            return OperationResult(success=False, message=f"Error writing to file: {e}")

        self.logger.info("Exported %s to %s", name, target.path)
        return OperationResult(
            success=True,
            message=f"Successfully exported VPN configuration to {target.path}",
        )


def _one_line(text: str) -> str:
    return " ".join(part.strip() for part in text.splitlines() if part.strip())


def _write_private(path: str, content: str) -> None:
    """Write content to path readable and writable by the owner only."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, EXPORT_FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        os.fchmod(handle.fileno(), EXPORT_FILE_MODE)
        handle.write(content)
        if content and not content.endswith("\n"):
            handle.write("\n")
