"""Core Pydantic models for nmvpn.
"""

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

VPN_KIND = "vpn"
EXPORT_SUFFIX = ".ovpn"


class MenuAction(str, Enum):
    """Menu actions; each value doubles as the menu label."""

    CONNECT = "Connect to VPN"
    DISCONNECT = "Disconnect from VPN"
    LIST = "List available VPNs"
    STATUS = "Show VPN status"
    ADD = "Add VPN"
    REMOVE = "Remove VPN"
    EXPORT = "Export VPN config"
    EXIT = "Exit"


class MenuCapabilities(BaseModel):
    """Feature set of one menu controller."""

    supports_export: bool = True
    supports_selection_lists: bool = True

    model_config = ConfigDict(frozen=True)

    def actions(self) -> list[MenuAction]:
        """Menu actions in display order."""
        return [
            action
            for action in MenuAction
            if action is not MenuAction.EXPORT or self.supports_export
        ]


class ConnectionEntry(BaseModel):
    """One named connection profile known to the backend."""

    name: str = Field(..., min_length=1)
    kind: str

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def is_vpn(self) -> bool:
        """Check if the entry is a VPN connection."""
        return self.kind == VPN_KIND


class OperationResult(BaseModel):
    """Outcome of a single backend operation."""

    success: bool
    message: str = ""


class CommandOutput(BaseModel):
    """Exit status and combined stdout/stderr of one external invocation."""

    args: list[str] = Field(default_factory=list)
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def text(self) -> str:
        """Output without trailing whitespace, or a notice when there is none."""
        text = self.output.rstrip()
        if text or self.ok:
            return text
        return f"Command failed with exit status {self.returncode}"

    def to_result(self) -> OperationResult:
        return OperationResult(success=self.ok, message=self.text)


class ExportTarget(BaseModel):
    """Destination file of a connection export."""

    path: str

    @classmethod
    def resolve(
        cls,
        name: str,
        raw_path: str = "",
        home: Path | None = None,
        suffix: str = EXPORT_SUFFIX,
    ) -> "ExportTarget":
        """
        Resolve the export destination.

        An empty path defaults to ``<home>/<name><suffix>``; any other path
        gets the suffix appended unless it already ends with it.

        Args:
            name: Connection name
            raw_path: Path typed by the user, may be empty
            home: Home directory, defaults to the current user's
            suffix: Required file extension

        Returns:
            Resolved export target
        """
        raw_path = raw_path.strip()
        if not raw_path:
            base = home if home is not None else Path.home()
            return cls(path=str(Path(base) / f"{name}{suffix}"))

        path = os.path.expanduser(raw_path)
        if not path.endswith(suffix):
            path += suffix
        return cls(path=path)
