"""
Custom exceptions for nmvpn.
"""

from typing import Any, Dict, Optional


class NMVPNError(Exception):
    """Base exception for all nmvpn errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(NMVPNError):
    """Configuration related errors."""
    pass


class MenuIOError(NMVPNError):
    """The menu prompt could not be rendered or read."""

    def __init__(self, reason: str = "terminal unavailable"):
        super().__init__(
            f"Menu input failed: {reason}",
            error_code="MENU_IO_FAILED",
            details={"reason": reason}
        )


class BackendError(NMVPNError):
    """Connection backend errors."""
    pass


class CommandNotFoundError(BackendError):
    """The external connection manager is not installed."""

    def __init__(self, binary: str):
        super().__init__(
            f"{binary} not found. Please ensure NetworkManager is installed.",
            details={"binary": binary}
        )


class CommandLaunchError(BackendError):
    """The external command exists but could not be started."""

    def __init__(self, binary: str, reason: str):
        super().__init__(
            f"Could not run {binary}: {reason}",
            details={"binary": binary, "reason": reason}
        )
