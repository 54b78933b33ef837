"""Connection backends.
"""

from .base import ConnectionBackend
from .nmcli_backend import NmcliBackend
from .runner import CommandRunner

__all__ = [
    "CommandRunner",
    "ConnectionBackend",
    "NmcliBackend",
]
