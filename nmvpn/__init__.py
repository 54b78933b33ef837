"""nmvpn - Interactive terminal menu for NetworkManager VPN profiles

Lists, connects, disconnects, imports, removes and exports VPN
connections by driving ``nmcli`` from a rich terminal menu.
"""

__version__ = "1.0.0"
__author__ = "nmvpn Team"

__all__ = ["__author__", "__version__"]
