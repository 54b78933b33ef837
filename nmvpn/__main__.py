"""Allow running as ``python -m nmvpn``."""

from nmvpn.cli.app import run

if __name__ == "__main__":
    run()
