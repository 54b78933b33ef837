"""
Pytest configuration and shared fixtures.
"""

import io
import os
from pathlib import Path

import pytest
from rich.console import Console

from nmvpn.services.nmcli_backend import NmcliBackend
from tests.utils import FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Create a scripted command runner."""
    return FakeRunner()


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Create a temporary home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def backend(fake_runner: FakeRunner, home_dir: Path) -> NmcliBackend:
    """Create an nmcli backend bound to the fake runner."""
    return NmcliBackend(runner=fake_runner, home=home_dir)


@pytest.fixture
def console() -> Console:
    """Create a console recording to memory."""
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove NMVPN_ variables and run from an empty directory."""
    for key in list(os.environ):
        if key.startswith("NMVPN_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
