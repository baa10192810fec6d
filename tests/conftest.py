"""Shared pytest fixtures and configuration for the ezid-cli test suite.

Guidelines
----------
* No internet access in any test.
* The registry transport is mocked at the ``HttpClient`` /
  ``requests.Session`` boundary.
* Core tests are pure and touch neither network nor disk.
* Tests must not depend on the user's environment or home directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from ezid_cli.core.models import ArkBase


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Drop ``EZID_*`` variables and keep ``.env`` / session files in tmp."""
    for name in ("EZID_URL", "EZID_BASE", "EZID_USERNAME", "EZID_PASSWORD", "EZID_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("EZID_SESSION_FILE", str(tmp_path / "session.json"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def base() -> ArkBase:
    return ArkBase(naan="99999", shoulder="fk4")
