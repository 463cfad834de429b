"""Shared pytest fixtures and configuration for the geocache-cli test suite.

Guidelines
----------
* No network access in any test.
* The transport is faked at the core boundary (``fakes.FakeTransport``),
  or replaced with ``httpx.MockTransport`` at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on environment variables or a local ``.env``.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from fakes import RecordingPrinter


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Hide GEOCACHE_* variables and any ``.env`` in the working directory."""
    for name in list(os.environ):
        if name.upper().startswith("GEOCACHE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def printer() -> RecordingPrinter:
    return RecordingPrinter()
