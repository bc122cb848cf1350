"""Pytest fixtures for drive_upload tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest
from helpers import FakeDriveClient

from drive_upload import actions_io


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without action inputs, output file or debug flags."""
    for key in list(os.environ):
        if key.startswith("INPUT_"):
            monkeypatch.delenv(key)
    for key in ("GITHUB_OUTPUT", "DEBUG", "RUNNER_DEBUG",
                "ACTIONS_ID_TOKEN_REQUEST_URL", "ACTIONS_ID_TOKEN_REQUEST_TOKEN"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(actions_io, "exit_code", 0)


@pytest.fixture
def set_inputs(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Set action inputs the way the runner does (INPUT_<NAME> variables)."""

    def _set(**inputs: str) -> None:
        for name, value in inputs.items():
            monkeypatch.setenv(f"INPUT_{name.replace('_', '-').upper()}", value)

    return _set


@pytest.fixture
def fake_drive() -> FakeDriveClient:
    """Create an empty in-memory Drive."""
    return FakeDriveClient()


@pytest.fixture
def upload_tree(tmp_path: Path) -> Path:
    """Create a directory with file1.txt and subfolder/file2.txt."""
    root = tmp_path / "site"
    (root / "subfolder").mkdir(parents=True)
    (root / "file1.txt").write_text("first file")
    (root / "subfolder" / "file2.txt").write_text("second file")
    return root


@pytest.fixture
def temp_txt(tmp_path: Path) -> Path:
    """Create a single text file."""
    path = tmp_path / "file.txt"
    path.write_text("hello drive")
    return path
