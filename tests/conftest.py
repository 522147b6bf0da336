# tests/conftest.py

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

# Plain-text frames: colour support is decided when theme is first imported.
os.environ["NO_COLOR"] = "1"

from storage import Storage  # noqa: E402


@pytest.fixture()
def todo_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "todos.json"


@pytest.fixture()
def storage(todo_path: Path) -> Storage:
    return Storage(todo_path)


@pytest.fixture()
def write_json(todo_path: Path):
    """Write raw JSON-serialisable data to the task file."""

    def _write(data) -> Path:
        todo_path.parent.mkdir(parents=True, exist_ok=True)
        todo_path.write_text(json.dumps(data), encoding="utf-8")
        return todo_path

    return _write


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the user's real task and log files."""
    monkeypatch.setenv("TODO_FILE", str(tmp_path / "env-todos.json"))
    monkeypatch.setenv("TODO_LOG_FILE", str(tmp_path / "todo.log"))
    monkeypatch.setenv("TODO_ALT_SCREEN", "0")
