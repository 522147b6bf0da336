# tests/test_main.py

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import main


def _run(args: list[str], keys: str):
    return CliRunner().invoke(main, args, input=keys)


def test_session_writes_tasks_and_exits_zero(todo_path: Path) -> None:
    result = _run(["--file", str(todo_path)], "abuy milk\nabread\nk q")
    assert result.exit_code == 0, result.output
    data = json.loads(todo_path.read_text(encoding="utf-8"))
    assert [(e["text"], e["done"]) for e in data] == [("buy milk", True), ("bread", False)]


def test_end_of_input_exits_zero(todo_path: Path) -> None:
    result = _run(["--file", str(todo_path)], "")
    assert result.exit_code == 0
    assert not todo_path.exists()


def test_task_file_defaults_to_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_path = tmp_path / "from-env.json"
    monkeypatch.setenv("TODO_FILE", str(env_path))
    result = _run([], "ahello\nq")
    assert result.exit_code == 0
    assert json.loads(env_path.read_text(encoding="utf-8"))[0]["text"] == "hello"


def test_corrupt_file_falls_back_to_empty_list(todo_path: Path, tmp_path: Path) -> None:
    todo_path.parent.mkdir(parents=True)
    todo_path.write_text("not json", encoding="utf-8")

    result = _run(["--file", str(todo_path)], "q")

    assert result.exit_code == 0
    assert "task file was unreadable" in result.output
    assert todo_path.with_name("todos.json.bak").read_text(encoding="utf-8") == "not json"
    assert "Corrupt task file" in (tmp_path / "todo.log").read_text(encoding="utf-8")


def test_unreadable_file_exits_one(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    directory = tmp_path / "todos.json"
    directory.mkdir()
    monkeypatch.setenv("TODO_FILE", str(directory))

    result = _run([], "q")

    assert result.exit_code == 1
    assert "Cannot read" in result.output


def test_deeply_nested_file_is_treated_as_corrupt(todo_path: Path) -> None:
    todo_path.parent.mkdir(parents=True)
    todo_path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")

    result = _run(["--file", str(todo_path)], "q")

    assert result.exit_code == 0, result.output
    assert "task file was unreadable" in result.output


def test_permission_denied_exits_one(monkeypatch: pytest.MonkeyPatch, todo_path: Path) -> None:
    def denied(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(Path, "read_text", denied)
    result = _run(["--file", str(todo_path)], "q")

    assert result.exit_code == 1
    assert "Error: Cannot read" in result.output
    assert "Permission denied" in result.output
