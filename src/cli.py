"""Interactive loop for the to-do list.

Each cycle redraws the whole screen, blocks on one key press, maps it to a
command and applies it. Any command that changes the list is persisted right
away; a failed save keeps the list marked dirty so quitting retries it.
"""
import logging
from typing import Callable, Dict, List, Optional

import click

from keymap import (
    InputMapper, Command, MOVE_UP, MOVE_DOWN, TOGGLE_DONE, ADD_TASK,
    DELETE_TASK, SHOW_DETAIL, QUIT,
)
from models import Task
from storage import Storage, StoreIOError
from theme import color, BOLD, HEADER_COLOR, KEY_COLOR, WARN_COLOR, EMPTY_COLOR
from todo_list import TaskList, fit_width

logger = logging.getLogger(__name__)

TITLE = "To-Do"
NAV_HELP = [("Up/Down", "move"), ("Space", "toggle"), ("a", "add"),
            ("d", "delete"), ("Enter", "details"), ("q", "quit")]
INSERT_HELP = [("Enter", "save"), ("Esc", "cancel"), ("Backspace", "erase")]
# rows used by title, help, input line, spacer, status
CHROME_ROWS = 5
DETAIL_ROWS = 4


class App:
    def __init__(self, task_list: TaskList, storage: Storage, renderer,
                 mapper: Optional[InputMapper] = None, status: Optional[str] = None):
        self.task_list = task_list
        self.storage = storage
        self.renderer = renderer
        self.mapper = mapper or InputMapper()
        self.status: Optional[str] = status
        self.show_detail: bool = False
        self.dirty: bool = False
        self._handlers: Dict[str, Callable[[Command], bool]] = {
            MOVE_UP: lambda _: self.task_list.move_up(),
            MOVE_DOWN: lambda _: self.task_list.move_down(),
            TOGGLE_DONE: lambda _: self.task_list.toggle_done(),
            ADD_TASK: lambda cmd: self.task_list.add_task(Task(text=cmd.text or '')),
            DELETE_TASK: lambda _: self.task_list.delete_task(),
        }

    def run(self) -> int:
        """Main loop; returns the process exit code (0 ok, 1 final save failed)."""
        exit_message: Optional[str] = None
        code = 0
        with self.renderer.session():
            try:
                quitting = False
                while not quitting:
                    self.draw()
                    key = self.renderer.read_key()
                    for command in self.mapper.feed_keys(key):
                        if command.kind == QUIT:
                            quitting = True
                            break
                        self.apply(command)
            except (KeyboardInterrupt, EOFError):
                logger.info("Input closed; leaving")
            finally:
                if self.dirty:
                    try:
                        self._persist()
                    except StoreIOError as e:
                        exit_message = f"Could not save tasks: {e}"
                        code = 1
        if exit_message:
            click.echo(exit_message, err=True)
        logger.info("Exiting with %s (%s)", code, self.task_list)
        return code

    # -------------------- command dispatch --------------------
    def apply(self, command: Command) -> bool:
        """Apply one command; returns True when the task list changed."""
        if command.kind == SHOW_DETAIL:
            self.show_detail = not self.show_detail and self.task_list.current() is not None
            return False
        handler = self._handlers.get(command.kind)
        if handler is None:
            return False
        moved = command.kind in (MOVE_UP, MOVE_DOWN)
        changed = handler(command)
        if changed:
            self.show_detail = False
        if changed and not moved:
            self.status = None
            self.dirty = True
            self.save()
        return changed and not moved

    def save(self) -> None:
        try:
            self._persist()
        except StoreIOError as e:
            logger.error("Save failed: %s", e)
            self.status = f"Save failed: {e}"

    def _persist(self) -> None:
        self.storage.save(self.task_list)
        self.dirty = False

    # -------------------- drawing --------------------
    def draw(self) -> None:
        width, height = self.renderer.size()
        r = self.renderer
        r.clear_screen()
        r.draw_line(0, color(fit_width(f"{TITLE} ({self.task_list})", width), HEADER_COLOR, BOLD))
        r.draw_line(1, _help_line(INSERT_HELP if self.mapper.inserting else NAV_HELP))
        if self.mapper.inserting:
            r.draw_line(2, fit_width(f"Add: {self.mapper.buffer}_", width))
        else:
            r.draw_line(2, color(fit_width("Press 'a' to add a task", width), EMPTY_COLOR))
        row = 4
        detail = self._detail_lines(width) if self.show_detail else []
        list_height = max(1, height - CHROME_ROWS - len(detail))
        row += self.task_list.display(r, row, list_height, width)
        for line in detail:
            r.draw_line(row, line)
            row += 1
        if self.status:
            r.draw_line(max(row, height - 1), color(fit_width(self.status, width), WARN_COLOR))
        r.flush()

    def _detail_lines(self, width: int) -> List[str]:
        task = self.task_list.current()
        if task is None:
            return []
        lines = [
            '',
            color(fit_width(f"Task {self.task_list.cursor + 1}: {task.text}", width), BOLD),
            fit_width(f"Status: {'done' if task.done else 'pending'}", width),
            fit_width(f"Added: {task.created_at or 'unknown'}", width),
        ]
        return lines[:DETAIL_ROWS]


def _help_line(items: List[tuple]) -> str:
    parts = [f"{color(key, KEY_COLOR)} {action}" for key, action in items]
    return "Press " + ", ".join(parts)
