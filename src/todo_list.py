"""Task list logic: ordered tasks, cursor management, mutation and row drawing.

The cursor always points at an existing task when the list is non-empty and
sits at 0 when it is empty. Every mutating method returns True when the list
changed so the caller knows whether to persist.
"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import logging

from models import Task
from theme import color, BOLD, CURSOR_COLOR, DONE_COLOR, EMPTY_COLOR, PENDING_COLOR

logger = logging.getLogger(__name__)

RawEntry = Union[str, Mapping[str, Any]]
CURSOR_MARK = "> "
BLANK_MARK = "  "


class TaskList:
    def __init__(self, records: Optional[Iterable[RawEntry]] = None, cursor: int = 0):
        self.tasks: List[Task] = []
        self.cursor: int = 0
        self.scroll: int = 0  # first visible row
        if records:
            self._load_from_records(records)
        self.cursor = cursor
        self._clamp()

    # -------------------- loading / migration --------------------
    def _load_from_records(self, records: Iterable[RawEntry]) -> None:
        for raw in records:
            if isinstance(raw, str):  # legacy format: bare strings
                self.tasks.append(Task(text=raw))
                continue
            if not isinstance(raw, Mapping):
                logger.debug("Skipping non-object entry: %r", raw)
                continue
            raw_text = raw.get('text')
            if raw_text is None:
                logger.debug("Skipping entry without text: %r", raw)
                continue
            created_at = raw.get('created_at')
            self.tasks.append(Task(
                text=str(raw_text),
                done=bool(raw.get('done', False)),
                created_at=str(created_at) if created_at else None,
            ))

    # -------------------- queries --------------------
    def __len__(self) -> int:
        return len(self.tasks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskList):
            return NotImplemented
        return self.tasks == other.tasks

    def current(self) -> Optional[Task]:
        if not self.tasks:
            return None
        return self.tasks[self.cursor]

    # -------------------- cursor --------------------
    def _clamp(self) -> None:
        if not self.tasks:
            self.cursor = 0
        else:
            self.cursor = max(0, min(self.cursor, len(self.tasks) - 1))

    def move_up(self) -> bool:
        """Move the cursor one row up; stops at the first task."""
        if self.cursor > 0:
            self.cursor -= 1
            return True
        return False

    def move_down(self) -> bool:
        if self.cursor < len(self.tasks) - 1:
            self.cursor += 1
            return True
        return False

    # -------------------- task operations --------------------
    def add_task(self, task: Task) -> bool:
        if not task.created_at:
            task.created_at = datetime.now().isoformat(timespec='seconds')
        self.tasks.append(task)
        self.cursor = len(self.tasks) - 1
        return True

    def toggle_done(self) -> bool:
        task = self.current()
        if task is None:
            return False
        task.done = not task.done
        return True

    def delete_task(self) -> bool:
        if not self.tasks:
            return False
        removed = self.tasks.pop(self.cursor)
        logger.debug("Removed task %r", removed.text)
        self._clamp()
        return True

    # -------------------- serialization --------------------
    def get_tasks(self) -> List[Dict[str, Any]]:
        data: List[Dict[str, Any]] = []
        for task in self.tasks:
            entry: Dict[str, Any] = {'text': task.text, 'done': task.done}
            if task.created_at:
                entry['created_at'] = task.created_at
            data.append(entry)
        return data

    # -------------------- display --------------------
    def visible_range(self, height: int) -> range:
        """Window of task indexes that fits `height` rows and keeps the cursor in view.

        The window only scrolls when the cursor leaves it, so moving inside
        the visible rows never shifts the list.
        """
        if height <= 0 or not self.tasks:
            self.scroll = 0
            return range(0)
        if self.cursor < self.scroll:
            self.scroll = self.cursor
        elif self.cursor >= self.scroll + height:
            self.scroll = self.cursor - height + 1
        self.scroll = max(0, min(self.scroll, len(self.tasks) - height))
        return range(self.scroll, min(len(self.tasks), self.scroll + height))

    def display(self, renderer, top: int, height: int, width: int) -> int:
        """Draw task rows starting at `top`; returns the number of rows used."""
        if not self.tasks:
            renderer.draw_line(top, color(fit_width("(no tasks, press 'a' to add one)", width), EMPTY_COLOR))
            return 1
        rows = 0
        for idx in self.visible_range(height):
            task = self.tasks[idx]
            selected = idx == self.cursor
            mark = CURSOR_MARK if selected else BLANK_MARK
            line = fit_width(f"{mark}{task.checkbox} {idx + 1}. {task.text}", width)
            styles = [DONE_COLOR if task.done else PENDING_COLOR]
            if selected:
                styles = [CURSOR_COLOR, BOLD]
            renderer.draw_line(top + rows, color(line, *styles))
            rows += 1
        return rows

    def __str__(self) -> str:
        done = sum(1 for t in self.tasks if t.done)
        return f'{len(self.tasks)} tasks, {done} done'


def fit_width(text: str, width: int) -> str:
    if width <= 0 or len(text) <= width:
        return text
    if width == 1:
        return text[:1]
    return text[:width - 1] + '…'
