"""Data models for the terminal to-do application.

Only the Task dataclass lives here. Stored field names ("text", "done")
match the persisted JSON keys so records load without a mapping layer.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

@dataclass
class Task:
    """A single to-do entry.

    Fields:
        text: Free-form single-line description.
        done: Completion flag.
        created_at: ISO timestamp when the task was added (None for tasks
            imported from the legacy string-only format).
    """
    text: str
    done: bool = False
    created_at: Optional[str] = None

    @property
    def checkbox(self) -> str:
        return "[x]" if self.done else "[ ]"

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(text={self.text!r}, done={self.done})"
