"""Persistence helpers (load/save/backup) for the to-do list.

The file holds a JSON array of objects, one per task, in display order:
    [{"text": "buy milk", "done": false, "created_at": "2026-10-18T09:30:00"}]
Arrays of bare strings (the older format) are still accepted on load.
"""
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

from todo_list import TaskList

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for task store failures."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class CorruptStore(StoreError):
    """The file exists but does not hold a JSON array of tasks."""


class StoreIOError(StoreError):
    """Reading or writing the file failed at the OS level."""


class Storage:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> TaskList:
        """Load the task list from disk.

        Missing file -> empty list. Invalid JSON (including nesting too deep
        to decode) or a non-array top level raises CorruptStore; any other
        OS error raises StoreIOError.
        """
        try:
            raw = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            logger.info("No task file at %s; starting empty", self.path)
            return TaskList()
        except OSError as e:
            raise StoreIOError(f"Cannot read {self.path}: {e.strerror or e}", self.path) from e
        except UnicodeDecodeError as e:
            raise CorruptStore(f"{self.path} is not UTF-8 text", self.path) from e
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise CorruptStore(f"{self.path} is not valid JSON ({e})", self.path) from e
        if not isinstance(data, list):
            raise CorruptStore(f"{self.path} does not contain a list of tasks", self.path)
        task_list = TaskList(data)
        logger.info("Loaded %d tasks from %s", len(task_list), self.path)
        return task_list

    def save(self, task_list: TaskList) -> None:
        """Persist tasks atomically (temp file in the same dir, then replace)."""
        payload = json.dumps(task_list.get_tasks(), indent=4, ensure_ascii=False) + '\n'
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            _copy_mode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise StoreIOError(f"Cannot write {self.path}: {e.strerror or e}", self.path) from e
        finally:
            if tmp_name is not None:
                _discard(tmp_name)
        logger.debug("Saved %d tasks to %s", len(task_list), self.path)

    def backup_corrupt(self) -> Optional[Path]:
        """Move an unreadable file aside to <name>.bak; returns the backup path."""
        backup = self.path.with_name(self.path.name + '.bak')
        try:
            os.replace(self.path, backup)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreIOError(f"Cannot back up {self.path}: {e.strerror or e}", self.path) from e
        logger.warning("Moved corrupt task file to %s", backup)
        return backup


def _copy_mode(target: Path, tmp_name: str) -> None:
    """Give the temp file the permissions of the file it replaces (mkstemp uses 0600)."""
    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        return
    os.chmod(tmp_name, mode)


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass
