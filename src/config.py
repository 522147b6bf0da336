"""Settings resolved from environment variables and an optional .env file.

Priority for every key: real environment variable > project .env > default.
The .env file lives next to src/ (project root) and only lines of the form
KEY=VALUE are read; blank lines and comments are skipped.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

ENV_PREFIX = "TODO"
DOTENV_PATH = Path(__file__).resolve().parent.parent / '.env'
DEFAULT_TODO_FILE = Path.home() / '.config' / 'todos.json'
DEFAULT_LOG_FILE = Path.home() / '.config' / 'todo.log'


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def read_dotenv(path: Path = DOTENV_PATH) -> Dict[str, str]:
    """Parse KEY=VALUE lines from `path`; missing or unreadable file -> {}."""
    values: Dict[str, str] = {}
    try:
        text = path.read_text(encoding='utf-8')
    except OSError:
        return values
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        values[k.strip()] = v.strip().strip('"').strip("'")
    return values


def lookup(name: str, dotenv: Dict[str, str], default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    if v is not None and v.strip() != "":
        return v
    return dotenv.get(name, default)


def truthy(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    todo_file: Path
    alt_screen: bool
    log_file: Path
    log_level: str

    @staticmethod
    def from_env(dotenv: Optional[Dict[str, str]] = None) -> "Settings":
        if dotenv is None:
            dotenv = read_dotenv()
        todo_file = lookup(_k("FILE"), dotenv)
        log_file = lookup(_k("LOG_FILE"), dotenv)
        return Settings(
            todo_file=Path(todo_file).expanduser() if todo_file else DEFAULT_TODO_FILE,
            alt_screen=truthy(lookup(_k("ALT_SCREEN"), dotenv), True),
            log_file=Path(log_file).expanduser() if log_file else DEFAULT_LOG_FILE,
            log_level=(lookup(_k("LOG_LEVEL"), dotenv, "INFO") or "INFO").upper(),
        )
