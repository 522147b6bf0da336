"""Main entry point for the terminal to-do list.

Loads the task file, runs the interactive loop and turns storage failures
into exit codes: 0 on a clean quit, 1 when the startup load or the final
save fails at the OS level.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from cli import App
from config import Settings
from logging_setup import setup_logging
from renderer import TerminalRenderer
from storage import Storage, CorruptStore, StoreIOError
from todo_list import TaskList

logger = logging.getLogger(__name__)


@click.command()
@click.option('--file', 'path', type=click.Path(dir_okay=False, path_type=Path),
              default=None, help='Task file (default: $TODO_FILE or ~/.config/todos.json).')
@click.option('--no-alt-screen', is_flag=True, default=False,
              help='Draw in the normal screen buffer instead of the alternate one.')
def main(path: Optional[Path], no_alt_screen: bool) -> None:
    """Keyboard-driven to-do list."""
    settings = Settings.from_env()
    setup_logging(settings.log_file, settings.log_level)
    storage = Storage(path or settings.todo_file)

    status: Optional[str] = None
    try:
        task_list = storage.load()
    except CorruptStore as e:
        logger.warning("Corrupt task file: %s", e)
        try:
            backup = storage.backup_corrupt()
        except StoreIOError as io_err:
            click.echo(f"Error: {io_err}", err=True)
            sys.exit(1)
        task_list = TaskList()
        status = f"Warning: task file was unreadable; saved a copy as {backup.name if backup else '?'}"
    except StoreIOError as e:
        logger.error("Startup load failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    renderer = TerminalRenderer(alt_screen=settings.alt_screen and not no_alt_screen)
    sys.exit(App(task_list, storage, renderer, status=status).run())


if __name__ == "__main__":
    main()
