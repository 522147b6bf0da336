"""Terminal renderer: buffered line drawing plus single-key input.

Rows are collected with draw_line() and written in one go by flush(), so a
redraw reaches the terminal as a single write. Keys are read with
click.getchar(), which switches the terminal to raw mode for the duration of
each read and restores it afterwards.
"""
from contextlib import contextmanager
from typing import Dict, Iterator, Tuple
import logging
import shutil

import click

logger = logging.getLogger(__name__)

# --- terminal control sequences ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home)
# Order (3J first) improves reliability in some terminals.
CLEAR = "\033[3J\033[H\033[2J\033[H"
ALT_SCREEN_ON = "\033[?1049h"
ALT_SCREEN_OFF = "\033[?1049l"
CURSOR_HIDE = "\033[?25l"
CURSOR_SHOW = "\033[?25h"


class TerminalRenderer:
    def __init__(self, alt_screen: bool = True):
        self.alt_screen = alt_screen
        self._rows: Dict[int, str] = {}

    def size(self) -> Tuple[int, int]:
        """(columns, lines) of the terminal, falling back to 80x24."""
        size = shutil.get_terminal_size((80, 24))
        return size.columns, size.lines

    def clear_screen(self) -> None:
        self._rows.clear()

    def draw_line(self, row: int, text: str) -> None:
        self._rows[row] = text

    def flush(self) -> None:
        last = max(self._rows) if self._rows else -1
        frame = '\n'.join(self._rows.get(r, '') for r in range(last + 1))
        _write(CLEAR + frame)

    def read_key(self) -> str:
        """Block until a key is pressed; an empty read means input is closed."""
        key = click.getchar()
        if not key:
            raise EOFError
        return key

    @contextmanager
    def session(self) -> Iterator["TerminalRenderer"]:
        """Alternate screen + hidden cursor, restored on every exit path."""
        if self.alt_screen:
            _write(ALT_SCREEN_ON)
        _write(CURSOR_HIDE)
        try:
            yield self
        finally:
            _write(CURSOR_SHOW)
            if self.alt_screen:
                _write(ALT_SCREEN_OFF)
            else:
                _write('\n')
            logger.debug("Terminal restored")


def _write(text: str) -> None:
    # control sequences are written even when stdout is not a TTY
    click.echo(text, nl=False, color=True)
