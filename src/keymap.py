"""Key -> command mapping with a two-state input mode.

Navigation mode maps single keys straight to list commands. Insert mode
collects printable keys into a buffer until Enter commits it as a new task
or Esc throws it away.

Keys arrive as the strings returned by click.getchar(): one character for
ordinary keys, an ANSI escape sequence for arrows on POSIX terminals, and a
two-character scan code ('\\xe0H' and friends) on Windows.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

# command kinds
MOVE_UP = 'move-up'
MOVE_DOWN = 'move-down'
TOGGLE_DONE = 'toggle-done'
ADD_TASK = 'add-task'
DELETE_TASK = 'delete-task'
SHOW_DETAIL = 'show-detail'
QUIT = 'quit'
NOOP = 'noop'

# modes
NAVIGATION = 'navigation'
INSERTING = 'inserting'

KEY_UP: Tuple[str, ...] = ('\x1b[A', '\x1bOA', '\xe0H', '\x00H')
KEY_DOWN: Tuple[str, ...] = ('\x1b[B', '\x1bOB', '\xe0P', '\x00P')
KEY_DELETE: Tuple[str, ...] = ('\x1b[3~', '\xe0S', '\x00S')
KEY_ENTER: Tuple[str, ...] = ('\r', '\n')
KEY_BACKSPACE: Tuple[str, ...] = ('\x7f', '\x08')
KEY_ESC = '\x1b'
KEY_TAB = '\t'
# escape sequences start with ESC; Windows scan codes are two characters
SCAN_CODE_PREFIXES = ('\xe0', '\x00')

NAV_KEYS = {
    'k': MOVE_UP,
    'j': MOVE_DOWN,
    ' ': TOGGLE_DONE,
    'x': TOGGLE_DONE,
    'd': DELETE_TASK,
    KEY_TAB: DELETE_TASK,
    'q': QUIT,
    KEY_ESC: QUIT,
}
for _k in KEY_UP:
    NAV_KEYS[_k] = MOVE_UP
for _k in KEY_DOWN:
    NAV_KEYS[_k] = MOVE_DOWN
for _k in KEY_DELETE:
    NAV_KEYS[_k] = DELETE_TASK
for _k in KEY_ENTER:
    NAV_KEYS[_k] = SHOW_DETAIL
del _k

INSERT_KEYS = ('a', 'i')


@dataclass(frozen=True)
class Command:
    kind: str
    text: Optional[str] = None


NOOP_COMMAND = Command(NOOP)


class InputMapper:
    def __init__(self) -> None:
        self.mode: str = NAVIGATION
        self.buffer: str = ''

    @property
    def inserting(self) -> bool:
        return self.mode == INSERTING

    def feed_keys(self, key: str) -> List[Command]:
        """Translate one read from the terminal, which may hold several keys.

        A paste or fast typing reaches click.getchar() as a single string;
        it is split into single keys (a CRLF pair counts as one Enter) so
        that letters still switch modes and Enter still commits. Escape
        sequences and scan codes are passed through whole.
        """
        if len(key) <= 1 or _is_sequence(key) or key in NAV_KEYS:
            return [self.feed(key)]
        return [self.feed(ch) for ch in key.replace('\r\n', '\r')]

    def feed(self, key: str) -> Command:
        """Translate one key press into a Command, updating the mode."""
        if self.mode == INSERTING:
            return self._feed_insert(key)
        if key in INSERT_KEYS:
            self.mode = INSERTING
            self.buffer = ''
            return NOOP_COMMAND
        kind = NAV_KEYS.get(key)
        return Command(kind) if kind else NOOP_COMMAND

    def _feed_insert(self, key: str) -> Command:
        if key in KEY_ENTER:
            text = self.buffer.strip()
            self._reset()
            return Command(ADD_TASK, text) if text else NOOP_COMMAND
        if key == KEY_ESC:
            self._reset()
            return NOOP_COMMAND
        if key in KEY_BACKSPACE:
            self.buffer = self.buffer[:-1]
        elif not _is_sequence(key):
            self.buffer += ''.join(ch for ch in key if ch.isprintable())
        return NOOP_COMMAND

    def _reset(self) -> None:
        self.mode = NAVIGATION
        self.buffer = ''


def _is_sequence(key: str) -> bool:
    if key.startswith(KEY_ESC):
        return len(key) > 1
    return len(key) == 2 and key[0] in SCAN_CODE_PREFIXES
