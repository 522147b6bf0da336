"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import os, sys

from config import lookup, read_dotenv

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _valid_hex(value: str | None) -> bool:
    if not value:
        return False
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    """Convert a hex color code to an ANSI escape sequence."""
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
REVERSE = _code('7')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_PENDING_DEFAULT = '#48B3AF'
HEX_DONE_DEFAULT = '#A7E399'

def _resolve(name: str, default: str) -> str:
    value = lookup(name, _DOTENV)
    return '#' + value.lstrip('#') if _valid_hex(value) else default

_DOTENV = read_dotenv()
HEX_PRIMARY = _resolve('TODO_PRIMARY', HEX_PRIMARY_DEFAULT)
HEX_PENDING = _resolve('TODO_PENDING', HEX_PENDING_DEFAULT)
HEX_DONE = _resolve('TODO_DONE', HEX_DONE_DEFAULT)

PRIMARY = _from_hex(HEX_PRIMARY)
PENDING_COLOR = _from_hex(HEX_PENDING)
DONE_COLOR = DIM + _from_hex(HEX_DONE)

HEADER_COLOR = PRIMARY
KEY_COLOR = PRIMARY + BOLD  # key names in the help line
CURSOR_COLOR = REVERSE
EMPTY_COLOR = DIM + PRIMARY
WARN_COLOR = _code('33')

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','RESET','BOLD','DIM','REVERSE','HEADER_COLOR','KEY_COLOR','CURSOR_COLOR',
    'EMPTY_COLOR','PENDING_COLOR','DONE_COLOR','WARN_COLOR',
    'HEX_PRIMARY','HEX_PENDING','HEX_DONE','_ENABLE','_USE_TRUECOLOR','_FORCE'
]
