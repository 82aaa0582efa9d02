"""Terminal events and decoding of raw input sequences into them.

The screen loop sees three kinds of event: key presses, resizes and
everything else (mouse reports, pastes, unknown sequences).  Each is a frozen
dataclass; :data:`Event` is their union, meant for ``match`` statements.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------


class Key(enum.Enum):
    RUNE = "rune"
    ENTER = "enter"
    BACKSPACE = "backspace"
    TAB = "tab"
    BACKTAB = "backtab"
    ESCAPE = "escape"

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    INSERT = "insert"
    DELETE = "delete"

    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"

    CTRL_SPACE = "ctrl+space"
    CTRL_A = "ctrl+a"
    CTRL_B = "ctrl+b"
    CTRL_C = "ctrl+c"
    CTRL_D = "ctrl+d"
    CTRL_E = "ctrl+e"
    CTRL_F = "ctrl+f"
    CTRL_G = "ctrl+g"
    CTRL_K = "ctrl+k"
    CTRL_L = "ctrl+l"
    CTRL_N = "ctrl+n"
    CTRL_O = "ctrl+o"
    CTRL_P = "ctrl+p"
    CTRL_Q = "ctrl+q"
    CTRL_R = "ctrl+r"
    CTRL_S = "ctrl+s"
    CTRL_T = "ctrl+t"
    CTRL_U = "ctrl+u"
    CTRL_V = "ctrl+v"
    CTRL_W = "ctrl+w"
    CTRL_X = "ctrl+x"
    CTRL_Y = "ctrl+y"
    CTRL_Z = "ctrl+z"

    @classmethod
    def ctrl(cls, letter: str) -> Key | None:
        """Return the ``CTRL_<letter>`` member, if there is one."""
        try:
            return cls(f"ctrl+{letter.lower()}")
        except ValueError:
            return None


@dataclass(frozen=True)
class KeyEvent:
    """A key press.  ``char`` is only set for :attr:`Key.RUNE`."""

    key: Key
    char: str = ""
    alt: bool = False


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class OtherEvent:
    """Input the loop does not interpret: mouse reports, pastes, unknown keys."""

    data: str


Event = KeyEvent | ResizeEvent | OtherEvent


# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

# Unmodified xterm/vt220 sequences
_SEQUENCES: dict[str, Key] = {
    "\x1b[A": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1b[C": Key.RIGHT,
    "\x1b[D": Key.LEFT,
    "\x1b[H": Key.HOME,
    "\x1b[F": Key.END,
    "\x1bOA": Key.UP,
    "\x1bOB": Key.DOWN,
    "\x1bOC": Key.RIGHT,
    "\x1bOD": Key.LEFT,
    "\x1bOH": Key.HOME,
    "\x1bOF": Key.END,
    "\x1bOP": Key.F1,
    "\x1bOQ": Key.F2,
    "\x1bOR": Key.F3,
    "\x1bOS": Key.F4,
    "\x1b[Z": Key.BACKTAB,
}

# Final byte of ``CSI 1;<mod> <final>``
_CSI_FINAL_KEYS: dict[str, Key] = {
    "A": Key.UP,
    "B": Key.DOWN,
    "C": Key.RIGHT,
    "D": Key.LEFT,
    "H": Key.HOME,
    "F": Key.END,
    "P": Key.F1,
    "Q": Key.F2,
    "R": Key.F3,
    "S": Key.F4,
}

# Number of ``CSI <n>[;<mod>] ~``
_TILDE_KEYS: dict[int, Key] = {
    1: Key.HOME,
    2: Key.INSERT,
    3: Key.DELETE,
    4: Key.END,
    5: Key.PAGE_UP,
    6: Key.PAGE_DOWN,
    7: Key.HOME,
    8: Key.END,
    15: Key.F5,
    17: Key.F6,
    18: Key.F7,
    19: Key.F8,
    20: Key.F9,
    21: Key.F10,
    23: Key.F11,
    24: Key.F12,
}

_MODIFIED_CSI_RE = re.compile(r"^\x1b\[1;(\d+)([A-DFHPQRS])$")
_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+))?~$")

# Modifier parameter bit for alt, after subtracting one
_ALT_BIT = 2


def _has_alt(modifier: str | None) -> bool:
    if not modifier:
        return False
    return bool((int(modifier) - 1) & _ALT_BIT)


def _decode_single(ch: str, alt: bool) -> Event:
    match ch:
        case "\r" | "\n":
            return KeyEvent(Key.ENTER, alt=alt)
        case "\t":
            return KeyEvent(Key.TAB, alt=alt)
        case "\x7f" | "\x08":
            return KeyEvent(Key.BACKSPACE, alt=alt)
        case "\x1b":
            return KeyEvent(Key.ESCAPE, alt=alt)
        case "\x00":
            return KeyEvent(Key.CTRL_SPACE, alt=alt)

    code = ord(ch)
    if 1 <= code <= 26:
        key = Key.ctrl(chr(code + ord("a") - 1))
        if key is not None:
            return KeyEvent(key, alt=alt)

    if ch.isprintable():
        return KeyEvent(Key.RUNE, ch, alt=alt)

    return OtherEvent(ch)


def decode_sequence(seq: str) -> Event:
    """Map one complete input sequence to an :data:`Event`.

    *seq* is what :class:`~termgrid.input.InputSplitter` emits: a single
    character, an ESC-prefixed character (alt), an escape sequence or a
    bracketed paste.  Anything unrecognised becomes an :class:`OtherEvent`.
    """
    if not seq:
        return OtherEvent(seq)

    if len(seq) == 1:
        return _decode_single(seq, alt=False)

    if len(seq) == 2 and seq[0] == ESC:
        return _decode_single(seq[1], alt=True)

    key = _SEQUENCES.get(seq)
    if key is not None:
        return KeyEvent(key)

    if m := _MODIFIED_CSI_RE.match(seq):
        return KeyEvent(_CSI_FINAL_KEYS[m.group(2)], alt=_has_alt(m.group(1)))

    if m := _TILDE_RE.match(seq):
        key = _TILDE_KEYS.get(int(m.group(1)))
        if key is not None:
            return KeyEvent(key, alt=_has_alt(m.group(2)))

    return OtherEvent(seq)
