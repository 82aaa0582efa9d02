"""Split raw terminal input into complete sequences.

Reads from a tty arrive in arbitrary chunks, so an escape sequence can be cut
in half.  :class:`InputSplitter` holds back an unfinished escape sequence
until the rest arrives (or :meth:`InputSplitter.flush` gives up on it) and
delivers a bracketed paste as one chunk, markers included.
"""

from __future__ import annotations

import enum
import re

from termgrid.events import BRACKETED_PASTE_END, BRACKETED_PASTE_START, ESC

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


class _Status(enum.Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


def _terminated_by_st(data: str) -> _Status:
    if data.endswith(f"{ESC}\\") or data.endswith("\x07"):
        return _Status.COMPLETE
    return _Status.INCOMPLETE


def _csi_status(data: str) -> _Status:
    if len(data) < 3:
        return _Status.INCOMPLETE

    payload = data[2:]
    if payload.startswith("M"):
        # X10 mouse: CSI M plus three raw bytes
        return _Status.COMPLETE if len(data) >= 6 else _Status.INCOMPLETE

    if not 0x40 <= ord(payload[-1]) <= 0x7E:
        return _Status.INCOMPLETE

    if payload.startswith("<") and not _SGR_MOUSE_RE.match(payload):
        return _Status.INCOMPLETE
    return _Status.COMPLETE


def _sequence_status(data: str) -> _Status:
    """Tell whether *data*, which starts with ESC, is a whole sequence yet."""
    if len(data) == 1:
        return _Status.INCOMPLETE

    match data[1]:
        case "[":
            return _csi_status(data)
        case "]" | "P" | "_":
            return _terminated_by_st(data)
        case "O":
            return _Status.COMPLETE if len(data) >= 3 else _Status.INCOMPLETE
        case _:
            return _Status.COMPLETE


def _split(buffer: str) -> tuple[list[str], str]:
    """Return the complete sequences at the front of *buffer* and the rest."""
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while end <= len(buffer):
            if _sequence_status(buffer[pos:end]) is _Status.COMPLETE:
                break
            end += 1
        else:
            return sequences, buffer[pos:]

        sequences.append(buffer[pos:end])
        pos = end

    return sequences, ""


class InputSplitter:
    """Accumulates input chunks and hands back complete sequences."""

    def __init__(self) -> None:
        self._buffer = ""
        self._paste: str | None = None

    @property
    def pending(self) -> str:
        """Input held back because it is not complete yet."""
        if self._paste is not None:
            return BRACKETED_PASTE_START + self._paste
        return self._buffer

    @property
    def in_paste(self) -> bool:
        return self._paste is not None

    def feed(self, data: str) -> list[str]:
        """Add *data* and return every sequence that is now complete."""
        out: list[str] = []
        self._buffer += data

        while self._buffer:
            if self._paste is not None:
                self._paste += self._buffer
                self._buffer = ""
                end = self._paste.find(BRACKETED_PASTE_END)
                if end == -1:
                    break
                out.append(BRACKETED_PASTE_START + self._paste[:end] + BRACKETED_PASTE_END)
                self._buffer = self._paste[end + len(BRACKETED_PASTE_END) :]
                self._paste = None
                continue

            start = self._buffer.find(BRACKETED_PASTE_START)
            if start == -1:
                sequences, self._buffer = _split(self._buffer)
                out.extend(sequences)
                break

            sequences, rest = _split(self._buffer[:start])
            out.extend(sequences)
            if rest:
                out.append(rest)
            self._paste = ""
            self._buffer = self._buffer[start + len(BRACKETED_PASTE_START) :]

        return out

    def flush(self) -> list[str]:
        """Give up waiting: return held-back input as it stands."""
        pending = self.pending
        self.clear()
        return [pending] if pending else []

    def clear(self) -> None:
        self._buffer = ""
        self._paste = None
