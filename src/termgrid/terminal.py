"""Terminal abstraction: a cell-addressed screen plus a blocking event source.

Provides a ``Terminal`` protocol and a concrete ``AnsiTerminal`` driving a
real tty through raw mode, the alternate screen and ANSI escape sequences.
``AnsiTerminal`` double-buffers its content and repaints only the rows that
changed since the last :meth:`~AnsiTerminal.show`.
"""

from __future__ import annotations

import codecs
import logging
import os
import select
import signal
import sys
import termios
import threading
import tty
from collections import deque
from typing import Protocol, TextIO

from wcwidth import wcwidth

from termgrid.events import Event, ResizeEvent, decode_sequence
from termgrid.input import InputSplitter
from termgrid.style import DEFAULT_STYLE, Style

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENTER = "\x1b[?1049h"
_ALT_SCREEN_EXIT = "\x1b[?1049l"

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

# Button tracking, drag tracking, SGR extended reports
_MOUSE_ENABLE = "\x1b[?1000h\x1b[?1002h\x1b[?1006h"
_MOUSE_DISABLE = "\x1b[?1006l\x1b[?1002l\x1b[?1000l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_RESET_STYLE = "\x1b[0m"
_MOVE_TO_FMT = "\x1b[{};{}H"

# Wake-up bytes written to the self-pipe
_WAKE_RESIZE = b"r"
_WAKE_SHUTDOWN = b"q"

# Seconds to wait for the rest of an escape sequence
_ESCAPE_TIMEOUT = 0.05

_FALLBACK_SIZE = (80, 24)


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface the screen loop drives."""

    def init(self) -> None: ...

    def fini(self) -> None: ...

    def size(self) -> tuple[int, int]: ...

    def set_style(self, style: Style) -> None: ...

    def poll_event(self) -> Event | None:
        """Block until the next event; return ``None`` once :meth:`fini` ran."""
        ...

    def set_content(self, x: int, y: int, char: str, style: Style) -> None: ...

    def show(self) -> None: ...

    def clear(self) -> None: ...

    def enable_mouse(self) -> None: ...


# ---------------------------------------------------------------------------
# AnsiTerminal implementation
# ---------------------------------------------------------------------------

_Slot = tuple[str, Style]


class AnsiTerminal:
    """Concrete terminal backed by ``sys.stdin``/``sys.stdout``.

    Manages raw mode via :mod:`tty` and :mod:`termios`.  SIGWINCH and
    :meth:`fini` both wake a blocked :meth:`poll_event` through a self-pipe,
    so the poller can run in a worker thread.
    """

    def __init__(self, input_fd: int | None = None, output: TextIO | None = None) -> None:
        self._input_fd = sys.stdin.fileno() if input_fd is None else input_fd
        self._output = sys.stdout if output is None else output
        self._write_log_path: str = os.environ.get("TERMGRID_WRITE_LOG", "")

        self._style = DEFAULT_STYLE
        self._width, self._height = 0, 0
        self._back: list[list[_Slot]] = []
        self._front: list[list[_Slot | None]] = []

        self._splitter = InputSplitter()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: deque[str] = deque()

        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None
        self._wake_r: int | None = None
        self._wake_w: int | None = None
        self._mouse = False
        self._closed = False
        self._polling = False
        self._state_lock = threading.Lock()
        self._buffer_lock = threading.Lock()

    # -- init / fini --------------------------------------------------------

    def init(self) -> None:
        """Enter raw mode and the alternate screen."""
        self._original_termios = termios.tcgetattr(self._input_fd)
        tty.setraw(self._input_fd)

        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_w, False)

        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)

        self._write(_ALT_SCREEN_ENTER + _HIDE_CURSOR + _BRACKETED_PASTE_ENABLE + _CLEAR_SCREEN)
        self._resize_buffers(*self.size())
        logger.debug("terminal initialised at %dx%d", self._width, self._height)

    def fini(self) -> None:
        """Restore the tty and wake any blocked :meth:`poll_event`."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            polling = self._polling

        teardown = _BRACKETED_PASTE_DISABLE
        if self._mouse:
            teardown += _MOUSE_DISABLE
        self._write(_RESET_STYLE + _CLEAR_SCREEN + teardown + _SHOW_CURSOR + _ALT_SCREEN_EXIT)

        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None

        if self._original_termios is not None:
            termios.tcsetattr(self._input_fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None

        if polling:
            self._wake(_WAKE_SHUTDOWN)
        else:
            self._close_pipe()

    def enable_mouse(self) -> None:
        self._mouse = True
        self._write(_MOUSE_ENABLE)

    # -- geometry -----------------------------------------------------------

    def size(self) -> tuple[int, int]:
        try:
            columns, lines = os.get_terminal_size(self._output.fileno())
        except (ValueError, OSError):
            return _FALLBACK_SIZE
        return columns, lines

    def _resize_buffers(self, width: int, height: int) -> None:
        with self._buffer_lock:
            self._width, self._height = width, height
            self._back = [[(" ", self._style)] * width for _ in range(height)]
            # Unknown front rows force a full repaint
            self._front = [[None] * width for _ in range(height)]

    # -- content ------------------------------------------------------------

    def set_style(self, style: Style) -> None:
        self._style = style

    def set_content(self, x: int, y: int, char: str, style: Style) -> None:
        if not char or wcwidth(char[0]) < 1:
            char = " "
        with self._buffer_lock:
            if 0 <= x < self._width and 0 <= y < self._height:
                self._back[y][x] = (char[0], style)

    def clear(self) -> None:
        with self._buffer_lock:
            for row in self._back:
                row[:] = [(" ", self._style)] * self._width

    def show(self) -> None:
        """Repaint every row that differs from what is on screen."""
        out: list[str] = []
        with self._buffer_lock:
            for y, row in enumerate(self._back):
                if row == self._front[y]:
                    continue
                out.append(_MOVE_TO_FMT.format(y + 1, 1))
                current: Style | None = None
                for char, style in row:
                    if style != current:
                        out.append(style.sgr())
                        current = style
                    out.append(char)
                self._front[y] = list(row)

        if out:
            out.append(_RESET_STYLE)
            self._write("".join(out))

    # -- events -------------------------------------------------------------

    def poll_event(self) -> Event | None:
        with self._state_lock:
            if self._closed:
                return None
            self._polling = True

        try:
            return self._next_event()
        finally:
            with self._state_lock:
                self._polling = False
                closed = self._closed
            if closed:
                self._close_pipe()

    def _next_event(self) -> Event | None:
        while not self._pending:
            # An open paste waits for its end marker, however slow.
            pending = self._splitter.pending and not self._splitter.in_paste
            timeout = _ESCAPE_TIMEOUT if pending else None
            readable, _, _ = select.select([self._input_fd, self._wake_r], [], [], timeout)

            if not readable:
                self._pending.extend(self._splitter.flush())
                continue

            if self._wake_r in readable:
                wake = os.read(self._wake_r, 64)
                if _WAKE_SHUTDOWN in wake or self._closed:
                    return None
                if _WAKE_RESIZE in wake:
                    width, height = self.size()
                    self._resize_buffers(width, height)
                    return ResizeEvent(width, height)

            if self._input_fd in readable:
                raw = os.read(self._input_fd, 4096)
                if not raw:
                    return None
                self._pending.extend(self._splitter.feed(self._decoder.decode(raw)))

        return decode_sequence(self._pending.popleft())

    # -- private ------------------------------------------------------------

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        self._wake(_WAKE_RESIZE)

    def _wake(self, byte: bytes) -> None:
        if self._wake_w is None:
            return
        try:
            os.write(self._wake_w, byte)
        except OSError:
            # Pipe full or already closed by the poller
            pass

    def _close_pipe(self) -> None:
        for fd in (self._wake_r, self._wake_w):
            if fd is not None:
                os.close(fd)
        self._wake_r = self._wake_w = None

    def _write(self, data: str) -> None:
        """Write to the output stream and optionally to the write log."""
        try:
            self._output.write(data)
            self._output.flush()
        except OSError:
            logger.warning("terminal write failed", exc_info=True)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass
