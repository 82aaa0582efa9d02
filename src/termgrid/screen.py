"""Screen loop: owns the terminal, the frame grid and the event pipeline.

Three activities run concurrently once :meth:`Screen.start` returns:

* a poller task, running the terminal's blocking ``poll_event`` in a worker
  thread and pushing events onto an ordered queue;
* a dispatcher task, taking one event at a time off that queue: resizes
  redraw the frame, keys go to the key queue, everything else is dropped;
* callers, drawing with :meth:`Screen.draw` and reading keys with
  :meth:`Screen.listen_for_key` and friends.

Draws and resize redraws share one ``asyncio.Lock``, so a draw never sees a
half-resized frame.  Draw failures do not stop the loop: they are logged and
delivered through :meth:`Screen.receive_error`.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any

from termgrid.canvas import Drawable
from termgrid.config import ScreenConfig
from termgrid.errors import DrawError, check_not_none
from termgrid.events import Key, KeyEvent, ResizeEvent
from termgrid.grid import Grid
from termgrid.terminal import Terminal

logger = logging.getLogger(__name__)

# Queued behind pending events to stop the dispatcher
_SHUTDOWN = object()

# Left in the key and error queues once the screen is closed
_CLOSED = object()


class ScreenState(enum.Enum):
    CREATED = "created"
    STARTED = "started"
    RUNNING = "running"
    REDRAWING = "redrawing"
    CLOSED = "closed"


class Screen:
    """A full-terminal drawing surface fed by an event loop."""

    def __init__(self, terminal: Terminal, config: ScreenConfig | None = None) -> None:
        self._terminal = terminal
        self._config = config if config is not None else ScreenConfig()
        self._state = ScreenState.CREATED

        self._frame = Grid(0, 0)
        self._last_drawable: Drawable | None = None
        self._closing = False

        self._draw_lock = asyncio.Lock()
        self._events: asyncio.Queue[Any] = asyncio.Queue()
        self._keys: asyncio.Queue[Any] = asyncio.Queue(maxsize=self._config.key_queue_size)
        self._errors: asyncio.Queue[Any] = asyncio.Queue()

        self._poller: asyncio.Task[None] | None = None
        self._dispatcher: asyncio.Task[None] | None = None

    # -- properties ---------------------------------------------------------

    @property
    def state(self) -> ScreenState:
        return self._state

    @property
    def frame(self) -> Grid:
        return self._frame

    @property
    def width(self) -> int:
        return self._frame.width

    @property
    def height(self) -> int:
        return self._frame.height

    @property
    def config(self) -> ScreenConfig:
        return self._config

    # -- lifecycle ----------------------------------------------------------

    async def start(self) -> None:
        """Claim the terminal and start the poller and dispatcher tasks."""
        if self._state is not ScreenState.CREATED:
            raise RuntimeError(f"cannot start a screen in state {self._state.value}")

        self._terminal.init()
        self._terminal.set_style(self._config.bg_style)
        if self._config.enable_mouse:
            self._terminal.enable_mouse()

        width, height = self._terminal.size()
        self._frame.resize(width, height)
        self._state = ScreenState.STARTED

        self._poller = asyncio.create_task(self._poll_events(), name="termgrid-poller")
        self._dispatcher = asyncio.create_task(
            self._dispatch_events(), name="termgrid-dispatcher"
        )
        self._state = ScreenState.RUNNING
        logger.info("screen started at %dx%d", width, height)

    async def close(self) -> None:
        """Stop the loop and hand the terminal back.

        Events already queued are dispatched first.  Listeners blocked on the
        key or error queue are released with ``None``.  Closing twice is a
        programming error and raises ``RuntimeError``.
        """
        if self._state is ScreenState.CLOSED:
            raise RuntimeError("screen is already closed")

        self._closing = True
        timeout = self._config.close_timeout

        if self._dispatcher is not None:
            await self._events.put(_SHUTDOWN)
            try:
                await asyncio.wait_for(self._dispatcher, timeout)
            except TimeoutError:
                logger.warning("dispatcher did not stop within %.1fs", timeout)

        if self._poller is not None:
            self._terminal.fini()
            try:
                await asyncio.wait_for(self._poller, timeout)
            except TimeoutError:
                logger.warning("event poller did not stop within %.1fs", timeout)

        self._state = ScreenState.CLOSED
        _close_queue(self._keys)
        _close_queue(self._errors)
        logger.info("screen closed")

    async def __aenter__(self) -> Screen:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._state is not ScreenState.CLOSED:
            await self.close()

    # -- drawing ------------------------------------------------------------

    async def draw(self, drawable: Drawable) -> tuple[int, int]:
        """Clear the frame, draw *drawable* at the origin and flush.

        Returns the coordinates the drawable advanced to.  If the drawable
        raises, the error is reported through :meth:`receive_error` and the
        origin is returned.
        """
        check_not_none("drawable", drawable)
        if self._state in (ScreenState.CREATED, ScreenState.CLOSED) or self._closing:
            raise RuntimeError(f"cannot draw on a screen in state {self._state.value}")

        async with self._draw_lock:
            self._last_drawable = drawable
            self._state = ScreenState.REDRAWING
            try:
                return await self._render(drawable)
            finally:
                self._state = ScreenState.RUNNING

    async def _render(self, drawable: Drawable) -> tuple[int, int]:
        origin = (self._config.origin_x, self._config.origin_y)
        self._frame.clear()

        try:
            end = drawable.draw(self._frame, *origin)
        except Exception as err:
            logger.exception("drawing %s failed", type(drawable).__name__)
            error = DrawError(f"error drawing {type(drawable).__name__}")
            error.__cause__ = err
            self._errors.put_nowait(error)
            return origin

        self._flush()
        await asyncio.sleep(self._config.redraw_delay)
        return end

    def _flush(self) -> None:
        bg_style = self._config.bg_style
        terminal = self._terminal

        with self._frame.lock:
            for y, row in enumerate(self._frame.rows()):
                for x, cell in enumerate(row):
                    if cell is None:
                        terminal.set_content(x, y, " ", bg_style)
                    else:
                        terminal.set_content(x, y, cell.char, cell.style)
        terminal.show()

    # -- events -------------------------------------------------------------

    async def _poll_events(self) -> None:
        while not self._closing:
            try:
                event = await asyncio.to_thread(self._terminal.poll_event)
            except Exception as err:
                logger.exception("polling the terminal failed")
                self._errors.put_nowait(err)
                break
            if event is None:
                break
            await self._events.put(event)
        logger.debug("event poller stopped")

    async def _dispatch_events(self) -> None:
        while True:
            event = await self._events.get()
            if event is _SHUTDOWN:
                break

            match event:
                case ResizeEvent(width=width, height=height):
                    await self._handle_resize(width, height)
                case KeyEvent():
                    await self._keys.put(event)
                case _:
                    logger.debug("ignoring event %r", event)
        logger.debug("event dispatcher stopped")

    async def _handle_resize(self, width: int, height: int) -> None:
        async with self._draw_lock:
            logger.debug("resizing frame to %dx%d", width, height)
            self._state = ScreenState.REDRAWING
            try:
                self._frame.resize(width, height)
                self._frame.clear()
                if self._last_drawable is None:
                    self._flush()
                else:
                    await self._render(self._last_drawable)
            finally:
                self._state = ScreenState.RUNNING

    # -- input --------------------------------------------------------------

    async def listen_for_key(self) -> KeyEvent | None:
        """Wait for the next key press; ``None`` once the screen is closed."""
        return await _take(self._keys)

    async def listen_for_char(self) -> str | None:
        """Wait for the next key and map it to a character.

        Runes map to themselves, enter to ``"\\n"`` and backspace to
        ``"\\b"``.  Any other key, or a closed screen, gives ``None``.
        """
        event = await self.listen_for_key()
        if event is None:
            return None

        match event.key:
            case Key.RUNE:
                return event.char
            case Key.ENTER:
                return "\n"
            case Key.BACKSPACE:
                return "\b"
            case _:
                return None

    async def listen_for_number(self) -> int:
        """Read decimal digits until enter; backspace deletes the last one.

        Raises ``ValueError`` if no digit was entered.
        """
        digits: list[str] = []
        while True:
            event = await self.listen_for_key()
            if event is None:
                break

            match event:
                case KeyEvent(key=Key.ENTER):
                    break
                case KeyEvent(key=Key.BACKSPACE):
                    if digits:
                        digits.pop()
                case KeyEvent(key=Key.RUNE, char=char) if "0" <= char <= "9":
                    digits.append(char)

        if not digits:
            raise ValueError("no number was entered")
        return int("".join(digits))

    async def receive_error(self) -> Exception | None:
        """Wait for the next error from the loop; ``None`` once closed."""
        return await _take(self._errors)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _take(queue: asyncio.Queue[Any]) -> Any:
    item = await queue.get()
    if item is _CLOSED:
        # Leave the marker for the next listener
        queue.put_nowait(_CLOSED)
        return None
    return item


def _close_queue(queue: asyncio.Queue[Any]) -> None:
    if queue.full():
        dropped = queue.get_nowait()
        logger.debug("dropping %r to close a full queue", dropped)
    queue.put_nowait(_CLOSED)
