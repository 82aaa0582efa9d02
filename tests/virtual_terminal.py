"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

Events are scripted with :meth:`VirtualTerminal.push_event`; painted cells
and ``show()`` calls are recorded for assertions.
"""

from __future__ import annotations

import queue

from termgrid.events import Event, ResizeEvent
from termgrid.style import DEFAULT_STYLE, Style


class VirtualTerminal:
    """In-memory terminal that records everything the screen paints."""

    def __init__(self, width: int = 40, height: int = 10) -> None:
        self._width = width
        self._height = height
        self._events: queue.Queue[Event | None] = queue.Queue()
        self.style = DEFAULT_STYLE
        self.content: dict[tuple[int, int], tuple[str, Style]] = {}
        self.initialised = False
        self.finished = False
        self.mouse_enabled = False
        self.show_count = 0
        self.clear_count = 0

    # -- Terminal protocol: lifecycle ---------------------------------------

    def init(self) -> None:
        self.initialised = True

    def fini(self) -> None:
        self.finished = True
        self._events.put(None)

    def enable_mouse(self) -> None:
        self.mouse_enabled = True

    # -- Terminal protocol: output ------------------------------------------

    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def set_style(self, style: Style) -> None:
        self.style = style

    def set_content(self, x: int, y: int, char: str, style: Style) -> None:
        if 0 <= x < self._width and 0 <= y < self._height:
            self.content[(x, y)] = (char, style)

    def show(self) -> None:
        self.show_count += 1

    def clear(self) -> None:
        self.clear_count += 1
        self.content.clear()

    # -- Terminal protocol: input -------------------------------------------

    def poll_event(self) -> Event | None:
        if self.finished:
            return None
        return self._events.get()

    # -- Test helpers -------------------------------------------------------

    def push_event(self, event: Event) -> None:
        self._events.put(event)

    def resize(self, width: int, height: int) -> None:
        """Change the size and queue the matching resize event."""
        self._width = width
        self._height = height
        self.push_event(ResizeEvent(width, height))

    def lines(self) -> list[str]:
        return [
            "".join(self.content.get((x, y), (" ", self.style))[0] for x in range(self._width))
            for y in range(self._height)
        ]

    def style_at(self, x: int, y: int) -> Style | None:
        slot = self.content.get((x, y))
        return None if slot is None else slot[1]
