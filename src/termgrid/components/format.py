"""Vertical stack of named drawables."""

from __future__ import annotations

import threading
from collections.abc import Hashable

from termgrid.canvas import Canvas, Drawable
from termgrid.errors import DrawError, check_non_negative, check_not_none


class Format:
    """Named drawables drawn top to bottom in insertion order.

    Every element starts at the column ``draw`` was called with; ``spacing``
    blank rows separate consecutive elements.  The element map is guarded by
    a lock so it can be edited while another task draws.
    """

    def __init__(self, spacing: int = 1) -> None:
        check_non_negative("spacing", spacing)
        self.spacing = spacing
        self._elements: dict[Hashable, Drawable] = {}
        self._lock = threading.Lock()

    def add_element(self, key: Hashable, element: Drawable) -> None:
        """Append *element* under *key*.

        Adding an existing key swaps the element and keeps its position.
        """
        check_not_none("element", element)
        with self._lock:
            self._elements[key] = element

    def replace_element(self, key: Hashable, element: Drawable) -> None:
        """Swap the element stored under *key*; raises ``KeyError`` if absent."""
        check_not_none("element", element)
        with self._lock:
            if key not in self._elements:
                raise KeyError(key)
            self._elements[key] = element

    def remove_element(self, key: Hashable) -> None:
        with self._lock:
            self._elements.pop(key, None)

    def get_element(self, key: Hashable) -> Drawable | None:
        with self._lock:
            return self._elements.get(key)

    def order(self) -> list[Hashable]:
        with self._lock:
            return list(self._elements)

    def __len__(self) -> int:
        with self._lock:
            return len(self._elements)

    def draw(self, canvas: Canvas, x: int, y: int) -> tuple[int, int]:
        with self._lock:
            elements = list(self._elements.items())

        for key, element in elements:
            try:
                _, y = element.draw(canvas, x, y)
            except Exception as err:
                raise DrawError(f"error drawing element {key}") from err
            y += self.spacing

        return x, y
