"""Spacer drawable that takes up room without painting anything."""

from __future__ import annotations

from termgrid.canvas import Canvas


class ZeroElement:
    """Advance the coordinates by a fixed amount and draw nothing."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = width
        self.height = height

    def draw(self, canvas: Canvas, x: int, y: int) -> tuple[int, int]:
        return x + self.width, y + self.height
